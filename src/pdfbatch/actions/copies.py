"""Make-copies executor: repeat each document N times into one output."""

from pathlib import Path

from pypdf import PdfReader, PdfWriter

from pdfbatch.actions._utils import fold_unit, write_optimized
from pdfbatch.actions.base import PerFileAction
from pdfbatch.actions.registry import register_action
from pdfbatch.config import ProcessingAction
from pdfbatch.exceptions import ConfigError


@register_action(ProcessingAction.MAKE_COPIES)
class MakeCopiesAction(PerFileAction):
    module = "copies"

    def output_path(self, source: Path) -> Path:
        return self.job.workspace.output_dir / f"{source.stem}.pdf"

    def process_document(self, source: Path, target: Path) -> None:
        settings = self.job.config.settings
        count = settings.make_copies.number_of_copies
        if count < 1:
            raise ConfigError(
                f"NumberOfCopies must be at least 1, got {count}",
                context={"field": "Settings.MakeCopies.NumberOfCopies"},
            )

        merged = PdfWriter()
        with PdfReader(source) as reader:
            for position in range(1, count + 1):
                fold_unit(merged, reader, position, source.name, settings.concatenation)
            write_optimized(merged, target)
