"""Text extraction executor."""

from pathlib import Path

from pypdf import PdfReader

from pdfbatch.actions.base import PerFileAction
from pdfbatch.actions.registry import register_action
from pdfbatch.config import ProcessingAction
from pdfbatch.constants import PAGE_MARKER_DELIMITER, PAGE_MARKER_WIDTH


def page_marker(page_number: int) -> str:
    """Marker preceding a page's text, e.g. ``||P0000000001||``."""
    return f"{PAGE_MARKER_DELIMITER}P{page_number:0{PAGE_MARKER_WIDTH}d}{PAGE_MARKER_DELIMITER}"


def format_page(page_number: int, text: str) -> str:
    return f"\n{page_marker(page_number)}\n\n{text}\n"


@register_action(ProcessingAction.TEXT_CONVERT)
class TextConvertAction(PerFileAction):
    module = "text_convert"

    def output_path(self, source: Path) -> Path:
        return self.job.workspace.output_dir / f"{source.stem}.txt"

    def process_document(self, source: Path, target: Path) -> None:
        with PdfReader(source) as reader, open(target, "w", encoding="utf-8") as f:
            for page_number, page in enumerate(reader.pages, start=1):
                f.write(format_page(page_number, page.extract_text() or ""))
