"""Concatenate executor: merge the documents named by the job index."""

from pypdf import PdfReader, PdfWriter

from pdfbatch.actions._utils import fold_unit, write_optimized
from pdfbatch.actions.base import BaseAction
from pdfbatch.actions.registry import register_action
from pdfbatch.config import ProcessingAction
from pdfbatch.exceptions import MergeError
from pdfbatch.index import read_concat_index
from pdfbatch.job import list_documents
from pdfbatch.logging_config import get_logger

logger = get_logger(__name__)


@register_action(ProcessingAction.CONCATENATE)
class ConcatenateAction(BaseAction):
    """Whole-action executor producing ``<archive stem>.pdf``.

    Each source is deleted as soon as it has been folded in, so after a
    failure the consumed inputs are exactly those before the failing unit.
    """

    module = "concatenate"

    def run(self) -> None:
        job = self.job
        documents = list_documents(job.workspace)
        if job.errors.has_errors:
            return

        try:
            entries = read_concat_index(job.index_path)
        except Exception as e:
            self.record(e, job.index_path.name, "read_index")
            return

        logger.info("Concatenating %d of %d PDF file(s)", len(entries), len(documents))
        settings = job.config.settings.concatenation
        target = job.workspace.output_dir / f"{job.stem}.pdf"
        merged = PdfWriter()
        try:
            for position, entry in enumerate(entries, start=1):
                source = job.workspace.root / entry.filename
                try:
                    with PdfReader(source) as reader:
                        fold_unit(merged, reader, position, entry.filename, settings)
                except MergeError:
                    raise
                except Exception as e:
                    raise MergeError(MergeError.MERGING, position, entry.filename, str(e)) from e
                source.unlink()
                logger.debug("Merged unit %d: %s", position, entry.filename)

            write_optimized(merged, target)
        except Exception as e:
            target.unlink(missing_ok=True)
            self.record(e, job.name)
            return

        logger.info("Created: %s", target.name)
