"""Split executor: cut one document into the page ranges of the job index."""

from pathlib import Path

from pypdf import PdfReader, PdfWriter

from pdfbatch.actions._utils import discard, write_document
from pdfbatch.actions.base import BaseAction
from pdfbatch.actions.registry import register_action
from pdfbatch.config import ProcessingAction
from pdfbatch.exceptions import SplitRangeError
from pdfbatch.index import SplitRange, read_split_index
from pdfbatch.job import list_documents
from pdfbatch.logging_config import get_logger

logger = get_logger(__name__)


def is_out_of_range(entry: SplitRange, page_count: int) -> bool:
    return (
        entry.first_page < 1
        or entry.last_page < entry.first_page
        or entry.first_page > page_count
        or entry.last_page > page_count
    )


def extract_range(reader: PdfReader, entry: SplitRange, target: Path) -> Path:
    """Write pages ``entry.first_page``..``entry.last_page`` of ``reader`` to ``target``.

    Raises:
        SplitRangeError: If the extraction failed because the range does not
            fit the document; any other failure propagates unchanged
    """
    page_count = len(reader.pages)
    try:
        if entry.first_page < 1 or entry.last_page < entry.first_page:
            raise ValueError(f"Invalid page range {entry.first_page}-{entry.last_page}")
        writer = PdfWriter()
        writer.append(reader, pages=(entry.first_page - 1, entry.last_page), import_outline=False)
        write_document(writer, target)
    except Exception as e:
        if is_out_of_range(entry, page_count):
            raise SplitRangeError(
                entry.counter, entry.filename, entry.first_page, entry.last_page, page_count
            ) from e
        raise
    return target


@register_action(ProcessingAction.SPLIT)
class SplitAction(BaseAction):
    """Whole-action executor: any failed range discards every split output."""

    module = "split"

    def run(self) -> None:
        job = self.job
        documents = list_documents(job.workspace)
        if job.errors.has_errors:
            return

        try:
            source = self.single_document(documents)
        except Exception as e:
            self.record(e, job.name)
            return

        try:
            ranges = read_split_index(job.index_path)
        except Exception as e:
            self.record(e, job.index_path.name, "read_index")
            return

        logger.info("Splitting %s into %d file(s)", source.name, len(ranges))
        created: list[Path] = []
        try:
            with PdfReader(source) as reader:
                for entry in ranges:
                    target = job.workspace.output_dir / entry.filename
                    created.append(target)
                    extract_range(reader, entry, target)
                    logger.debug(
                        "Range %d: pages %d-%d -> %s",
                        entry.counter, entry.first_page, entry.last_page, entry.filename,
                    )
        except Exception as e:
            discard(created)
            self.record(e, source.name)
            return

        source.unlink()
        logger.info("Created %d file(s)", len(created))
