"""Base classes for the action executors."""

from abc import ABC, abstractmethod
from pathlib import Path

from pdfbatch.config import ProcessingAction
from pdfbatch.exceptions import PreconditionError
from pdfbatch.job import Job, list_documents, pass_through_files
from pdfbatch.logging_config import get_logger

logger = get_logger(__name__)


class BaseAction(ABC):
    """Abstract base class for all executors.

    An executor runs one action over the job's working set. It never raises
    for document failures: they are recorded in ``job.errors``.
    """

    # Set by @register_action
    action: ProcessingAction

    # Name used as the "Module" of error records
    module: str = ""

    def __init__(self, job: Job):
        self.job = job

    @abstractmethod
    def run(self) -> None:
        """Run the action over the job's working set."""

    def record(self, exc: BaseException, filename: str, step: str | None = None) -> None:
        self.job.errors.record_failure(exc, filename, step or self.module, self.module)

    def single_document(self, documents: list[Path]) -> Path:
        """Return the only document of the working set.

        Raises:
            PreconditionError: If there is not exactly one document
        """
        if len(documents) != 1:
            raise PreconditionError(
                f"Zip contains {len(documents)} PDFs; {self.action.value} needs exactly one",
                context={"documents": len(documents)},
            )
        return documents[0]


class PerFileAction(BaseAction):
    """Executor whose documents succeed or fail independently.

    Non-PDF files are passed through to the output first. Each document
    writes at most one output; a failed document's output is deleted and
    the loop moves on. Every input is removed from the working set once it
    has been handled.
    """

    def run(self) -> None:
        job = self.job
        pass_through_files(job.workspace, keep=self.keep_files())
        documents = list_documents(job.workspace)

        if job.errors.has_errors:
            return
        if not documents:
            logger.warning("No PDF files found in: %s", job.name)
            return

        logger.info("Found %d PDF file(s) to process", len(documents))
        try:
            self.prepare(documents)
        except Exception as e:
            self.record(e, job.name, f"{self.module}_prepare")
            return

        succeeded = 0
        for source in documents:
            if self.process_one(source):
                succeeded += 1
        logger.info(
            "Processing complete: %d succeeded, %d failed",
            succeeded,
            len(documents) - succeeded,
        )

    def process_one(self, source: Path) -> bool:
        target = self.output_path(source)
        logger.info("Processing: %s", source.name)
        try:
            self.process_document(source, target)
        except Exception as e:
            self.record(e, source.name)
            target.unlink(missing_ok=True)
            return False
        finally:
            source.unlink(missing_ok=True)
        logger.info("  Created: %s", target.name)
        return True

    def keep_files(self) -> tuple[Path, ...]:
        """Files of the working set that must not be passed through."""
        return ()

    def prepare(self, documents: list[Path]) -> None:
        """Check the working set before any document is processed."""

    def output_path(self, source: Path) -> Path:
        return self.job.workspace.output_dir / source.name

    @abstractmethod
    def process_document(self, source: Path, target: Path) -> None:
        """Process one document into ``target``."""
