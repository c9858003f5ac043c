"""Smart-save executor: flatten, strip, then re-write each document compactly."""

from pathlib import Path

from pypdf import PasswordType, PdfReader, PdfWriter

from pdfbatch.actions._utils import flatten_form_fields, strip_comments, write_optimized
from pdfbatch.actions.base import PerFileAction
from pdfbatch.actions.registry import register_action
from pdfbatch.config import ProcessingAction, SmartSavingSettings
from pdfbatch.exceptions import PreconditionError
from pdfbatch.logging_config import get_logger

logger = get_logger(__name__)


def unlock(reader: PdfReader, settings: SmartSavingSettings) -> None:
    """Open an encrypted document with the empty user password.

    A document protected only by an owner password can always be re-saved.
    Flattening or stripping it edits the document, which needs RemovePassword.

    Raises:
        PreconditionError: If the document needs a real user password, or
            an editing step was requested without RemovePassword
    """
    if not reader.is_encrypted:
        return
    if reader.decrypt("") == PasswordType.NOT_DECRYPTED:
        raise PreconditionError("Document needs a user password to be opened")
    edits = settings.flatten_acroforms or settings.strip_comments
    if edits and not settings.remove_password:
        raise PreconditionError(
            "Document is password protected; set RemovePassword to flatten or strip it"
        )


@register_action(ProcessingAction.SMART_SAVE)
class SmartSaveAction(PerFileAction):
    module = "smart_save"

    def output_path(self, source: Path) -> Path:
        return self.job.workspace.output_dir / f"{source.stem}.pdf"

    def process_document(self, source: Path, target: Path) -> None:
        settings = self.job.config.settings.smart_saving
        with PdfReader(source) as reader:
            unlock(reader, settings)
            writer = PdfWriter(clone_from=reader)

            if settings.flatten_acroforms and flatten_form_fields(writer):
                logger.debug("Flattened form fields of %s", source.name)
            if settings.strip_comments:
                strip_comments(writer)
                logger.debug("Stripped annotations and outline of %s", source.name)
            write_optimized(writer, target)
