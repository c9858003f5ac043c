"""Scale/shift/rotate executor.

Runs in trigger mode with the request from the job settings, or in
index-driven mode when the job ships ``<archive stem>.idx``.
"""

from pathlib import Path

from pypdf import PdfReader

from pdfbatch.actions._utils import write_document
from pdfbatch.actions.base import PerFileAction
from pdfbatch.actions.registry import register_action
from pdfbatch.config import ProcessingAction, Settings
from pdfbatch.exceptions import TransformError, TransformPolicyError
from pdfbatch.index import read_override_index
from pdfbatch.logging_config import get_logger
from pdfbatch.transforms import (
    PageOverride,
    TransformRequest,
    apply_page_overrides,
    check_overrides,
    check_request,
    scale_and_rotate_document,
)

logger = get_logger(__name__)


def build_request(settings: Settings) -> TransformRequest:
    """Trigger-mode request from the job settings."""
    rotate = settings.scale_and_rotate
    return TransformRequest(
        width=settings.target_page_size.page_width,
        height=settings.target_page_size.page_height,
        scale_x=rotate.scale_x,
        scale_y=rotate.scale_y,
        shift_x=rotate.shift_x,
        shift_y=rotate.shift_y,
        rotation=rotate.degrees_rotation,
        trigger=rotate.trigger,
    )


@register_action(ProcessingAction.SCALE_AND_ROTATE)
class ScaleAndRotateAction(PerFileAction):
    module = "scale_rotate"

    def __init__(self, job):
        super().__init__(job)
        self.overrides: list[PageOverride] | None = None

    def keep_files(self) -> tuple[Path, ...]:
        return (self.job.index_path,)

    def prepare(self, documents: list[Path]) -> None:
        if not self.job.index_path.exists():
            request = build_request(self.job.config.settings)
            logger.info(
                "Trigger %s, rotate %d, target %gx%g",
                request.trigger.value, request.rotation, request.width, request.height,
            )
            return

        self.single_document(documents)
        self.overrides = read_override_index(self.job.index_path)
        logger.info("Index-driven mode: %d override(s)", len(self.overrides))

    def process_document(self, source: Path, target: Path) -> None:
        with PdfReader(source) as reader:
            if self.overrides is not None:
                result = check_overrides(self.overrides)
                if not result.valid:
                    raise TransformError(result.message, context={"file": source.name})
                writer = apply_page_overrides(reader, self.overrides)
            else:
                request = build_request(self.job.config.settings)
                result = check_request(request)
                if not result.valid:
                    error_class = TransformPolicyError if result.policy_violation else TransformError
                    raise error_class(result.message, context={"file": source.name})
                writer = scale_and_rotate_document(reader, request)
            write_document(writer, target)
