"""Draw planned pages into a new pypdf document."""

from collections.abc import Sequence

from pypdf import PageObject, PdfReader, PdfWriter

from pdfbatch.logging_config import get_logger
from pdfbatch.transforms._utils import get_page_geometry
from pdfbatch.transforms.base import PageOverride, PageTransform, TransformRequest
from pdfbatch.transforms.planner import plan_override_page, plan_page

logger = get_logger(__name__)


def draw_page(writer: PdfWriter, source: PageObject, transform: PageTransform) -> PageObject:
    """Append a new page to ``writer`` and draw ``source`` onto it.

    The source's stored /Rotate is not carried over; its content is placed
    with the transform matrix only.
    """
    page = writer.add_blank_page(width=transform.width, height=transform.height)
    page.merge_transformed_page(source, transform.to_transformation())
    return page


def scale_and_rotate_document(reader: PdfReader, request: TransformRequest) -> PdfWriter:
    """Produce a transformed copy of every page in trigger mode.

    Args:
        reader: Source document
        request: A request that passed ``check_request``

    Returns:
        A writer holding one output page per source page
    """
    writer = PdfWriter()
    selected = 0
    for page_number, source in enumerate(reader.pages, start=1):
        transform = plan_page(request, get_page_geometry(source), page_number)
        if transform.selected:
            selected += 1
        draw_page(writer, source, transform)
    logger.debug(
        "Trigger %s selected %d of %d pages", request.trigger.value, selected, len(reader.pages)
    )
    return writer


def apply_page_overrides(reader: PdfReader, overrides: Sequence[PageOverride]) -> PdfWriter:
    """Produce a transformed copy of every page in index mode."""
    writer = PdfWriter()
    for page_number, source in enumerate(reader.pages, start=1):
        transform = plan_override_page(overrides, get_page_geometry(source), page_number)
        draw_page(writer, source, transform)
    return writer
