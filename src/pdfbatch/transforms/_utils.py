"""Shared utilities for transforms."""

from pypdf import PageObject

from pdfbatch.transforms.base import PageGeometry


def get_page_dimensions(page: PageObject) -> tuple[float, float]:
    """Get page width and height in points."""
    mediabox = page.mediabox
    width = float(mediabox.width)
    height = float(mediabox.height)
    return width, height


def get_stored_rotation(page: PageObject) -> int:
    """Get the page's /Rotate value folded into 0..359."""
    return int(page.rotation) % 360


def get_page_geometry(page: PageObject) -> PageGeometry:
    """Describe a pypdf page for the transform engine."""
    width, height = get_page_dimensions(page)
    mediabox = page.mediabox
    return PageGeometry(
        width=width,
        height=height,
        rotation=get_stored_rotation(page),
        left=float(mediabox.left),
        bottom=float(mediabox.bottom),
    )


def is_landscape(width: float, height: float) -> bool:
    """Check if dimensions describe a landscape page."""
    return width > height
