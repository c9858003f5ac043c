"""Per-page transform planning.

Everything here is pure: given page geometry and a request, compute the
PageTransform that the drawing step applies. Callers validate requests
with :mod:`pdfbatch.transforms.policy` first.
"""

from collections.abc import Sequence

from pdfbatch.config import Trigger
from pdfbatch.exceptions import TransformError
from pdfbatch.transforms._utils import is_landscape
from pdfbatch.transforms.base import (
    PageGeometry,
    PageOverride,
    PageTransform,
    TransformRequest,
)
from pdfbatch.transforms.policy import is_triggered


def effective_rotation(requested: int, stored: int) -> int:
    """Rotation to draw with once the stored /Rotate is baked out.

    Content is copied without its stored rotation, so a page stored at 90
    is drawn at 270 and one stored at 270 is drawn at 90. Stored 0 and 180
    leave the request untouched.
    """
    if stored == 90:
        return 270
    if stored == 270:
        return 90
    return requested


def _placement(
    geometry: PageGeometry,
    width: float,
    height: float,
    rotation: int,
    scale_x: float,
    scale_y: float,
    auto_scale: bool,
) -> tuple[float, float, float, float]:
    """Compute (scale_x, scale_y, translate_x, translate_y) for a rotation.

    Translations are in pre-scale units and keep the rotated content in the
    positive quadrant of the destination page.
    """
    tx, ty = 0.0, 0.0
    if rotation == 90:
        tx = width
    elif rotation == 180:
        tx, ty = width, height
    elif rotation == 270:
        ty = height

    if not auto_scale:
        return scale_x, scale_y, tx, ty

    if geometry.width <= 0 or geometry.height <= 0:
        raise TransformError(
            f"Cannot auto-scale a page of size {geometry.width} x {geometry.height}"
        )

    if rotation in (0, 180):
        scale_x = width / geometry.width
        scale_y = height / geometry.height
        if rotation == 180:
            tx, ty = geometry.width, geometry.height
    else:
        # Quarter turn: source height runs along the destination width
        scale_x = width / geometry.height
        scale_y = height / geometry.width
        if rotation == 90:
            tx = geometry.height
        else:
            ty = geometry.width

    return scale_x, scale_y, tx, ty


def _build(
    geometry: PageGeometry,
    width: float,
    height: float,
    rotation: int,
    scale_x: float,
    scale_y: float,
    shift_x: float,
    shift_y: float,
    auto_scale: bool,
    selected: bool,
) -> PageTransform:
    sx, sy, tx, ty = _placement(geometry, width, height, rotation, scale_x, scale_y, auto_scale)
    return PageTransform(
        width=width,
        height=height,
        selected=selected,
        scale_x=sx,
        scale_y=sy,
        shift_x=shift_x,
        shift_y=shift_y,
        rotation=rotation,
        translate_x=tx,
        translate_y=ty,
        origin_x=geometry.left,
        origin_y=geometry.bottom,
    )


def passthrough(geometry: PageGeometry, width: float | None = None, height: float | None = None) -> PageTransform:
    """Copy a page unscaled and unrotated onto a page of the given size.

    Without a size the destination keeps the source media box size.
    """
    return PageTransform(
        width=geometry.width if width is None else width,
        height=geometry.height if height is None else height,
        selected=False,
        origin_x=geometry.left,
        origin_y=geometry.bottom,
    )


def orientation_differs(request: TransformRequest, geometry: PageGeometry) -> bool:
    """Whether a page needs a quarter turn to match the target orientation.

    Square pages count as needing one for either target orientation.
    """
    if request.wants_landscape:
        return not is_landscape(geometry.width, geometry.height)
    return geometry.width >= geometry.height


def plan_page(request: TransformRequest, geometry: PageGeometry, page_number: int) -> PageTransform:
    """Plan one page in trigger mode.

    Args:
        request: A request that passed ``check_request``
        geometry: Source page geometry
        page_number: 1-indexed page number

    Returns:
        The PageTransform to draw
    """
    rotation = effective_rotation(request.rotation, geometry.rotation)

    if request.trigger.is_orientation_based:
        selected = orientation_differs(request, geometry)
        if request.trigger == Trigger.XY_DIFF_DISABLE_SQUARE_ROTATION and geometry.is_square:
            selected = False
        if not selected:
            # Orientation already matches: scale and shift only
            rotation = 0
    else:
        selected = is_triggered(request.trigger, page_number)
        if not selected:
            return passthrough(geometry, request.width, request.height)

    return _build(
        geometry,
        request.width,
        request.height,
        rotation,
        request.scale_x,
        request.scale_y,
        request.shift_x,
        request.shift_y,
        request.auto_scale,
        selected,
    )


def plan_pages(request: TransformRequest, geometries: Sequence[PageGeometry]) -> list[PageTransform]:
    """Plan every page of a document in trigger mode."""
    return [
        plan_page(request, geometry, page_number)
        for page_number, geometry in enumerate(geometries, start=1)
    ]


def find_override(overrides: Sequence[PageOverride], page_number: int) -> PageOverride | None:
    """Return the first override for a page; later duplicates are ignored."""
    for override in overrides:
        if override.page == page_number:
            return override
    return None


def plan_override_page(
    overrides: Sequence[PageOverride],
    geometry: PageGeometry,
    page_number: int,
) -> PageTransform:
    """Plan one page in index mode.

    Pages without an override are copied unchanged at their own size.
    """
    override = find_override(overrides, page_number)
    if override is None:
        return passthrough(geometry)

    return _build(
        geometry,
        override.width,
        override.height,
        effective_rotation(override.rotation, geometry.rotation),
        override.scale_x,
        override.scale_y,
        override.shift_x,
        override.shift_y,
        override.auto_scale,
        True,
    )
