"""Page transform engine for pdfbatch.

Planning is pure and works on PageGeometry values; drawing turns the plans
into pages with pypdf.

Usage:
    from pdfbatch.transforms import TransformRequest, check_request, scale_and_rotate_document

    request = TransformRequest(width=792, height=612, rotation=90, trigger=Trigger.XY_DIFF)
    if check_request(request).valid:
        writer = scale_and_rotate_document(reader, request)
"""

from pdfbatch.transforms.base import (
    PageGeometry,
    PageOverride,
    PageTransform,
    TransformRequest,
)
from pdfbatch.transforms.draw import (
    apply_page_overrides,
    draw_page,
    scale_and_rotate_document,
)
from pdfbatch.transforms.planner import (
    effective_rotation,
    find_override,
    orientation_differs,
    passthrough,
    plan_override_page,
    plan_page,
    plan_pages,
)
from pdfbatch.transforms.policy import (
    ValidationResult,
    check_overrides,
    check_request,
    is_triggered,
)
from pdfbatch.transforms._utils import (
    get_page_dimensions,
    get_page_geometry,
    is_landscape,
)

__all__ = [
    # Value types
    "PageGeometry",
    "PageOverride",
    "PageTransform",
    "TransformRequest",
    # Validation
    "ValidationResult",
    "check_request",
    "check_overrides",
    "is_triggered",
    # Planning
    "effective_rotation",
    "orientation_differs",
    "passthrough",
    "plan_page",
    "plan_pages",
    "find_override",
    "plan_override_page",
    # Drawing
    "draw_page",
    "scale_and_rotate_document",
    "apply_page_overrides",
    # Utilities
    "get_page_dimensions",
    "get_page_geometry",
    "is_landscape",
]
