"""Request validation and trigger selection for the page transform engine.

Validation returns a result object the caller inspects before any page is
drawn; it never raises.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from pdfbatch.config import Trigger
from pdfbatch.constants import ROTATE_ANGLES
from pdfbatch.transforms.base import PageOverride, TransformRequest


@dataclass
class ValidationResult:
    """Result of validating a transform request.

    Attributes:
        valid: True if no errors were found
        errors: List of error messages
        policy_violation: True if an error comes from the trigger policy
            rather than from a bad value
    """

    valid: bool = True
    errors: list[str] = field(default_factory=list)
    policy_violation: bool = False

    def add_error(self, message: str, policy: bool = False) -> None:
        """Add an error and mark result as invalid."""
        self.errors.append(message)
        self.valid = False
        if policy:
            self.policy_violation = True

    @property
    def message(self) -> str:
        return "; ".join(self.errors)


def _check_rotation(result: ValidationResult, rotation: int, where: str = "") -> None:
    if rotation not in ROTATE_ANGLES:
        result.add_error(f"{where}Allowed rotation values : 0, 90, 180, or 270 (got {rotation})")


def _check_size(result: ValidationResult, width: float, height: float, where: str = "") -> None:
    if width <= 0 or height <= 0:
        result.add_error(f"{where}Target page size must be positive (got {width} x {height})")


def check_request(request: TransformRequest) -> ValidationResult:
    """Validate a trigger-mode request before a document is drawn."""
    result = ValidationResult()
    _check_size(result, request.width, request.height)
    _check_rotation(result, request.rotation)
    if request.rotation == 180 and request.trigger.is_orientation_based:
        result.add_error(
            f"Cannot rotate 180 with trigger {request.trigger.value}: an orientation "
            "difference never calls for a same-orientation flip",
            policy=True,
        )
    return result


def check_overrides(overrides: Sequence[PageOverride]) -> ValidationResult:
    """Validate every entry of a per-page override list."""
    result = ValidationResult()
    for override in overrides:
        where = f"Override {override.counter} (page {override.page}): "
        if override.page < 1:
            result.add_error(f"{where}Page numbers start at 1")
        _check_size(result, override.width, override.height, where)
        _check_rotation(result, override.rotation, where)
    return result


def is_triggered(trigger: Trigger, page_number: int) -> bool:
    """Whether a page-number based trigger picks a page.

    ``page_number`` is 1-indexed. Orientation-based triggers are decided by
    the planner from the page geometry instead.
    """
    if trigger == Trigger.ALL:
        return True
    if trigger == Trigger.ODD:
        return page_number % 2 != 0
    if trigger == Trigger.EVEN:
        return page_number % 2 == 0
    raise ValueError(f"Trigger {trigger.value} is decided by page orientation")
