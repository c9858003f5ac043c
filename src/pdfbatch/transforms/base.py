"""Value types for the page transform engine."""

from dataclasses import dataclass

from pypdf import Transformation

from pdfbatch.config import Trigger


@dataclass(frozen=True)
class PageGeometry:
    """What the engine needs to know about a source page.

    Attributes:
        width: Media box width in points
        height: Media box height in points
        rotation: Stored /Rotate value (0, 90, 180 or 270)
        left: Media box lower-left x
        bottom: Media box lower-left y
    """

    width: float
    height: float
    rotation: int = 0
    left: float = 0.0
    bottom: float = 0.0

    @property
    def is_square(self) -> bool:
        return self.width == self.height


@dataclass(frozen=True)
class TransformRequest:
    """One global transform applied to a whole document (trigger mode).

    A scale of (0, 0) asks the engine to derive the factors from the
    target size.
    """

    width: float
    height: float
    scale_x: float = 0.0
    scale_y: float = 0.0
    shift_x: float = 0.0
    shift_y: float = 0.0
    rotation: int = 0
    trigger: Trigger = Trigger.ALL

    @property
    def auto_scale(self) -> bool:
        return self.scale_x == 0 and self.scale_y == 0

    @property
    def wants_landscape(self) -> bool:
        return self.width > self.height


@dataclass(frozen=True)
class PageOverride:
    """An explicit per-page transform from an override index (index mode)."""

    page: int
    width: float
    height: float
    scale_x: float = 0.0
    scale_y: float = 0.0
    shift_x: float = 0.0
    shift_y: float = 0.0
    rotation: int = 0
    counter: int = 0

    @property
    def auto_scale(self) -> bool:
        return self.scale_x == 0 and self.scale_y == 0


@dataclass(frozen=True)
class PageTransform:
    """Drawing instructions for one destination page.

    The source content is mapped onto a new page of ``width`` x ``height``
    by: move the media box origin to (0, 0), rotate counter-clockwise by
    ``rotation``, translate by (``translate_x``, ``translate_y``), scale by
    (``scale_x``, ``scale_y``), then shift by (``shift_x``, ``shift_y``).

    Attributes:
        selected: Whether the page was picked for rotation by the policy
    """

    width: float
    height: float
    selected: bool = False
    scale_x: float = 1.0
    scale_y: float = 1.0
    shift_x: float = 0.0
    shift_y: float = 0.0
    rotation: int = 0
    translate_x: float = 0.0
    translate_y: float = 0.0
    origin_x: float = 0.0
    origin_y: float = 0.0

    def to_transformation(self) -> Transformation:
        """Build the pypdf transformation for this page."""
        op = Transformation()
        if self.origin_x or self.origin_y:
            op = op.translate(tx=-self.origin_x, ty=-self.origin_y)
        if self.rotation:
            op = op.rotate(self.rotation)
        return (
            op.translate(tx=self.translate_x, ty=self.translate_y)
            .scale(sx=self.scale_x, sy=self.scale_y)
            .translate(tx=self.shift_x, ty=self.shift_y)
        )

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        """Map a source point onto the destination page."""
        return tuple(self.to_transformation().apply_on((x, y)))
