# geometry.py

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas coordinates (left/top edge + size)."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)

    def contains_point(self, x: float, y: float) -> bool:
        # Edges count as inside
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def intersection(self, other: 'Rect') -> 'Rect':
        """Returns the overlap of two rectangles (zero-sized when they do not touch)."""
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Rect(left, top, max(0, right - left), max(0, bottom - top))


@dataclass(frozen=True)
class FitTransform:
    """Result of a cover fit: uniform scale, centre point and absolute clip region."""
    scale: float
    center_x: float
    center_y: float
    clip: Rect


def cover_fit(image_width: float, image_height: float, frame: Rect) -> FitTransform:
    """
    Computes the 'cover' transform that fills ``frame`` with an image while
    preserving its aspect ratio. The overflowing dimension is cropped by the
    clip region, which is the frame's own rectangle in absolute coordinates.

    A proportionally wider image is scaled to the frame height (its scaled width
    is then >= the frame width); otherwise it is scaled to the frame width.
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Invalid image size: {image_width}x{image_height}")

    frame_ratio = frame.width / frame.height
    image_ratio = image_width / image_height

    if image_ratio > frame_ratio:
        scale = frame.height / image_height
    else:
        scale = frame.width / image_width

    center_x, center_y = frame.center
    return FitTransform(scale=scale, center_x=center_x, center_y=center_y,
                        clip=Rect(frame.left, frame.top, frame.width, frame.height))


def scaled_size(image_width: float, image_height: float, scale: float) -> Tuple[float, float]:
    return (image_width * scale, image_height * scale)
