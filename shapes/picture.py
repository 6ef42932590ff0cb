import logging
from typing import Optional, Tuple

from PIL import Image

from shapes.base_shape import Shape
from utils.geometry import FitTransform, Rect, scaled_size

logger = logging.getLogger(__name__)


class Picture(Shape):
    """
    A decoded image placed on the surface.

    The picture keeps its natural pixel size and a uniform ``scale``; its
    bounds are the scaled image box. ``clip`` is an absolute rectangle outside
    of which nothing is drawn (None means unclipped).
    """

    def __init__(self, content: Image.Image, **kwargs):
        self.content: Optional[Image.Image] = content
        self.natural_width, self.natural_height = content.size
        self.scale: float = 1.0
        self.clip: Optional[Rect] = None
        self._scaled_cache: Optional[Tuple[Tuple[int, int], Image.Image]] = None
        super().__init__(left=0, top=0, width=self.natural_width, height=self.natural_height, **kwargs)

    @property
    def scaled_size(self) -> Tuple[float, float]:
        return scaled_size(self.natural_width, self.natural_height, self.scale)

    @property
    def scaled_width(self) -> float:
        return self.scaled_size[0]

    @property
    def scaled_height(self) -> float:
        return self.scaled_size[1]

    @property
    def disposed(self) -> bool:
        return self.content is None

    def center_at(self, x: float, y: float, scale: Optional[float] = None):
        """Places the picture with its centre on (x, y) (centre origin)."""
        if scale is not None:
            self.scale = scale
        w, h = self.scaled_size
        self.set_geometry(x - w / 2, y - h / 2, w, h)

    def apply_fit(self, fit: FitTransform):
        self.center_at(fit.center_x, fit.center_y, fit.scale)
        self.clip = fit.clip

    def resize(self, handle: str, dx: float, dy: float, min_size: float = 10):
        """
        Handle drags change ``scale`` rather than stretching the box, so the
        bounds always match what render() draws. The larger of the two
        requested scales wins; the edges opposite the handle stay put.
        """
        right, bottom = self.left + self.width, self.top + self.height
        w = self.width + (dx if 'e' in handle else -dx if 'w' in handle else 0)
        h = self.height + (dy if 's' in handle else -dy if 'n' in handle else 0)
        self.scale = max(max(min_size, w) / self.natural_width, max(min_size, h) / self.natural_height)

        w, h = self.scaled_size
        left = right - w if 'w' in handle else self.left
        top = bottom - h if 'n' in handle else self.top
        self.set_geometry(left, top, w, h)

    def contains_point(self, x: float, y: float) -> bool:
        visible = self.bounds if self.clip is None else self.bounds.intersection(self.clip)
        return visible.width > 0 and visible.height > 0 and visible.contains_point(x, y)

    def _scaled_content(self, size: Tuple[int, int]) -> Image.Image:
        if size == self.content.size:
            return self.content
        if self._scaled_cache is None or self._scaled_cache[0] != size:
            self._scaled_cache = (size, self.content.resize(size, Image.Resampling.LANCZOS))
        return self._scaled_cache[1]

    def render(self) -> Optional[Tuple[Image.Image, int, int]]:
        """
        Produces the pixels to draw: the scaled image cropped to the clip
        region, plus the canvas position of its top-left corner.
        Returns None when disposed or entirely clipped away.
        """
        if self.content is None:
            return None

        size = (max(1, int(round(self.scaled_width))), max(1, int(round(self.scaled_height))))
        box = Rect(self.left, self.top, size[0], size[1])
        visible = box if self.clip is None else box.intersection(self.clip)
        if visible.width < 1 or visible.height < 1:
            return None

        scaled = self._scaled_content(size)
        crop_box = (
            int(round(visible.left - box.left)),
            int(round(visible.top - box.top)),
            int(round(visible.right - box.left)),
            int(round(visible.bottom - box.top)),
        )
        if crop_box != (0, 0, size[0], size[1]):
            scaled = scaled.crop(crop_box)
        return scaled, int(round(visible.left)), int(round(visible.top))

    def dispose(self):
        """Releases the pixel data; the picture can no longer be drawn."""
        if self.content is not None:
            self.content.close()
            self.content = None
        self._scaled_cache = None
        logger.debug(f"Picture {self.id}: disposed")
