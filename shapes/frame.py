from typing import List, TYPE_CHECKING
from shapes.rectangle import Rectangle
from constants import (FRAME_FILL, FRAME_STROKE, FRAME_STROKE_WIDTH, FRAME_CORNER_RADIUS,
                       SHADOW_COLOR, SHADOW_OFFSET)

if TYPE_CHECKING:
    import tkinter as tk


def rounded_rect_points(x0, y0, x1, y1, r) -> List[float]:
    """Control points for a smoothed polygon that approximates a rounded rectangle."""
    r = max(0, min(r, (x1 - x0) / 2, (y1 - y0) / 2))
    return [x0 + r, y0, x1 - r, y0, x1, y0, x1, y0 + r,
            x1, y1 - r, x1, y1, x1 - r, y1, x0 + r, y1,
            x0, y1, x0, y1 - r, x0, y0 + r, x0, y0]


class Frame(Rectangle):
    """
    A card-styled rectangle that can host exactly one image.
    Rotation is locked; it can be moved on both axes and resized.
    """

    def __init__(self, left, top, width, height, **kwargs):
        kwargs.setdefault('fill', FRAME_FILL)
        kwargs.setdefault('stroke', FRAME_STROKE)
        kwargs.setdefault('stroke_width', FRAME_STROKE_WIDTH)
        kwargs.setdefault('selectable', True)
        kwargs.setdefault('has_controls', True)
        kwargs.setdefault('lock_rotation', True)
        kwargs.setdefault('lock_movement_x', False)
        kwargs.setdefault('lock_movement_y', False)
        super().__init__(left, top, width, height, **kwargs)
        self.corner_radius: float = kwargs.get('corner_radius', FRAME_CORNER_RADIUS)
        self.shadow_color: str = kwargs.get('shadow_color', SHADOW_COLOR)
        self.shadow_offset = kwargs.get('shadow_offset', SHADOW_OFFSET)

    def draw_shape(self, canvas: 'tk.Canvas') -> List[int]:
        x0, y0, x1, y1 = self._inset_box()
        dx, dy = self.shadow_offset
        tags = ('shape', 'frame', f'id{self.id}')
        shadow_id = canvas.create_polygon(
            rounded_rect_points(x0 + dx, y0 + dy, x1 + dx, y1 + dy, self.corner_radius),
            smooth=True, fill=self.shadow_color, outline='', tags=tags)
        card_id = canvas.create_polygon(
            rounded_rect_points(x0, y0, x1, y1, self.corner_radius),
            smooth=True, fill=self.fill, outline=self.stroke, width=self.stroke_width, tags=tags)
        return [shadow_id, card_id]
