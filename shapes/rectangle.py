from typing import List, TYPE_CHECKING
from shapes.base_shape import Shape
from constants import RECTANGLE_DEFAULTS

if TYPE_CHECKING:
    import tkinter as tk


class Rectangle(Shape):
    def __init__(self, left=None, top=None, width=None, height=None, **kwargs):
        super().__init__(
            left=RECTANGLE_DEFAULTS['left'] if left is None else left,
            top=RECTANGLE_DEFAULTS['top'] if top is None else top,
            width=RECTANGLE_DEFAULTS['width'] if width is None else width,
            height=RECTANGLE_DEFAULTS['height'] if height is None else height,
            **kwargs)
        self.fill: str = kwargs.get('fill', RECTANGLE_DEFAULTS['fill'])
        self.stroke: str = kwargs.get('stroke', RECTANGLE_DEFAULTS['stroke'])
        self.stroke_width: int = kwargs.get('stroke_width', RECTANGLE_DEFAULTS['stroke_width'])

    def _inset_box(self):
        # Inset by half the stroke so the outline stays inside the shape's bounds
        half_line_width = self.stroke_width / 2.0
        x0 = self.left + half_line_width
        y0 = self.top + half_line_width
        x1 = self.left + self.width - half_line_width
        y1 = self.top + self.height - half_line_width
        # Ensure inset coordinates are valid for very thin shapes
        if x0 > x1: x0, x1 = x1, x0
        if y0 > y1: y0, y1 = y1, y0
        return x0, y0, x1, y1

    def draw_shape(self, canvas: 'tk.Canvas') -> List[int]:
        x0, y0, x1, y1 = self._inset_box()
        # Tkinter rectangle uses top-left and bottom-right corners
        return [canvas.create_rectangle(x0, y0, x1, y1, fill=self.fill, outline=self.stroke,
                                        width=self.stroke_width, tags=('shape', f'id{self.id}'))]
