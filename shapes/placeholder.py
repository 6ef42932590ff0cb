from typing import List, TYPE_CHECKING
from shapes.base_shape import Shape
from constants import PLACEHOLDER_FONT, PLACEHOLDER_COLOR

if TYPE_CHECKING:
    import tkinter as tk


class Placeholder(Shape):
    """
    The "add image" text shown inside an empty frame.
    ``left``/``top`` are the text's centre point (centre origin); it is never
    selectable nor evented so pointer input reaches the frame underneath.
    """

    def __init__(self, text: str, center_x: float, center_y: float, **kwargs):
        kwargs.setdefault('selectable', False)
        kwargs.setdefault('evented', False)
        kwargs.setdefault('has_controls', False)
        super().__init__(left=center_x, top=center_y, **kwargs)
        self.text = text
        self.font = kwargs.get('font', PLACEHOLDER_FONT)
        self.color: str = kwargs.get('color', PLACEHOLDER_COLOR)
        self.visible: bool = True

    @property
    def center(self):
        return (self.left, self.top)

    def center_on(self, x: float, y: float):
        self.set_position(x, y)

    def contains_point(self, x: float, y: float) -> bool:
        return False

    def draw_shape(self, canvas: 'tk.Canvas') -> List[int]:
        if not self.visible or not self.text:
            return []
        return [canvas.create_text(self.left, self.top, text=self.text, font=self.font,
                                   fill=self.color, anchor='center', tags=('placeholder', f'id{self.id}'))]
