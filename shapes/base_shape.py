# shapes/base_shape.py

import logging
from typing import Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from utils.geometry import Rect

if TYPE_CHECKING:
    import tkinter as tk # Needed for tk.Canvas type hint

logger = logging.getLogger(__name__)

# Event names fired by shapes
MOVING = 'moving'           # top-left changed
SCALING = 'scaling'         # width/height changed
DOUBLE_CLICK = 'mousedblclick'


class Shape:
    """
    Base class for everything placed on the drawing surface.

    Geometry is stored as left/top/width/height. Every setter notifies
    subscribers synchronously: ``moving`` when the top-left changes and
    ``scaling`` when the size changes.
    """

    def __init__(self, left: float = 0, top: float = 0, width: float = 0, height: float = 0, **kwargs):
        self.id: Optional[str] = kwargs.get('id') # Assigned once by whoever registers the shape
        self.left = left
        self.top = top
        self.width = width
        self.height = height

        # Interaction flags
        self.selectable: bool = kwargs.get('selectable', True)
        self.evented: bool = kwargs.get('evented', True)
        self.has_controls: bool = kwargs.get('has_controls', True)
        self.lock_rotation: bool = kwargs.get('lock_rotation', False)
        self.lock_movement_x: bool = kwargs.get('lock_movement_x', False)
        self.lock_movement_y: bool = kwargs.get('lock_movement_y', False)

        self._listeners: Dict[str, List[Callable]] = {}

    # --- Events ---

    def on(self, event: str, handler: Callable):
        if callable(handler):
            self._listeners.setdefault(event, []).append(handler)

    def off(self, event: str, handler: Callable):
        handlers = self._listeners.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def fire(self, event: str, **payload):
        for cb in list(self._listeners.get(event, [])):
            try:
                cb(self, **payload)
            except Exception:
                logger.exception(f"Shape {self.id}: listener {getattr(cb, '__name__', cb)} failed on '{event}'")

    # --- Geometry ---

    @property
    def bounds(self) -> Rect:
        return Rect(self.left, self.top, self.width, self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return self.bounds.center

    def set_geometry(self, left: float, top: float, width: float, height: float):
        moved = (left, top) != (self.left, self.top)
        scaled = (width, height) != (self.width, self.height)
        self.left, self.top, self.width, self.height = left, top, width, height
        if moved:
            self.fire(MOVING)
        if scaled:
            self.fire(SCALING)

    def set_position(self, left: float, top: float):
        self.set_geometry(left, top, self.width, self.height)

    def move(self, dx: float, dy: float):
        """Moves the shape by dx, dy, honouring the movement locks."""
        if self.lock_movement_x: dx = 0
        if self.lock_movement_y: dy = 0
        if dx or dy:
            self.set_position(self.left + dx, self.top + dy)

    def resize(self, handle: str, dx: float, dy: float, min_size: float = 10):
        """Resizes the shape based on the drag handle and delta."""
        x0, y0 = self.left, self.top
        x1, y1 = self.left + self.width, self.top + self.height

        if 'n' in handle: y0 += dy
        if 's' in handle: y1 += dy
        if 'w' in handle: x0 += dx
        if 'e' in handle: x1 += dx

        # Ensure minimum size
        if x1 - x0 < min_size:
            if 'w' in handle: x0 = x1 - min_size
            else: x1 = x0 + min_size
        if y1 - y0 < min_size:
            if 'n' in handle: y0 = y1 - min_size
            else: y1 = y0 + min_size

        self.set_geometry(x0, y0, x1 - x0, y1 - y0)

    def contains_point(self, x: float, y: float) -> bool:
        return self.bounds.contains_point(x, y)

    def handle_contains(self, x: float, y: float, handle_size: float = 8) -> bool:
        """True when (x, y) is on the bottom-right resize handle."""
        if not self.has_controls: return False
        right, bottom = self.left + self.width, self.top + self.height
        return (right - handle_size <= x <= right + handle_size and
                bottom - handle_size <= y <= bottom + handle_size)

    # --- Drawing ---

    def draw_shape(self, canvas: 'tk.Canvas') -> List[int]:
        return []  # Override in subclasses

    def __repr__(self):
        return f"<{type(self).__name__} id={self.id} {self.left:g},{self.top:g} {self.width:g}x{self.height:g}>"
