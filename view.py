# view.py

import logging
import tkinter as tk
from typing import Callable, Dict, List, Optional, Tuple

from PIL import ImageTk

from shapes import Shape, Picture, DOUBLE_CLICK
from constants import CANVAS_WIDTH, CANVAS_HEIGHT, CANVAS_BG, SELECTION_OUTLINE, HANDLE_SIZE

logger = logging.getLogger(__name__)


class TkSurface(tk.Frame):
    """
    Render surface backed by a tk.Canvas.

    Holds the z-ordered list of shapes (first added is drawn first), the
    active selection and the pointer interaction: press selects, drag moves
    or resizes through the bottom-right handle, double-click fires
    ``mousedblclick`` on the top-most evented shape.
    """

    def __init__(self, master, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT, bg: str = CANVAS_BG):
        super().__init__(master)
        self.pack(fill=tk.BOTH, expand=True)
        self.canvas = tk.Canvas(self, width=width, height=height, bg=bg, highlightthickness=0)
        self.canvas.pack(fill=tk.BOTH, expand=True)
        # Files are dropped on the canvas itself
        self.drop_zone = self.canvas
        self._initial_size = (width, height)

        self._objects: List[Shape] = []
        self._active: Optional[Shape] = None
        self._tk_images: Dict[int, ImageTk.PhotoImage] = {} # Keep PhotoImages alive while drawn

        # Pointer interaction state
        self._drag_last: Optional[Tuple[float, float]] = None
        self._is_moving = False
        self._is_resizing = False

        self._bind_events()

    def _bind_events(self):
        self.canvas.bind("<ButtonPress-1>", self.on_press)
        self.canvas.bind("<B1-Motion>", self.on_drag)
        self.canvas.bind("<ButtonRelease-1>", self.on_release)
        self.canvas.bind("<Double-Button-1>", self.on_double_click)
        self.canvas.bind("<Configure>", lambda e: self.render_all())

    # --- Surface contract ---

    @property
    def width(self) -> float:
        w = self.canvas.winfo_width()
        return w if w > 1 else self._initial_size[0]

    @property
    def height(self) -> float:
        h = self.canvas.winfo_height()
        return h if h > 1 else self._initial_size[1]

    def add(self, obj: Shape):
        if obj not in self._objects:
            self._objects.append(obj)

    def remove(self, obj: Shape):
        if obj in self._objects:
            self._objects.remove(obj)
        if self._active is obj:
            self._active = None

    def get_active_object(self) -> Optional[Shape]:
        return self._active

    def set_active_object(self, obj: Optional[Shape]):
        if obj is not None and not obj.selectable:
            return
        self._active = obj

    def client_to_local(self, x_root: float, y_root: float) -> Tuple[float, float]:
        """Screen coordinates (e.g. a drop event's x_root/y_root) to canvas coordinates."""
        x = self.canvas.canvasx(x_root - self.canvas.winfo_rootx())
        y = self.canvas.canvasy(y_root - self.canvas.winfo_rooty())
        return x, y

    def call_soon(self, fn: Callable[[], None]):
        """Schedules ``fn`` on the Tk event loop; safe to call from worker threads."""
        try:
            self.after(0, fn)
        except (tk.TclError, RuntimeError) as e:
            # Window already destroyed
            logger.warning(f"TkSurface.call_soon: dropping callback, event loop gone: {e}")

    # --- Rendering ---

    def render_all(self):
        self.canvas.delete("all")
        self._tk_images.clear()

        for obj in self._objects:
            if isinstance(obj, Picture):
                self._draw_picture(obj)
            else:
                obj.draw_shape(self.canvas)

        self._draw_selection()

    def _draw_picture(self, picture: Picture):
        rendered = picture.render()
        if rendered is None:
            return
        img, x, y = rendered
        tk_image = ImageTk.PhotoImage(img)
        self._tk_images[id(picture)] = tk_image
        self.canvas.create_image(x, y, image=tk_image, anchor='nw',
                                 tags=('shape', 'image_content', f'id{picture.id}'))

    def _draw_selection(self):
        shape = self._active
        if shape is None:
            return
        x1, y1 = shape.left, shape.top
        x2, y2 = x1 + shape.width, y1 + shape.height
        self.canvas.create_rectangle(x1, y1, x2, y2, dash=(2, 2), outline=SELECTION_OUTLINE,
                                     width=1, tags=("selection",))
        if shape.has_controls:
            half = HANDLE_SIZE / 2
            self.canvas.create_rectangle(x2 - half, y2 - half, x2 + half, y2 + half,
                                         fill="#FFFFFF", outline="#333333", width=1, tags=("handle",))

    # --- Pointer interaction ---

    def find_evented_at(self, x: float, y: float) -> Optional[Shape]:
        """Top-most evented shape under (x, y)."""
        for obj in reversed(self._objects):
            if obj.evented and obj.contains_point(x, y):
                return obj
        return None

    def on_press(self, e):
        x, y = self.canvas.canvasx(e.x), self.canvas.canvasy(e.y)
        self._drag_last = (x, y)
        self._is_moving = self._is_resizing = False

        active = self._active
        if active is not None and active.handle_contains(x, y, HANDLE_SIZE):
            self._is_resizing = True
            return

        hit = self.find_evented_at(x, y)
        if hit is not None and hit.selectable:
            self._active = hit
            self._is_moving = True
        else:
            self._active = None
        self.render_all()

    def on_drag(self, e):
        if self._drag_last is None or self._active is None:
            return
        x, y = self.canvas.canvasx(e.x), self.canvas.canvasy(e.y)
        dx, dy = x - self._drag_last[0], y - self._drag_last[1]
        self._drag_last = (x, y)

        if self._is_resizing:
            self._active.resize('se', dx, dy)
        elif self._is_moving:
            self._active.move(dx, dy)
        else:
            return
        self.render_all()

    def on_release(self, e):
        self._drag_last = None
        self._is_moving = self._is_resizing = False

    def on_double_click(self, e):
        x, y = self.canvas.canvasx(e.x), self.canvas.canvasy(e.y)
        hit = self.find_evented_at(x, y)
        if hit is not None:
            logger.debug(f"TkSurface.on_double_click: ({x}, {y}) -> {hit.id}")
            hit.fire(DOUBLE_CLICK, x=x, y=y)
