# controller.py

import itertools
import logging
from concurrent.futures import Future
from typing import Callable, Optional

from shapes import Frame, Picture, Rectangle
from model import FrameRegistry
from factory import FrameFactory, FrameOptions
from ingest import BackgroundRunner, ImageIngestionPipeline, ImageSource
from adapters import (ClipboardPasteAdapter, DragAndDropAdapter, FilePickerAdapter,
                      grab_clipboard_entries, transient_file_dialog)
from utils.image_loader import fetch_image
from constants import FETCH_TIMEOUT, INGEST_WORKERS
from errors import IngestionError

logger = logging.getLogger(__name__)


class FrameCanvasApp:
    """
    Canvas controller: owns the frame registry for its lifetime and wires the
    factory, the ingestion pipeline and the input adapters to one render
    surface. All calls are expected on the UI thread.

    ``surface`` must provide add/remove/render_all/get_active_object,
    width/height, client_to_local and call_soon (see view.TkSurface).
    """

    def __init__(self, surface, runner=None, fetch: Callable = fetch_image,
                 fetch_timeout: Optional[float] = FETCH_TIMEOUT,
                 dialog_factory=transient_file_dialog,
                 read_clipboard=grab_clipboard_entries,
                 dialog_master=None):
        self.surface = surface
        self.registry = FrameRegistry()
        self._rect_ids = itertools.count(1)
        self.runner = runner or BackgroundRunner(surface.call_soon, max_workers=INGEST_WORKERS)

        self.pipeline = ImageIngestionPipeline(surface, self.registry, self.runner,
                                               fetch=fetch, fetch_timeout=fetch_timeout)
        self.file_picker = FilePickerAdapter(self.ingest_from_binary, master=dialog_master,
                                             dialog_factory=dialog_factory)
        self.factory = FrameFactory(surface, self.registry, on_double_activation=self.open_file_picker)
        self.drag_and_drop = DragAndDropAdapter(surface, self.registry, self.ingest_from_binary)
        self.clipboard = ClipboardPasteAdapter(surface, self.registry, self.ingest_from_binary,
                                               read_clipboard=read_clipboard)

    # --- Shapes ---

    def create_frame(self, options: Optional[FrameOptions] = None, **overrides) -> Frame:
        frame = self.factory.create_frame(options, **overrides)
        self.surface.render_all()
        return frame

    def create_rectangle(self) -> Rectangle:
        """Adds a plain 150x100 rectangle at (200, 200)."""
        rect = Rectangle(lock_rotation=True)
        rect.id = f"rect-{next(self._rect_ids)}"
        self.surface.add(rect)
        self.surface.render_all()
        return rect

    def get_frame_at(self, x: float, y: float) -> Optional[Frame]:
        return self.registry.lookup(x, y)

    # --- Images ---

    def ingest_from_binary(self, source: ImageSource, target_frame: Optional[Frame] = None) -> Future:
        return self.pipeline.ingest_from_binary(source, target_frame)

    def ingest_from_url(self, url: str, target_frame: Optional[Frame] = None) -> Future:
        return self.pipeline.ingest_from_url(url, target_frame)

    def add_image_from_file(self, path: str, target_frame: Optional[Frame] = None) -> Future:
        return self.ingest_from_binary(ImageSource.from_path(path), target_frame)

    def fit_image_to_frame(self, picture: Picture, frame: Frame):
        self.pipeline.fit_image_to_frame(picture, frame)
        self.surface.render_all()

    def remove_image(self, frame: Frame) -> bool:
        return self.pipeline.remove_image(frame)

    def add_failure_observer(self, fn: Callable[[IngestionError], None]):
        self.pipeline.add_failure_observer(fn)

    # --- Input channels ---

    def open_file_picker(self, frame: Frame):
        return self.file_picker.open_for_frame(frame)

    def enable_drag_and_drop(self, zone=None):
        if zone is None:
            zone = getattr(self.surface, 'drop_zone', None)
        if zone is None:
            logger.error("FrameCanvasApp.enable_drag_and_drop: No drop zone element found")
            return
        self.drag_and_drop.enable(zone)

    def enable_clipboard_paste(self, widget=None):
        if widget is None:
            widget = getattr(self.surface, 'canvas', None)
        if widget is None:
            logger.error("FrameCanvasApp.enable_clipboard_paste: No widget to bind paste events on")
            return
        self.clipboard.enable(widget)

    # --- Lifecycle ---

    def close(self):
        """Stops background work and drops every frame record."""
        self.runner.shutdown()
        self.registry.clear()
        logger.debug("FrameCanvasApp.close: registry cleared")
