# adapters.py

import logging
from contextlib import contextmanager
from typing import Callable, List, Optional

from PIL import Image, ImageGrab

from constants import DROP_HOVER_STYLE, DROP_IDLE_STYLE, IMAGE_FILETYPES
from ingest import ImageSource
from model import FrameRegistry
from shapes import Frame

logger = logging.getLogger(__name__)

# tkinterdnd2 action names
COPY = 'copy'

# --- Target resolution ---


def resolve_paste_target(surface, registry: FrameRegistry) -> Optional[Frame]:
    """The selected object if it is a registered frame, otherwise None (untargeted)."""
    active = surface.get_active_object()
    if active is not None and registry.contains_frame(active):
        return active
    return None


def resolve_drop_target(surface, registry: FrameRegistry, x_root: float, y_root: float) -> Optional[Frame]:
    """Maps a screen drop position into canvas space and finds the frame under it."""
    x, y = surface.client_to_local(x_root, y_root)
    return registry.lookup(x, y)


def first_image_entry(entries: List[ImageSource]) -> Optional[ImageSource]:
    for entry in entries:
        if entry.is_image:
            return entry
    return None


# --- File selection ---


@contextmanager
def transient_file_dialog(master, filetypes=IMAGE_FILETYPES):
    """One hidden, single-use file dialog; released on every exit path."""
    from tkinter import filedialog
    dialog = filedialog.Open(master=master, title='Select an image', filetypes=filetypes)
    try:
        yield dialog
    finally:
        dialog.master = None
        dialog.options.clear()


class FilePickerAdapter:
    def __init__(self, ingest: Callable, master=None, dialog_factory=transient_file_dialog):
        self.ingest = ingest
        self.master = master
        self.dialog_factory = dialog_factory

    def open_for_frame(self, frame: Frame):
        """Asks for one file and ingests it into ``frame``. Returns the ingestion Future, or None if cancelled."""
        with self.dialog_factory(self.master) as dialog:
            path = dialog.show()
        if not path:
            logger.debug(f"FilePickerAdapter.open_for_frame: dialog cancelled for {frame.id}")
            return None
        logger.debug(f"FilePickerAdapter.open_for_frame: {path} -> {frame.id}")
        return self.ingest(ImageSource.from_path(path), frame)


# --- Drag and drop ---


class DragAndDropAdapter:
    """
    Accepts files dropped on a tkinterdnd2-enabled widget. Only the first
    dropped file is used; the target frame is the one under the drop point.
    """

    def __init__(self, surface, registry: FrameRegistry, ingest: Callable):
        self.surface = surface
        self.registry = registry
        self.ingest = ingest

    def enable(self, zone):
        from tkinterdnd2 import DND_FILES
        zone.drop_target_register(DND_FILES)
        zone.dnd_bind('<<DropEnter>>', self.on_drag_enter)
        zone.dnd_bind('<<DropPosition>>', self.on_drag_position)
        zone.dnd_bind('<<DropLeave>>', self.on_drag_leave)
        zone.dnd_bind('<<Drop>>', self.on_drop)
        logger.debug(f"DragAndDropAdapter.enable: drop zone {zone}")

    def on_drag_enter(self, event):
        event.widget.configure(**DROP_HOVER_STYLE)
        return COPY

    def on_drag_position(self, event):
        return COPY

    def on_drag_leave(self, event):
        event.widget.configure(**DROP_IDLE_STYLE)
        return COPY

    def on_drop(self, event):
        zone = event.widget
        zone.configure(**DROP_IDLE_STYLE)

        files = zone.tk.splitlist(event.data) if event.data else ()
        if not files:
            logger.debug("DragAndDropAdapter.on_drop: nothing dropped.")
            return COPY
        if len(files) > 1:
            logger.debug(f"DragAndDropAdapter.on_drop: {len(files)} files dropped, using the first.")

        target = resolve_drop_target(self.surface, self.registry, event.x_root, event.y_root)
        self.ingest(ImageSource.from_path(files[0]), target)
        return COPY


# --- Clipboard paste ---


def grab_clipboard_entries() -> List[ImageSource]:
    """
    Reads the system clipboard through Pillow: either an image (-> one PNG
    entry) or a list of copied files (-> one entry per file).
    """
    try:
        content = ImageGrab.grabclipboard()
    except (NotImplementedError, OSError) as e:
        logger.warning(f"grab_clipboard_entries: clipboard not readable: {e}")
        return []

    if isinstance(content, Image.Image):
        return [ImageSource.from_pil(content)]
    if isinstance(content, (list, tuple)):
        return [ImageSource.from_path(str(p)) for p in content]
    return []


class ClipboardPasteAdapter:
    PASTE_SEQUENCES = ('<Control-v>', '<Command-v>')

    def __init__(self, surface, registry: FrameRegistry, ingest: Callable,
                 read_clipboard: Callable[[], List[ImageSource]] = grab_clipboard_entries):
        self.surface = surface
        self.registry = registry
        self.ingest = ingest
        self.read_clipboard = read_clipboard

    def enable(self, widget):
        import tkinter as tk
        for sequence in self.PASTE_SEQUENCES:
            try:
                widget.bind_all(sequence, self.on_paste, add='+')
            except tk.TclError as e:
                # <Command-...> only exists on macOS
                logger.debug(f"ClipboardPasteAdapter.enable: skipping {sequence}: {e}")

    def on_paste(self, event):
        self.paste()

    def paste(self):
        """Ingests the first image on the clipboard. Returns the ingestion Future, or None if there is none."""
        source = first_image_entry(self.read_clipboard())
        if source is None:
            logger.debug("ClipboardPasteAdapter.paste: no image on the clipboard.")
            return None
        target = resolve_paste_target(self.surface, self.registry)
        logger.debug(f"ClipboardPasteAdapter.paste: {source.name} -> {getattr(target, 'id', 'surface')}")
        return self.ingest(source, target)
