# framer.py

import argparse
import logging
import sys
import tkinter as tk
from tkinter import messagebox

from constants import CANVAS_WIDTH, CANVAS_HEIGHT, FRAME_DEFAULTS, FRAME_SPACING, FETCH_TIMEOUT

logger = logging.getLogger(__name__)

try:
    from tkinterdnd2 import TkinterDnD
    DND_AVAILABLE = True
except ImportError:
    DND_AVAILABLE = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Frame canvas: fill picture frames from files, drops, paste or URLs')
    parser.add_argument('--width', type=int, default=CANVAS_WIDTH, help='Canvas width in pixels')
    parser.add_argument('--height', type=int, default=CANVAS_HEIGHT, help='Canvas height in pixels')
    parser.add_argument('-f', '--frames', type=int, default=1, metavar='N', help='Number of frames laid out at start-up')
    parser.add_argument('-u', '--url', action='append', default=[], dest='urls', metavar='URL',
                        help='Image URL (or data: URI) loaded into the next frame; repeatable')
    parser.add_argument('--no-dnd', action='store_true', help='Do not accept dropped files')
    parser.add_argument('--no-paste', action='store_true', help='Do not listen for clipboard paste')
    parser.add_argument('--fetch-timeout', type=float, default=FETCH_TIMEOUT, metavar='SECONDS',
                        help='Timeout for URL fetches (default: none)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def missing_dependencies():
    missing = []
    try:
        from PIL import Image, ImageTk, ImageGrab # noqa: F401
        Image.new('RGB', (1, 1))
    except ImportError:
        missing.append('Pillow')
    try:
        import requests # noqa: F401
    except ImportError:
        missing.append('requests')
    return missing


def layout_frames(app, count: int):
    """Places ``count`` default-sized frames in a row, starting at the default position."""
    frames = []
    step = FRAME_DEFAULTS['width'] + FRAME_SPACING
    for i in range(max(0, count)):
        frames.append(app.create_frame(left=FRAME_DEFAULTS['left'] + i * step))
    return frames


def report_failure(error):
    messagebox.showerror('Could not add image', str(error))


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    use_dnd = DND_AVAILABLE and not args.no_dnd
    root = TkinterDnD.Tk() if use_dnd else tk.Tk()
    root.title('Framer')

    missing = missing_dependencies()
    if missing:
        messagebox.showerror('Missing Dependencies', f"Install the following packages: {', '.join(missing)}")
        root.destroy()
        return 1
    if not DND_AVAILABLE and not args.no_dnd:
        logger.warning("main: tkinterdnd2 is not installed; drag and drop disabled.")

    # Imported after the dependency check, these pull in Pillow
    from view import TkSurface
    from controller import FrameCanvasApp

    surface = TkSurface(root, width=args.width, height=args.height)
    app = FrameCanvasApp(surface, fetch_timeout=args.fetch_timeout, dialog_master=root)
    app.add_failure_observer(report_failure)

    frames = layout_frames(app, args.frames)
    for frame, url in zip(frames, args.urls):
        app.ingest_from_url(url, frame)
    for url in args.urls[len(frames):]:
        app.ingest_from_url(url)

    if use_dnd:
        app.enable_drag_and_drop()
    if not args.no_paste:
        app.enable_clipboard_paste()

    def on_close():
        app.close()
        root.destroy()

    root.protocol('WM_DELETE_WINDOW', on_close)
    root.mainloop()
    return 0


if __name__ == '__main__':
    sys.exit(main())
