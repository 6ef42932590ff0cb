import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from shapes import Frame, Placeholder, MOVING, SCALING, DOUBLE_CLICK
from model import FrameIdGenerator, FrameRecord, FrameRegistry
from constants import FRAME_DEFAULTS

logger = logging.getLogger(__name__)


@dataclass
class FrameOptions:
    left: float = FRAME_DEFAULTS['left']
    top: float = FRAME_DEFAULTS['top']
    width: float = FRAME_DEFAULTS['width']
    height: float = FRAME_DEFAULTS['height']
    label: str = FRAME_DEFAULTS['label']


class FrameFactory:
    """
    Builds a frame with its placeholder, registers it and wires its events:
    placeholder recentring on every geometry change and the double-click
    trigger that opens the file picker for that frame.
    """

    def __init__(self, surface, registry: FrameRegistry,
                 on_double_activation: Optional[Callable[[Frame], None]] = None,
                 id_generator: Optional[FrameIdGenerator] = None):
        self.surface = surface
        self.registry = registry
        self.on_double_activation = on_double_activation
        self.id_generator = id_generator or FrameIdGenerator()

    def create_frame(self, options: Optional[FrameOptions] = None, **overrides) -> Frame:
        opts = options or FrameOptions()
        if overrides:
            opts = replace(opts, **overrides)

        frame = Frame(opts.left, opts.top, opts.width, opts.height)
        placeholder = Placeholder(opts.label, *frame.center)

        frame_id = self.id_generator()
        frame.id = frame_id
        placeholder.id = f"{frame_id}-placeholder"

        self.surface.add(frame)
        self.surface.add(placeholder)
        self.registry.insert(frame_id, FrameRecord(id=frame_id, frame=frame, image=None, placeholder=placeholder))

        frame.on(DOUBLE_CLICK, self._on_double_click)

        def recenter_placeholder(f: Frame):
            placeholder.center_on(*f.center)

        # Sync placeholder position when frame moves (or is resized)
        frame.on(MOVING, recenter_placeholder)
        frame.on(SCALING, recenter_placeholder)

        logger.debug(f"FrameFactory.create_frame: {frame_id} at ({opts.left}, {opts.top}) {opts.width}x{opts.height}")
        return frame

    def _on_double_click(self, frame: Frame, **_event):
        if self.on_double_activation is not None:
            self.on_double_activation(frame)
