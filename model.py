import itertools
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from shapes import Frame, Picture, Placeholder, MOVING, SCALING
from utils.geometry import Rect

logger = logging.getLogger(__name__)


class FrameIdGenerator:
    """Hands out 'frame-1', 'frame-2', ... ; ids are never reused within one generator."""

    def __init__(self, prefix: str = 'frame'):
        self.prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


@dataclass
class FrameRecord:
    id: str
    frame: Frame
    image: Optional[Picture] = None
    placeholder: Optional[Placeholder] = None
    # Issued to every ingestion (and removal) as it starts; a result only
    # commits if no later-issued token has committed before it.
    version: int = 0
    committed_version: int = 0
    bounds: Optional[Rect] = None

    def __post_init__(self):
        if self.bounds is None:
            self.bounds = self.frame.bounds

    @property
    def is_empty(self) -> bool:
        return self.image is None

    def set_image(self, image: Optional[Picture]):
        """Stores (or clears) the image and keeps the placeholder visibility in step with it."""
        self.image = image
        if self.placeholder is not None:
            self.placeholder.visible = image is None


class FrameRegistry:
    """
    Maps frame id -> FrameRecord for one canvas controller.

    Records keep insertion order, which is also the tie-break for point
    lookups: with overlapping frames the first registered one wins.
    """

    def __init__(self):
        self._records: Dict[str, FrameRecord] = {}

    def insert(self, frame_id: str, record: FrameRecord):
        if frame_id in self._records:
            raise ValueError(f"Frame id '{frame_id}' is already registered")
        self._records[frame_id] = record
        # Keep the cached bounds current on every geometry notification
        record.frame.on(MOVING, self._on_frame_geometry)
        record.frame.on(SCALING, self._on_frame_geometry)
        logger.debug(f"FrameRegistry.insert: {frame_id} at {record.bounds}")

    def get(self, frame_id: Optional[str]) -> Optional[FrameRecord]:
        if frame_id is None:
            return None
        return self._records.get(frame_id)

    def remove(self, frame_id: str) -> Optional[FrameRecord]:
        record = self._records.pop(frame_id, None)
        if record is not None:
            record.frame.off(MOVING, self._on_frame_geometry)
            record.frame.off(SCALING, self._on_frame_geometry)
        return record

    def lookup(self, x: float, y: float) -> Optional[Frame]:
        """Returns the first registered frame whose bounds contain (x, y)."""
        for record in self._records.values():
            if record.bounds.contains_point(x, y):
                logger.debug(f"FrameRegistry.lookup: ({x}, {y}) -> {record.id}")
                return record.frame
        logger.debug(f"FrameRegistry.lookup: ({x}, {y}) -> no frame")
        return None

    def contains_frame(self, shape) -> bool:
        """True if ``shape`` is a frame registered here (same object, not just same id)."""
        record = self.get(getattr(shape, 'id', None))
        return record is not None and record.frame is shape

    def begin_ingestion(self, frame_id: str) -> Optional[int]:
        """Bumps and returns the frame's version token (None for unknown frames)."""
        record = self.get(frame_id)
        if record is None:
            return None
        record.version += 1
        return record.version

    def is_current(self, frame_id: str, token: Optional[int]) -> bool:
        """True while nothing started after ``token`` has committed to the frame."""
        record = self.get(frame_id)
        return record is not None and token is not None and token > record.committed_version

    def commit_ingestion(self, frame_id: str, token: Optional[int]):
        record = self.get(frame_id)
        if record is not None and token is not None and token > record.committed_version:
            record.committed_version = token

    def clear(self):
        for frame_id in list(self._records):
            self.remove(frame_id)

    def _on_frame_geometry(self, frame: Frame):
        record = self.get(frame.id)
        if record is not None:
            record.bounds = frame.bounds

    def __iter__(self) -> Iterator[FrameRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, frame_id) -> bool:
        return frame_id in self._records
