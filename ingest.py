# ingest.py

import io
import itertools
import logging
import mimetypes
import os
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Type

from PIL import Image

from constants import FETCH_TIMEOUT, INGEST_WORKERS
from errors import (IngestionError, InvalidInputError, DecodeFailureError,
                    FetchFailureError, MissingFrameError)
from model import FrameRegistry
from shapes import Frame, Picture
from utils.geometry import cover_fit
from utils.image_loader import decode_image_bytes, fetch_image

logger = logging.getLogger(__name__)


@dataclass
class ImageSource:
    """
    One candidate image handed in by an input channel: a file on disk or an
    in-memory payload, with the media type the channel declared for it.
    """
    name: str
    media_type: str
    data: Optional[bytes] = None
    path: Optional[str] = None

    @classmethod
    def from_path(cls, path: str) -> 'ImageSource':
        media_type, _encoding = mimetypes.guess_type(path)
        return cls(name=os.path.basename(path), media_type=media_type or 'application/octet-stream', path=path)

    @classmethod
    def from_pil(cls, image: Image.Image, name: str = 'clipboard.png') -> 'ImageSource':
        buf = io.BytesIO()
        image.save(buf, format='PNG')
        return cls(name=name, media_type='image/png', data=buf.getvalue())

    @property
    def is_image(self) -> bool:
        return (self.media_type or '').lower().startswith('image/')

    def read_bytes(self) -> bytes:
        if self.data is not None:
            return self.data
        if not self.path:
            raise DecodeFailureError("Image source has neither data nor a path", self)
        try:
            with open(self.path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise DecodeFailureError(f"Failed to read file: {e}", self) from e


class BackgroundRunner:
    """
    Runs blocking work (file reads, decoding, HTTP) on worker threads and
    hands the finished concurrent Future back through ``dispatch``, which
    must schedule the callback on the UI thread (e.g. Tk ``after``).
    """

    def __init__(self, dispatch: Callable[[Callable[[], None]], None], max_workers: int = INGEST_WORKERS):
        self._dispatch = dispatch
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='ingest')

    def submit(self, work: Callable, on_done: Callable[[Future], None]):
        job = self._executor.submit(work)
        job.add_done_callback(lambda f: self._dispatch(lambda: on_done(f)))

    def shutdown(self):
        self._executor.shutdown(wait=False, cancel_futures=True)


class ImageIngestionPipeline:
    """
    validate -> decode (off-thread) -> fit -> commit.

    Every public ingest call returns a concurrent.futures.Future resolved on
    the UI thread with the committed Picture, or None when the ingestion
    failed or was superseded. Failures never escape as exceptions; they are
    logged and passed to the failure observers.
    """

    def __init__(self, surface, registry: FrameRegistry, runner, fetch: Callable = fetch_image,
                 fetch_timeout: Optional[float] = FETCH_TIMEOUT):
        self.surface = surface
        self.registry = registry
        self.runner = runner
        self.fetch = fetch
        self.fetch_timeout = fetch_timeout
        self._failure_observers: List[Callable[[IngestionError], None]] = []
        self._image_ids = itertools.count(1)

    def add_failure_observer(self, fn: Callable[[IngestionError], None]):
        if callable(fn): self._failure_observers.append(fn)

    # --- Entry points ---

    def ingest_from_binary(self, source: ImageSource, target_frame: Optional[Frame] = None) -> Future:
        result: Future = Future()
        if not isinstance(source, ImageSource) or not source.is_image:
            media_type = getattr(source, 'media_type', None)
            self._fail(result, InvalidInputError(
                f"Invalid file type '{media_type}'. Please select an image.", source))
            return result

        def work():
            return decode_image_bytes(source.read_bytes(), source)

        self._start(result, work, source, target_frame, DecodeFailureError)
        return result

    def ingest_from_url(self, url: str, target_frame: Optional[Frame] = None) -> Future:
        result: Future = Future()
        if not isinstance(url, str) or not url.strip():
            self._fail(result, InvalidInputError(f"Invalid image URL: {url!r}", url))
            return result
        url = url.strip()

        def work():
            return self.fetch(url, timeout=self.fetch_timeout)

        self._start(result, work, url, target_frame, FetchFailureError)
        return result

    def remove_image(self, frame: Frame) -> bool:
        """Detaches and disposes the frame's image; no-op when the frame is empty."""
        record = self.registry.get(getattr(frame, 'id', None))
        if record is None or record.is_empty:
            logger.debug(f"ImageIngestionPipeline.remove_image: {getattr(frame, 'id', None)} has no image, nothing to remove.")
            return False

        # Anything still loading for this frame was started before the removal
        self.registry.commit_ingestion(record.id, self.registry.begin_ingestion(record.id))
        image = record.image
        self.surface.remove(image)
        image.dispose()
        record.set_image(None) # Show placeholder again
        self.surface.render_all()
        logger.info(f"ImageIngestionPipeline.remove_image: cleared {record.id}")
        return True

    # --- Placement ---

    def fit_image_to_frame(self, picture: Picture, frame: Frame, token: Optional[int] = None):
        """
        Replaces the frame's image with ``picture``, cover-fitted against the
        frame's current bounds and clipped to them, and adds it to the surface.
        ``token`` is the version the caller captured when its ingestion started;
        without one the fit counts as a fresh change, superseding pending loads.
        Raises MissingFrameError for frames this registry does not know.
        """
        record = self.registry.get(getattr(frame, 'id', None))
        if record is None or record.frame is not frame:
            raise MissingFrameError(f"Frame data not found for {getattr(frame, 'id', None)}", frame)
        if token is None:
            token = self.registry.begin_ingestion(record.id)

        # Remove existing image if present
        if record.image is not None and record.image is not picture:
            self.surface.remove(record.image)
            record.image.dispose()

        fit = cover_fit(picture.natural_width, picture.natural_height, frame.bounds)
        picture.apply_fit(fit)
        picture.id = f"{record.id}-image"
        # Clicks go through to the frame underneath
        picture.selectable = False
        picture.evented = False
        record.set_image(picture) # Hides the placeholder
        self.registry.commit_ingestion(record.id, token)
        self.surface.add(picture)
        logger.debug(f"ImageIngestionPipeline.fit_image_to_frame: {record.id} scale={fit.scale:.4f} "
                     f"scaled={picture.scaled_width:.1f}x{picture.scaled_height:.1f}")

    def place_untargeted(self, picture: Picture):
        """Centres the picture on the surface at its natural size, untracked by any frame."""
        picture.id = f"image-{next(self._image_ids)}"
        picture.center_at(self.surface.width / 2, self.surface.height / 2, scale=1.0)

    # --- Internals ---

    def _start(self, result: Future, work: Callable, source, target_frame: Optional[Frame],
               failure_cls: Type[IngestionError]):
        token = None
        if target_frame is not None:
            token = self.registry.begin_ingestion(getattr(target_frame, 'id', None))
        logger.debug(f"ImageIngestionPipeline._start: {self._describe(source)} -> "
                     f"{getattr(target_frame, 'id', 'surface')} (token {token})")
        self.runner.submit(work, lambda job: self._commit(result, job, source, target_frame, token, failure_cls))

    def _commit(self, result: Future, job: Future, source, target_frame: Optional[Frame],
                token: Optional[int], failure_cls: Type[IngestionError]):
        if job.cancelled():
            logger.debug(f"ImageIngestionPipeline._commit: {self._describe(source)} cancelled.")
            result.set_result(None)
            return
        try:
            image = job.result()
        except IngestionError as e:
            self._fail(result, e)
            return
        except Exception as e:
            self._fail(result, failure_cls(f"Failed to load image: {e}", source))
            return

        picture = Picture(image)
        if target_frame is not None:
            frame_id = getattr(target_frame, 'id', None)
            if self.registry.get(frame_id) is not None and not self.registry.is_current(frame_id, token):
                logger.warning(f"ImageIngestionPipeline._commit: discarding stale result for {frame_id} "
                               f"({self._describe(source)}); a newer change superseded it.")
                picture.dispose()
                result.set_result(None)
                return
            try:
                self.fit_image_to_frame(picture, target_frame, token)
            except MissingFrameError as e:
                picture.dispose()
                self._fail(result, e)
                return
        else:
            self.place_untargeted(picture)
            self.surface.add(picture)

        self.surface.render_all()
        logger.info(f"ImageIngestionPipeline._commit: {self._describe(source)} "
                    f"({picture.natural_width}x{picture.natural_height}) -> {picture.id}")
        result.set_result(picture)

    def _fail(self, result: Future, error: IngestionError):
        logger.error(f"ImageIngestionPipeline: {error.kind.value}: {error}")
        for cb in list(self._failure_observers):
            try: cb(error)
            except Exception: logger.exception(f"Error calling failure observer {getattr(cb, '__name__', cb)}")
        result.set_result(None)

    @staticmethod
    def _describe(source) -> str:
        if isinstance(source, ImageSource):
            return source.name
        text = str(source)
        return text if len(text) <= 80 else text[:77] + '...'
