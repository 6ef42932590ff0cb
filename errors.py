# errors.py

import enum
from typing import Any, Optional


class FailureKind(enum.Enum):
    INVALID_INPUT = 'invalid_input'   # source is not image-typed
    DECODE_FAILURE = 'decode_failure' # bytes could not become a displayable image
    FETCH_FAILURE = 'fetch_failure'   # remote source unreachable or undecodable
    MISSING_FRAME = 'missing_frame'   # target frame id absent from the registry


class IngestionError(Exception):
    """Base class for every failure raised while ingesting an image.

    ``source`` is whatever the caller handed in (an ImageSource, a URL string)
    so observers can tell the user which input failed.
    """
    kind: Optional[FailureKind] = None

    def __init__(self, message: str, source: Any = None):
        super().__init__(message)
        self.source = source


class InvalidInputError(IngestionError):
    kind = FailureKind.INVALID_INPUT


class DecodeFailureError(IngestionError):
    kind = FailureKind.DECODE_FAILURE


class FetchFailureError(IngestionError):
    kind = FailureKind.FETCH_FAILURE


class MissingFrameError(IngestionError):
    kind = FailureKind.MISSING_FRAME
