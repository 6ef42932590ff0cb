# image_loader.py

import base64
import io
import logging
from typing import Optional, Tuple
from urllib.parse import unquote_to_bytes

import requests
from PIL import Image, UnidentifiedImageError

from errors import DecodeFailureError, FetchFailureError

logger = logging.getLogger(__name__)


def decode_image_bytes(data: bytes, source=None) -> Image.Image:
    """
    Decodes an encoded image payload (PNG, JPEG, ...) into a fully loaded RGBA
    Pillow image. Meant to run off the UI thread.

    Raises DecodeFailureError when Pillow cannot read the payload.
    """
    if not data:
        raise DecodeFailureError("Image payload is empty", source)
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load() # Force the decode now, not lazily on first draw
            return img.convert("RGBA") # Ensure RGBA for transparency
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeFailureError(f"Failed to decode image: {e}", source) from e


def read_data_uri(uri: str) -> Tuple[bytes, str]:
    """Splits a ``data:`` URI into (payload bytes, media type)."""
    if not uri.startswith('data:') or ',' not in uri:
        raise ValueError("Not a data URI")
    header, payload = uri[5:].split(',', 1)
    params = header.split(';')
    media_type = params[0] or 'text/plain'
    if 'base64' in params[1:]:
        return base64.b64decode(payload, validate=True), media_type
    return unquote_to_bytes(payload), media_type


def fetch_image(url: str, timeout: Optional[float] = None,
                session: Optional[requests.Session] = None) -> Image.Image:
    """
    Loads an image from an http(s) URL or a data: URI.
    Any network, HTTP status or decode problem surfaces as FetchFailureError.
    """
    if url.startswith('data:'):
        try:
            data, _media_type = read_data_uri(url)
        except ValueError as e: # binascii.Error is a ValueError
            raise FetchFailureError(f"Malformed data URI: {e}", url) from e
    else:
        http = session or requests
        try:
            r = http.get(url, timeout=timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise FetchFailureError(f"Failed to fetch {url}: {e}", url) from e
        data = r.content
        logger.debug(f"fetch_image: {url} -> {len(data)} bytes ({r.headers.get('Content-Type')})")

    try:
        return decode_image_bytes(data, url)
    except DecodeFailureError as e:
        raise FetchFailureError(f"Fetched data from {url[:64]} is not a readable image: {e}", url) from e
