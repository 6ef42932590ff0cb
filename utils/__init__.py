# utils/__init__.py

# Import key utility classes/functions you want to expose
from .geometry import Rect, FitTransform, cover_fit, scaled_size
from .image_loader import decode_image_bytes, fetch_image, read_data_uri
