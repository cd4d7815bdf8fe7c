"""
Downscaling of uploaded product images into data: URLs.
"""

import base64
import logging
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from pricebook_web.config import settings

logger = logging.getLogger(__name__)


class ImageError(Exception):
    """Uploaded file could not be read as an image."""


def downscale_image(data: bytes, max_dimension: Optional[int] = None, quality: Optional[int] = None) -> bytes:
    """
    Re-encodes an image as JPEG with its longest side at most max_dimension.

    Smaller images keep their size; transparency is flattened onto white.
    """
    max_dimension = max_dimension or settings.IMAGE_MAX_DIMENSION
    quality = quality or settings.IMAGE_JPEG_QUALITY

    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageError(f"Unsupported image file: {e}") from e

    if image.mode in ("RGBA", "LA", "P"):
        image = image.convert("RGBA")
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, mask=image.getchannel("A"))
        image = background
    elif image.mode != "RGB":
        image = image.convert("RGB")

    original_size = image.size
    image.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)
    logger.debug(f"Image resized {original_size} -> {image.size}")

    buffer = BytesIO()
    image.save(buffer, format="JPEG", quality=quality, optimize=True)
    return buffer.getvalue()


def image_to_data_url(data: bytes, max_dimension: Optional[int] = None, quality: Optional[int] = None) -> str:
    """Downscaled image as data:image/jpeg;base64,..."""
    jpeg = downscale_image(data, max_dimension=max_dimension, quality=quality)
    encoded = base64.b64encode(jpeg).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"
