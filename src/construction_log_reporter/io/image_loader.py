"""Image loading for report gallery photos."""

import io
from pathlib import Path

from PIL import Image, ImageOps

from ..utils.logger import get_logger
from ..utils.exceptions import ImageProcessingError

logger = get_logger(__name__)


def load_photo(path: Path, max_size_px: int = 1024, quality: int = 80) -> tuple[io.BytesIO, tuple[int, int]]:
    """
    Decode a photo fully and re-encode it as an in-memory JPEG.

    Decoding up front means a truncated or corrupt file fails here, not later
    while the PDF is being laid out.

    Args:
        path: Path to the photo on disk
        max_size_px: Longest edge of the re-encoded image
        quality: JPEG quality (1-100)

    Returns:
        Tuple of (jpeg_buffer, (width, height)) in pixels

    Raises:
        ImageProcessingError: If the file is missing or cannot be decoded
    """
    logger.debug(f"Loading photo: {path}")

    try:
        with Image.open(path) as img:
            img = ImageOps.exif_transpose(img)
            img = img.convert("RGB")
            img.thumbnail((max_size_px, max_size_px))

            buffer = io.BytesIO()
            img.save(buffer, format="JPEG", quality=quality)
            buffer.seek(0)
            return buffer, img.size

    except Exception as e:
        error_msg = f"Failed to load photo {path}: {e}"
        logger.warning(error_msg)
        raise ImageProcessingError(error_msg) from e


def fit_within(size: tuple[int, int], box: tuple[float, float]) -> tuple[float, float]:
    """
    Scale (width, height) to the largest size that fits in box, keeping aspect ratio.

    Args:
        size: Source (width, height)
        box: Target (max_width, max_height)

    Returns:
        Scaled (width, height)
    """
    width, height = size
    max_w, max_h = box
    if width <= 0 or height <= 0:
        return max_w, max_h

    scale = min(max_w / width, max_h / height)
    return width * scale, height * scale
