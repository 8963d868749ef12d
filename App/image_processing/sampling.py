"""Image decoding and per-cell luminance sampling.

AIDEV-NOTE: The whole image is resized to the grid resolution in a single
pass so each sample is the average brightness under its cell. Sampling
single source pixels aliases badly when the image is much larger than the
grid.
"""

import logging
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

# Perceptual RGB weights (ITU-R BT.601)
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def load_image(file_path: str | Path) -> Image.Image:
    """Load and decode an image file.

    Args:
        file_path: Path to image file (PNG, JPG, etc.)

    Returns:
        PIL Image in RGBA mode

    Raises:
        ValueError: If file cannot be loaded or is invalid
    """
    try:
        with Image.open(file_path) as opened:
            # AIDEV-NOTE: Always convert to RGBA for consistent processing
            image = opened.convert("RGBA")
    except (OSError, Image.DecompressionBombError) as e:
        raise ValueError(f"Failed to load image: {e}") from e

    logger.info(
        "Loaded %s (%dx%d pixels)", Path(file_path).name, image.width, image.height
    )
    return image


def as_image(pixels) -> Image.Image:
    """Wrap a decoded pixel buffer as a PIL image.

    Args:
        pixels: PIL image, or a uint8 array of shape (H, W, 4), (H, W, 3)
            or (H, W) in row-major order

    Returns:
        PIL Image (the same object if one was passed in)
    """
    if isinstance(pixels, Image.Image):
        return pixels
    return Image.fromarray(np.asarray(pixels, dtype=np.uint8))


def _resample_filter(image: Image.Image, cols: int, rows: int) -> Image.Resampling:
    """Pick an area-averaging filter for shrinking, Lanczos for enlarging."""
    if image.width >= cols and image.height >= rows:
        return Image.Resampling.BOX
    return Image.Resampling.LANCZOS


def sample_luminance(pixels, cols: int, rows: int) -> np.ndarray:
    """Resample an image to one luminance value per grid cell.

    Args:
        pixels: Decoded image (see ``as_image``)
        cols: Number of grid columns
        rows: Number of grid rows

    Returns:
        Array of shape (rows, cols) with luminance in [0, 1]. Empty if
        either dimension is 0.
    """
    if cols <= 0 or rows <= 0:
        return np.zeros((max(rows, 0), max(cols, 0)))

    image = as_image(pixels)
    # Alpha is ignored: RGB channels are used as stored
    rgb = image.convert("RGB")
    resized = rgb.resize((cols, rows), _resample_filter(rgb, cols, rows))

    channels = np.asarray(resized, dtype=np.float64)
    return np.clip(channels @ LUMA_WEIGHTS / 255.0, 0.0, 1.0)
