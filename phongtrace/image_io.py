"""
Image output for rendered framebuffers.

Colors are clamped to [0, 1] and quantized to 8 bits only here; the
renderer itself produces unclamped values.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Union
import numpy as np
from PIL import Image as PILImage

from .renderer import Framebuffer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def quantize(framebuffer: Framebuffer) -> np.ndarray:
    """Convert a framebuffer to 8-bit RGB.

    Each channel becomes round(255 * clamp(value, 0, 1)).

    Args:
        framebuffer: Rendered framebuffer

    Returns:
        uint8 array of shape (height, width, 3)
    """
    hdr = framebuffer.to_array()
    return np.round(np.clip(hdr, 0.0, 1.0) * 255).astype(np.uint8)


def write_ppm(framebuffer: Framebuffer, filename: PathLike) -> None:
    """Write a framebuffer as a binary PPM (P6) file.

    The file holds the header "P6\\n<width> <height>\\n255\\n" followed by
    width * height RGB byte triples in row-major order.

    Raises:
        OSError: If the file cannot be written
    """
    pil_image = PILImage.fromarray(quantize(framebuffer))
    pil_image.save(filename, format='PPM')
    logger.info("Wrote %dx%d PPM to %s", framebuffer.width, framebuffer.height, filename)


def save_image(framebuffer: Framebuffer, filename: PathLike) -> None:
    """Save a framebuffer to a file; the extension selects the format.

    Args:
        framebuffer: Rendered framebuffer
        filename: Output filename (.ppm, .png, .bmp, ...)

    Raises:
        OSError: If the file cannot be written
        ValueError: If Pillow does not know the extension
    """
    if Path(filename).suffix.lower() == '.ppm':
        write_ppm(framebuffer, filename)
        return

    pil_image = PILImage.fromarray(quantize(framebuffer))
    pil_image.save(filename)
    logger.info("Wrote %dx%d image to %s", framebuffer.width, framebuffer.height, filename)
