"""Image file output through PIL. The extension picks the format (.ppm, .png, ...)."""

import logging
import os

from vorogen.core.types import PixelBuffer

logger = logging.getLogger(__name__)


def save_image(buffer: PixelBuffer, path: str) -> str:
    """Write the buffer to path, creating parent directories as needed."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    buffer.to_image().save(path)
    logger.debug('Wrote %dx%d image to %s', buffer.width, buffer.height, path)
    return path
