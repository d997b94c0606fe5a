"""
Bounds Trimmer

Crops a composited buffer to the padded bounding box of its visible pixels.
"""

from typing import Optional, Tuple

import numpy as np

from ..common.constants import DEFAULT_TRIM_PADDING
from ..common.image_utils import ImageBuffer


def find_content_bounds(pixels: np.ndarray) -> Optional[Tuple[int, int, int, int]]:
    """
    Find the bounding box of pixels with non-zero alpha.

    Args:
        pixels: (H, W, 4) RGBA array

    Returns:
        Tuple (left, top, right, bottom), inclusive, or None if every
        pixel is fully transparent
    """
    visible = pixels[:, :, 3] != 0
    rows = np.any(visible, axis=1)
    cols = np.any(visible, axis=0)
    if not np.any(rows):
        return None

    y_indices = np.where(rows)[0]
    x_indices = np.where(cols)[0]
    return (int(x_indices[0]), int(y_indices[0]), int(x_indices[-1]), int(y_indices[-1]))


class BoundsTrimmer:
    """Crop RGBA buffers to their visible content plus padding."""

    def __init__(self, padding: int = DEFAULT_TRIM_PADDING):
        """
        Initialize BoundsTrimmer.

        Args:
            padding: Pixels kept around the content on each side (default: 10)
        """
        self.padding = padding

    def padded_bounds(self, image: ImageBuffer) -> Optional[Tuple[int, int, int, int]]:
        """
        Content bounds expanded by padding and clamped to the buffer.

        Returns:
            Tuple (left, top, right, bottom), inclusive, or None if empty
        """
        bounds = find_content_bounds(image.pixels)
        if bounds is None:
            return None

        left, top, right, bottom = bounds
        return (
            max(0, left - self.padding),
            max(0, top - self.padding),
            min(image.width - 1, right + self.padding),
            min(image.height - 1, bottom + self.padding),
        )

    def trim(self, image: ImageBuffer) -> ImageBuffer:
        """
        Crop to the padded content box.

        Args:
            image: Composited RGBA buffer

        Returns:
            New cropped buffer, or ``image`` itself when nothing is visible
        """
        bounds = self.padded_bounds(image)
        if bounds is None:
            return image

        left, top, right, bottom = bounds
        return ImageBuffer(image.pixels[top:bottom + 1, left:right + 1])
