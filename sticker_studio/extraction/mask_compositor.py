"""
Mask Compositor

Applies a segmentation mask to the source image as an alpha filter.

Masks arrive in one of two layouts, told apart only by buffer length:
- single-channel (one byte per cell), mapped to image pixels by
  nearest-neighbour index scaling
- RGBA (four bytes per cell), resampled to the image size and classified
  by alpha first, then grayscale brightness, then any-channel brightness
"""

import numpy as np

from ..common.constants import DEFAULT_GRAYSCALE_PROBE_PIXELS, DEFAULT_MASK_THRESHOLD
from ..common.image_utils import ImageBuffer, Mask, resize_rgba
from ..common.logger import get_logger

logger = get_logger(__name__)


def is_grayscale_mask(rgba: np.ndarray, probe_pixels: int = DEFAULT_GRAYSCALE_PROBE_PIXELS) -> bool:
    """
    Probe whether an RGBA mask encodes membership as gray levels.

    Args:
        rgba: (H, W, 4) mask grid
        probe_pixels: Number of leading pixels (row-major) to sample

    Returns:
        True if every sampled pixel has R == G == B
    """
    sample = rgba.reshape(-1, 4)[:probe_pixels]
    return bool(np.all((sample[:, 0] == sample[:, 1]) & (sample[:, 1] == sample[:, 2])))


class MaskCompositor:
    """
    Turn a mask into transparency on a copy of the source image.

    Foreground pixels keep their original RGBA (including partial alpha);
    background pixels get alpha 0.
    """

    def __init__(
        self,
        threshold: int = DEFAULT_MASK_THRESHOLD,
        grayscale_probe_pixels: int = DEFAULT_GRAYSCALE_PROBE_PIXELS,
    ):
        """
        Initialize MaskCompositor.

        Args:
            threshold: Mask values strictly above this are foreground (default: 128)
            grayscale_probe_pixels: Pixels sampled to detect gray RGBA masks (default: 250)
        """
        self.threshold = threshold
        self.grayscale_probe_pixels = grayscale_probe_pixels

    def foreground_mask(self, mask: Mask, width: int, height: int) -> np.ndarray:
        """
        Classify every image pixel as foreground or background.

        Args:
            mask: Mask in either supported encoding, any resolution
            width: Image width
            height: Image height

        Returns:
            (height, width) boolean array, True for foreground

        Raises:
            MaskFormatError: if the mask buffer matches neither layout
        """
        if mask.channels == 1:
            return self._single_channel_foreground(mask, width, height)
        return self._rgba_foreground(mask, width, height)

    def _single_channel_foreground(self, mask: Mask, width: int, height: int) -> np.ndarray:
        grid = mask.as_grid()
        # maskX = floor(x * maskWidth / imageWidth), same for rows
        mask_x = (np.arange(width, dtype=np.int64) * mask.width) // width
        mask_y = (np.arange(height, dtype=np.int64) * mask.height) // height
        sampled = grid[mask_y[:, None], mask_x[None, :]]
        return sampled > self.threshold

    def _rgba_foreground(self, mask: Mask, width: int, height: int) -> np.ndarray:
        grid = mask.as_grid()
        grayscale = is_grayscale_mask(grid, self.grayscale_probe_pixels)
        sampled = resize_rgba(grid, width, height)

        t = self.threshold
        alpha_fg = sampled[:, :, 3] > t
        if grayscale:
            color_fg = sampled[:, :, 0] > t
        else:
            color_fg = np.any(sampled[:, :, :3] > t, axis=2)

        logger.debug(
            f"RGBA mask {mask.width}x{mask.height} -> {width}x{height}, "
            f"grayscale={grayscale}"
        )
        return alpha_fg | color_fg

    def composite(self, image: ImageBuffer, mask: Mask) -> ImageBuffer:
        """
        Produce a copy of ``image`` with background pixels made transparent.

        Args:
            image: Source image (not modified)
            mask: Segmentation mask

        Returns:
            New ImageBuffer with the image's dimensions
        """
        foreground = self.foreground_mask(mask, image.width, image.height)
        pixels = image.copy_pixels()
        pixels[~foreground, 3] = 0
        return ImageBuffer(pixels)
