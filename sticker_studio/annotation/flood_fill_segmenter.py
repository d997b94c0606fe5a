"""
Flood-Fill Segmenter

Deterministic reference segmentation by color region growing.

For each click, the region is the 4-connected set of pixels reachable from
the seed through pixels whose RGB color lies within ``tolerance`` (Euclidean
distance, alpha ignored) of the seed's color. Include regions are painted
first, then exclude regions are cleared, so exclusions always win.
"""

import asyncio
import math
import time
import uuid
from typing import Optional, Sequence

import cv2
import numpy as np

from ..common.constants import (
    DEFAULT_COLOR_TOLERANCE,
    MASK_BACKGROUND_RGBA,
    MASK_FOREGROUND_RGBA,
)
from ..common.image_utils import ImageBuffer, Mask
from ..common.logger import get_logger
from .base_segmenter import BaseSegmenter
from .session import Click, ClickKind

logger = get_logger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return int(math.floor(value + 0.5))


def grow_region(
    rgb: np.ndarray,
    seed_x: int,
    seed_y: int,
    tolerance: float = DEFAULT_COLOR_TOLERANCE,
) -> Optional[np.ndarray]:
    """
    Grow a 4-connected region from a seed pixel.

    A pixel belongs to the region if it is reachable from the seed through
    pixels whose distance to the seed color is <= tolerance.

    Args:
        rgb: (H, W, 3) uint8 color channels
        seed_x: Seed column
        seed_y: Seed row
        tolerance: Maximum Euclidean RGB distance to the seed color

    Returns:
        (H, W) boolean region, or None if the seed is out of bounds
    """
    height, width = rgb.shape[:2]
    if not (0 <= seed_x < width and 0 <= seed_y < height):
        return None

    seed_color = rgb[seed_y, seed_x].astype(np.int32)
    diff = rgb.astype(np.int32) - seed_color
    # Squared distances are exact integers; compare against tolerance^2
    similar = (diff * diff).sum(axis=2) <= tolerance * tolerance

    # Non-recursive fill over the similarity map. Every similar pixel touched
    # by the fill is visited once; dissimilar pixels stop the growth.
    fill_mask = np.zeros((height + 2, width + 2), dtype=np.uint8)
    cv2.floodFill(
        similar.astype(np.uint8),
        fill_mask,
        (seed_x, seed_y),
        newVal=1,
        loDiff=0,
        upDiff=0,
        flags=4 | (255 << 8) | cv2.FLOODFILL_MASK_ONLY,
    )
    return fill_mask[1:-1, 1:-1] > 0


class FloodFillSegmenter(BaseSegmenter):
    """
    Reference segmentation provider based on color region growing.

    Works with any image and needs no model. The output mask is RGBA at
    exactly the image's resolution.
    """

    name = "flood_fill"

    def __init__(self, tolerance: float = DEFAULT_COLOR_TOLERANCE):
        """
        Initialize flood-fill segmenter.

        Args:
            tolerance: Maximum RGB distance from the seed color (0-441)
        """
        if tolerance < 0:
            raise ValueError("tolerance must be non-negative")
        self.tolerance = tolerance

    async def precompute(self, image: ImageBuffer) -> str:
        # Nothing to cache; the token only needs to be unique
        return f"image-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"

    async def segment(
        self,
        image: ImageBuffer,
        clicks: Sequence[Click],
    ) -> Optional[Mask]:
        """Run the fill in a worker thread so the event loop stays free."""
        if not clicks:
            return None
        return await asyncio.to_thread(self.compute_mask, image, clicks)

    def compute_mask(
        self,
        image: ImageBuffer,
        clicks: Sequence[Click],
    ) -> Optional[Mask]:
        """
        Synchronously compute the mask for a click list.

        Args:
            image: Source image
            clicks: Ordered clicks; include clicks are applied before
                exclude clicks regardless of interleaving

        Returns:
            RGBA Mask of the image's size, or None for an empty click list
        """
        if not clicks:
            return None

        started = time.perf_counter()
        rgb = image.rgb
        mask = np.zeros((image.height, image.width, 4), dtype=np.uint8)

        include = [c for c in clicks if c.kind is ClickKind.INCLUDE]
        exclude = [c for c in clicks if c.kind is ClickKind.EXCLUDE]

        for click, value in [(c, MASK_FOREGROUND_RGBA) for c in include] + [
            (c, MASK_BACKGROUND_RGBA) for c in exclude
        ]:
            x, y = round_half_up(click.x), round_half_up(click.y)
            region = grow_region(rgb, x, y, self.tolerance)
            if region is None:
                logger.debug(f"Click ({click.x:.1f}, {click.y:.1f}) is outside the image; skipped")
                continue
            mask[region] = value

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"Flood fill: {len(include)} include / {len(exclude)} exclude clicks, "
            f"{image.width}x{image.height} in {elapsed_ms:.1f} ms"
        )
        return Mask.from_array(mask)
