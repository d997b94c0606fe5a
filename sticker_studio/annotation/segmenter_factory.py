"""
Segmenter factory.

Builds the configured segmentation provider.
"""

from ..common.config_utils import SegmenterConfig
from ..common.logger import get_logger
from .base_segmenter import BaseSegmenter
from .flood_fill_segmenter import FloodFillSegmenter
from .sam2_segmenter import SAM2Segmenter

logger = get_logger(__name__)


def create_segmenter(config: SegmenterConfig) -> BaseSegmenter:
    """
    Create a segmenter for the configured backend.

    Args:
        config: Segmenter configuration

    Returns:
        FloodFillSegmenter or SAM2Segmenter
    """
    if config.backend == "sam2":
        logger.info(f"Using SAM2 segmenter ({config.sam2_checkpoint}, {config.device})")
        return SAM2Segmenter(checkpoint=config.sam2_checkpoint, device=config.device)

    logger.info(f"Using flood-fill segmenter (tolerance={config.tolerance})")
    return FloodFillSegmenter(tolerance=config.tolerance)
