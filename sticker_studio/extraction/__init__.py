"""
Sticker Studio - Extraction Module

Mask compositing, bounds trimming, and the workflow orchestrator.
"""

from .mask_compositor import MaskCompositor, is_grayscale_mask
from .bounds_trimmer import BoundsTrimmer, find_content_bounds
from .orchestrator import ExtractionOrchestrator, StudioState

__all__ = [
    "MaskCompositor",
    "is_grayscale_mask",
    "BoundsTrimmer",
    "find_content_bounds",
    "ExtractionOrchestrator",
    "StudioState",
]
