"""
Sticker Studio - Annotation Module

Click sessions and the segmentation providers that turn clicks into masks.
"""

from .session import AnnotationSession, Click, ClickKind
from .base_segmenter import BaseSegmenter
from .flood_fill_segmenter import FloodFillSegmenter, grow_region, round_half_up
from .sam2_segmenter import SAM2Segmenter
from .segmenter_factory import create_segmenter
from .visualization import draw_clicks, draw_mask_overlay, render_preview

__all__ = [
    "AnnotationSession",
    "Click",
    "ClickKind",
    "BaseSegmenter",
    "FloodFillSegmenter",
    "grow_region",
    "round_half_up",
    "SAM2Segmenter",
    "create_segmenter",
    "draw_clicks",
    "draw_mask_overlay",
    "render_preview",
]
