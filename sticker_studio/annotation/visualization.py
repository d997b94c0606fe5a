"""
Preview drawing utilities.

Renders the current mask and click markers over the source image for the
interactive surface. Works on RGB arrays; colors are RGB.
"""

from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from ..common.constants import (
    DEFAULT_MARKER_RADIUS,
    DEFAULT_MASK_ALPHA,
    DEFAULT_MASK_COLOR,
    EXCLUDE_MARKER_COLOR,
    INCLUDE_MARKER_COLOR,
)
from ..common.image_utils import ImageBuffer
from .flood_fill_segmenter import round_half_up
from .session import Click

WHITE = (255, 255, 255)


def draw_mask_overlay(
    image: np.ndarray,
    foreground: np.ndarray,
    color: Tuple[int, int, int] = DEFAULT_MASK_COLOR,
    alpha: float = DEFAULT_MASK_ALPHA,
) -> np.ndarray:
    """
    Blend a tint over foreground pixels.

    Args:
        image: RGB image array
        foreground: (H, W) boolean array at the image's size
        color: Overlay color (RGB)
        alpha: Overlay opacity

    Returns:
        New RGB array
    """
    display = image.copy()
    tint = np.zeros_like(display)
    tint[foreground] = color
    blended = cv2.addWeighted(display, 1.0 - alpha, tint, alpha, 0)
    display[foreground] = blended[foreground]
    return display


def draw_clicks(
    image: np.ndarray,
    clicks: Sequence[Click],
    radius: int = DEFAULT_MARKER_RADIUS,
) -> np.ndarray:
    """
    Draw click markers: green "+" for include, red "-" for exclude.

    Returns:
        New RGB array
    """
    display = image.copy()
    arm = max(2, radius // 2)
    for click in clicks:
        x, y = round_half_up(click.x), round_half_up(click.y)
        color = INCLUDE_MARKER_COLOR if click.is_include else EXCLUDE_MARKER_COLOR
        cv2.circle(display, (x, y), radius, color, -1, lineType=cv2.LINE_AA)
        cv2.circle(display, (x, y), radius, WHITE, 2, lineType=cv2.LINE_AA)
        cv2.line(display, (x - arm, y), (x + arm, y), WHITE, 2)
        if click.is_include:
            cv2.line(display, (x, y - arm), (x, y + arm), WHITE, 2)
    return display


def render_preview(
    image: ImageBuffer,
    clicks: Sequence[Click],
    foreground: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Compose the annotation preview.

    Args:
        image: Source image
        clicks: Clicks to mark
        foreground: Optional (H, W) boolean mask classification

    Returns:
        (H, W, 3) uint8 RGB array
    """
    display = np.ascontiguousarray(image.rgb)
    if foreground is not None:
        display = draw_mask_overlay(display, foreground)
    return draw_clicks(display, clicks)
