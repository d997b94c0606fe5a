"""
Coordinate conversion between the displayed image and source pixels.
"""

from typing import Tuple


def display_to_image_coords(
    display_x: float,
    display_y: float,
    display_width: float,
    display_height: float,
    image_width: int,
    image_height: int,
) -> Tuple[float, float]:
    """
    Map a click on the displayed (scaled) image to source-image pixel space.

    Args:
        display_x: Click x relative to the displayed image's left edge
        display_y: Click y relative to the displayed image's top edge
        display_width: Rendered width of the image
        display_height: Rendered height of the image
        image_width: Source image width
        image_height: Source image height

    Returns:
        (x, y) as floats; not clamped to the image bounds
    """
    if display_width <= 0 or display_height <= 0:
        raise ValueError("Display size must be positive")
    scale_x = image_width / display_width
    scale_y = image_height / display_height
    return display_x * scale_x, display_y * scale_y
