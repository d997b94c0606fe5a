"""
Sticker Studio App Utilities
"""

from .coordinates import display_to_image_coords

__all__ = ["display_to_image_coords"]
