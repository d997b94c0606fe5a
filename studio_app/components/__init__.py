"""
Sticker Studio App Components
"""

from .studio_workspace import render_studio_workspace, handle_canvas_click
from .sticker_collection import render_sticker_collection

__all__ = [
    "render_studio_workspace",
    "handle_canvas_click",
    "render_sticker_collection",
]
