"""
Sticker Studio - Collection Module

Sticker artifacts and the stores that keep them.
"""

from .sticker import Sticker, generate_sticker_id
from .sticker_store import StickerStore, InMemoryStickerStore, JsonStickerStore

__all__ = [
    "Sticker",
    "generate_sticker_id",
    "StickerStore",
    "InMemoryStickerStore",
    "JsonStickerStore",
]
