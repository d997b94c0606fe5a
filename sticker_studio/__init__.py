"""
Sticker Studio

Interactive click-to-segment sticker extraction.
"""

__version__ = "0.1.0"
