"""
Sticker Studio - Common Constants

Shared constants used across the annotation, extraction, and collection modules.
"""

from typing import List, Tuple

# =============================================================================
# Image File Extensions
# =============================================================================
# Upload formats accepted by the studio
IMAGE_EXTENSIONS: List[str] = [".jpg", ".jpeg", ".png", ".bmp", ".gif", ".webp"]


# =============================================================================
# Flood-Fill Segmentation Defaults
# =============================================================================
# Euclidean RGB distance (0-255 per channel) a neighbour may have from the seed
DEFAULT_COLOR_TOLERANCE: float = 30.0

# Mask value written for region pixels (RGBA)
MASK_FOREGROUND_RGBA: Tuple[int, int, int, int] = (255, 255, 255, 255)
MASK_BACKGROUND_RGBA: Tuple[int, int, int, int] = (0, 0, 0, 0)


# =============================================================================
# Extraction Defaults
# =============================================================================
# Mask cells strictly above this value are foreground (0-255 scale)
DEFAULT_MASK_THRESHOLD: int = 128

# Pixels sampled when probing whether an RGBA mask is grayscale
DEFAULT_GRAYSCALE_PROBE_PIXELS: int = 250

# Padding around the opaque bounding box when trimming
DEFAULT_TRIM_PADDING: int = 10

# Sticker encoding
STICKER_MIME_TYPE: str = "image/png"
STICKER_ID_PREFIX: str = "sticker"


# =============================================================================
# Orchestration Defaults
# =============================================================================
# Seconds a provider may take for one segmentation call (0 disables)
DEFAULT_SEGMENT_TIMEOUT: float = 30.0


# =============================================================================
# SAM2 Model Defaults
# =============================================================================
SAM2_DEFAULT_CHECKPOINT: str = "sam2.1_hiera_base_plus.pt"
SAM2_DEFAULT_DEVICE: str = "cpu"
SAM2_INCLUDE_LABEL: int = 1
SAM2_EXCLUDE_LABEL: int = 0


# =============================================================================
# Preview Defaults
# =============================================================================
# Colors are RGB (the preview works on RGBA buffers, not OpenCV BGR)
DEFAULT_MASK_COLOR: Tuple[int, int, int] = (59, 130, 246)  # Blue
DEFAULT_MASK_ALPHA: float = 0.4
INCLUDE_MARKER_COLOR: Tuple[int, int, int] = (34, 197, 94)  # Green
EXCLUDE_MARKER_COLOR: Tuple[int, int, int] = (239, 68, 68)  # Red
DEFAULT_MARKER_RADIUS: int = 10


# =============================================================================
# Collection Store Defaults
# =============================================================================
DEFAULT_STORE_DIR: str = "data/stickers"
STORE_INDEX_FILENAME: str = "stickers.json"
