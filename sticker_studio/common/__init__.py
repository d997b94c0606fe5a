"""
Sticker Studio - Common Utilities Module

Shared constants, pixel buffer types, configuration, logging, errors,
and notifications.
"""

from .constants import (
    IMAGE_EXTENSIONS,
    DEFAULT_COLOR_TOLERANCE,
    DEFAULT_MASK_THRESHOLD,
    DEFAULT_GRAYSCALE_PROBE_PIXELS,
    DEFAULT_TRIM_PADDING,
    DEFAULT_SEGMENT_TIMEOUT,
)

from .exceptions import (
    StickerStudioError,
    ImageDecodeError,
    ProviderInitError,
    SegmentationError,
    MaskFormatError,
    ExtractionError,
    StoreError,
    ValidationError,
)

from .image_utils import (
    ImageBuffer,
    Mask,
    decode_image,
    load_image,
    encode_png,
    decode_png,
    resize_rgba,
)

from .config_utils import (
    SegmenterConfig,
    ExtractionConfig,
    StudioConfig,
    get_sam2_model_config,
    load_studio_config,
    get_config,
    reload_config,
)

from .logger import get_logger, set_log_level, set_global_log_level, add_file_handler

from .notifier import NotificationKind, Notifier, LoggingNotifier, RecordingNotifier

__all__ = [
    # Constants
    "IMAGE_EXTENSIONS",
    "DEFAULT_COLOR_TOLERANCE",
    "DEFAULT_MASK_THRESHOLD",
    "DEFAULT_GRAYSCALE_PROBE_PIXELS",
    "DEFAULT_TRIM_PADDING",
    "DEFAULT_SEGMENT_TIMEOUT",
    # Exceptions
    "StickerStudioError",
    "ImageDecodeError",
    "ProviderInitError",
    "SegmentationError",
    "MaskFormatError",
    "ExtractionError",
    "StoreError",
    "ValidationError",
    # Image utilities
    "ImageBuffer",
    "Mask",
    "decode_image",
    "load_image",
    "encode_png",
    "decode_png",
    "resize_rgba",
    # Configuration
    "SegmenterConfig",
    "ExtractionConfig",
    "StudioConfig",
    "get_sam2_model_config",
    "load_studio_config",
    "get_config",
    "reload_config",
    # Logging
    "get_logger",
    "set_log_level",
    "set_global_log_level",
    "add_file_handler",
    # Notifications
    "NotificationKind",
    "Notifier",
    "LoggingNotifier",
    "RecordingNotifier",
]
