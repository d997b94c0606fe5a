"""
Custom Exception Classes for Sticker Studio

Provides a hierarchy of exceptions for the segmentation and extraction core,
so the orchestrator can turn each failure into a notification and a safe state.

Usage:
    from sticker_studio.common.exceptions import ImageDecodeError

    try:
        image = decode_image(data)
    except ImageDecodeError as e:
        logger.error(f"Decode failed: {e}")
"""

from typing import Any, Optional


class StickerStudioError(Exception):
    """
    Base exception class for Sticker Studio.

    All custom exceptions inherit from this class, allowing
    broad exception catching at the orchestrator boundary.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ImageDecodeError(StickerStudioError):
    """
    Exception for image decode errors.

    Raised when uploaded bytes are not a supported or intact image.
    """

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if source_name:
            details["source_name"] = source_name
        super().__init__(message, details)
        self.source_name = source_name


class ProviderInitError(StickerStudioError):
    """
    Exception for segmentation provider initialization errors.

    Raised when a backend (e.g. SAM2) cannot be imported or its
    checkpoint cannot be loaded.
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)
        self.provider = provider


class SegmentationError(StickerStudioError):
    """
    Exception for segmentation errors.

    Raised when a provider fails or times out while producing a mask.
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        click_count: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if provider:
            details["provider"] = provider
        if click_count is not None:
            details["click_count"] = click_count
        super().__init__(message, details)
        self.provider = provider
        self.click_count = click_count


class MaskFormatError(StickerStudioError):
    """
    Exception for masks whose buffer matches neither supported encoding.
    """

    def __init__(
        self,
        message: str,
        buffer_size: Optional[int] = None,
        mask_shape: Optional[tuple] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if buffer_size is not None:
            details["buffer_size"] = buffer_size
        if mask_shape is not None:
            details["mask_shape"] = mask_shape
        super().__init__(message, details)
        self.buffer_size = buffer_size
        self.mask_shape = mask_shape


class ExtractionError(StickerStudioError):
    """
    Exception for sticker extraction errors.

    Raised when compositing, trimming, or encoding the cutout fails.
    """

    def __init__(
        self,
        message: str,
        image_size: Optional[tuple[int, int]] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if image_size is not None:
            details["image_size"] = image_size
        super().__init__(message, details)
        self.image_size = image_size


class StoreError(StickerStudioError):
    """
    Exception for collection store errors.

    Raised when the sticker index or image files cannot be read or written.
    """

    def __init__(
        self,
        message: str,
        sticker_id: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if sticker_id:
            details["sticker_id"] = sticker_id
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
        self.sticker_id = sticker_id
        self.operation = operation


class ValidationError(StickerStudioError):
    """
    Exception for validation errors.

    Raised when configuration or input values violate constraints.
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        invalid_value: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if field_name:
            details["field_name"] = field_name
        if invalid_value is not None:
            details["invalid_value"] = str(invalid_value)
        super().__init__(message, details)
        self.field_name = field_name
        self.invalid_value = invalid_value
