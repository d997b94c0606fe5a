"""
Tests for the exception hierarchy.
"""

import pytest

from sticker_studio.common.exceptions import (
    ExtractionError,
    ImageDecodeError,
    MaskFormatError,
    ProviderInitError,
    SegmentationError,
    StickerStudioError,
    StoreError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception classes."""

    @pytest.mark.parametrize(
        "exc_class",
        [ImageDecodeError, ProviderInitError, SegmentationError, MaskFormatError,
         ExtractionError, StoreError, ValidationError],
    )
    def test_subclasses_base(self, exc_class):
        """Test every error can be caught as StickerStudioError."""
        assert issubclass(exc_class, StickerStudioError)

    def test_str_without_details(self):
        """Test plain message rendering."""
        assert str(StickerStudioError("boom")) == "boom"

    def test_str_with_details(self):
        """Test details are appended."""
        error = SegmentationError("failed", provider="sam2", click_count=3)
        assert str(error) == "failed | Details: {'provider': 'sam2', 'click_count': 3}"
        assert error.click_count == 3

    def test_store_error_context(self):
        """Test StoreError keeps the sticker id and operation."""
        error = StoreError("cannot write", sticker_id="sticker-1", operation="add")
        assert error.details == {"sticker_id": "sticker-1", "operation": "add"}

    def test_validation_error_stringifies_value(self):
        """Test invalid values are stored as strings in details."""
        error = ValidationError("bad", field_name="padding", invalid_value=-1)
        assert error.details["invalid_value"] == "-1"
        assert error.invalid_value == -1
