"""
Tests for image utilities.

Pixel buffer types and decode/encode helpers.
"""

import io

import numpy as np
import pytest
from PIL import Image

from sticker_studio.common.exceptions import ImageDecodeError, MaskFormatError
from sticker_studio.common.image_utils import (
    ImageBuffer,
    Mask,
    decode_image,
    decode_png,
    encode_png,
    load_image,
    resize_rgba,
)


def encode(image: Image.Image, fmt: str, **kwargs) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


class TestImageBuffer:
    """Test ImageBuffer class."""

    def test_dimensions(self):
        """Test width/height come from the array shape."""
        image = ImageBuffer(np.zeros((3, 5, 4), dtype=np.uint8))
        assert (image.width, image.height) == (5, 3)
        assert image.size == (5, 3)

    def test_read_only_copy(self):
        """Test the buffer is detached from the input and not writable."""
        source = np.zeros((2, 2, 4), dtype=np.uint8)
        image = ImageBuffer(source)
        source[0, 0] = 255

        assert image.pixels[0, 0, 0] == 0
        with pytest.raises(ValueError):
            image.pixels[0, 0, 0] = 1

    def test_copy_pixels_is_writable(self):
        """Test copy_pixels returns an independent writable array."""
        image = ImageBuffer.solid(2, 2, (1, 2, 3, 4))
        pixels = image.copy_pixels()
        pixels[:] = 0
        assert tuple(image.pixels[0, 0]) == (1, 2, 3, 4)

    @pytest.mark.parametrize("shape", [(2, 2), (2, 2, 3), (0, 2, 4), (2, 0, 4)])
    def test_invalid_shapes(self, shape):
        """Test non-RGBA or empty arrays are rejected."""
        with pytest.raises(ValueError):
            ImageBuffer(np.zeros(shape, dtype=np.uint8))

    def test_from_rgb(self):
        """Test RGB arrays become opaque RGBA."""
        image = ImageBuffer.from_rgb(np.full((2, 3, 3), 7, dtype=np.uint8))
        assert (image.alpha == 255).all()
        assert (image.rgb == 7).all()


class TestMask:
    """Test Mask class."""

    def test_single_channel(self):
        """Test w*h buffers are single-channel."""
        mask = Mask(data=np.zeros(6, dtype=np.uint8), width=3, height=2)
        assert mask.channels == 1
        assert mask.as_grid().shape == (2, 3)

    def test_rgba(self):
        """Test w*h*4 buffers are RGBA."""
        mask = Mask(data=np.zeros(24, dtype=np.uint8), width=3, height=2)
        assert mask.channels == 4
        assert mask.as_grid().shape == (2, 3, 4)

    def test_unknown_layout(self):
        """Test other lengths raise MaskFormatError."""
        mask = Mask(data=np.zeros(12, dtype=np.uint8), width=3, height=2)
        with pytest.raises(MaskFormatError):
            mask.channels

    def test_zero_size_rejected(self):
        """Test masks need at least one cell."""
        with pytest.raises(MaskFormatError):
            Mask(data=np.zeros(0, dtype=np.uint8), width=0, height=1)

    def test_from_bool_array(self):
        """Test boolean arrays map to 0/255."""
        mask = Mask.from_array(np.array([[True, False]]))
        assert mask.as_grid().tolist() == [[255, 0]]

    def test_from_array_bad_shape(self):
        """Test 3-channel arrays are rejected."""
        with pytest.raises(MaskFormatError):
            Mask.from_array(np.zeros((2, 2, 3), dtype=np.uint8))


class TestDecodeImage:
    """Test decode_image function."""

    def test_png_with_alpha(self):
        """Test RGBA PNGs keep their alpha."""
        pixels = np.zeros((4, 6, 4), dtype=np.uint8)
        pixels[..., 0] = 200
        pixels[..., 3] = 128
        image = decode_image(encode(Image.fromarray(pixels), "PNG"))

        assert image.size == (6, 4)
        assert (image.alpha == 128).all()
        assert (image.rgb[..., 0] == 200).all()

    def test_jpeg_is_opaque(self):
        """Test formats without alpha decode as opaque."""
        image = decode_image(encode(Image.new("RGB", (8, 5), (10, 20, 30)), "JPEG"))
        assert image.size == (8, 5)
        assert (image.alpha == 255).all()

    def test_exif_orientation_applied(self):
        """Test EXIF rotation is honored."""
        source = Image.new("RGB", (8, 4), (0, 0, 0))
        exif = Image.Exif()
        exif[0x0112] = 6  # rotate 90 CW
        image = decode_image(encode(source, "JPEG", exif=exif))
        assert image.size == (4, 8)

    @pytest.mark.parametrize("data", [b"", b"definitely not an image"])
    def test_invalid_bytes(self, data):
        """Test empty or corrupt data raises ImageDecodeError."""
        with pytest.raises(ImageDecodeError):
            decode_image(data, source_name="upload.png")

    def test_error_carries_source_name(self):
        """Test the file name is kept in the error details."""
        with pytest.raises(ImageDecodeError) as exc_info:
            decode_image(b"junk", source_name="cat.gif")
        assert exc_info.value.details["source_name"] == "cat.gif"

    def test_load_image(self, tmp_path):
        """Test loading from disk."""
        path = tmp_path / "a.png"
        Image.new("RGBA", (3, 2)).save(path)
        assert load_image(path).size == (3, 2)

    def test_load_missing_file(self, tmp_path):
        """Test a missing path raises ImageDecodeError."""
        with pytest.raises(ImageDecodeError):
            load_image(tmp_path / "missing.png")


class TestPngHelpers:
    """Test PNG encode/decode and resizing."""

    def test_encode_decode_preserves_transparency(self):
        """Test RGBA survives a PNG round trip through OpenCV."""
        pixels = np.zeros((3, 3, 4), dtype=np.uint8)
        pixels[1, 1] = (255, 0, 0, 255)

        data = encode_png(pixels)
        assert data.startswith(b"\x89PNG")
        np.testing.assert_array_equal(decode_png(data)[1, 1], (255, 0, 0, 255))

    def test_resize_same_size_is_identity(self):
        """Test no resampling happens when sizes match."""
        pixels = np.zeros((2, 2, 4), dtype=np.uint8)
        assert resize_rgba(pixels, 2, 2) is pixels

    def test_resize_changes_size(self):
        """Test resampling to a new size."""
        pixels = np.full((2, 2, 4), 255, dtype=np.uint8)
        assert resize_rgba(pixels, 5, 3).shape == (3, 5, 4)
