"""
Sticker Studio - Image Utilities

Pixel buffer types and the decode/encode helpers shared by segmentation,
extraction, and the collection store.
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .exceptions import ImageDecodeError, MaskFormatError


@dataclass(frozen=True, eq=False)
class ImageBuffer:
    """
    Immutable RGBA pixel grid.

    Attributes:
        pixels: (H, W, 4) uint8 array, write-protected
    """

    pixels: np.ndarray

    def __post_init__(self):
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) RGBA pixels, got shape {pixels.shape}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise ValueError("Image width and height must be at least 1")
        if pixels.dtype != np.uint8:
            pixels = pixels.astype(np.uint8)
        # Own a private read-only copy so no caller can mutate the grid
        pixels = np.array(pixels, copy=True)
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)"""
        return (self.width, self.height)

    @property
    def rgb(self) -> np.ndarray:
        """(H, W, 3) view of the color channels."""
        return self.pixels[:, :, :3]

    @property
    def alpha(self) -> np.ndarray:
        """(H, W) view of the alpha channel."""
        return self.pixels[:, :, 3]

    def copy_pixels(self) -> np.ndarray:
        """Return a writable copy of the pixels."""
        return np.array(self.pixels, copy=True)

    @classmethod
    def from_rgb(cls, rgb: np.ndarray) -> "ImageBuffer":
        """Build an opaque buffer from an (H, W, 3) RGB array."""
        rgb = np.asarray(rgb, dtype=np.uint8)
        alpha = np.full(rgb.shape[:2], 255, dtype=np.uint8)
        return cls(np.dstack([rgb, alpha]))

    @classmethod
    def solid(
        cls,
        width: int,
        height: int,
        rgba: Tuple[int, int, int, int] = (0, 0, 0, 0),
    ) -> "ImageBuffer":
        """Build a buffer filled with a single RGBA color."""
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = rgba
        return cls(pixels)


@dataclass(frozen=True, eq=False)
class Mask:
    """
    Foreground/background classification grid.

    The buffer holds either one byte per cell (single-channel) or four
    bytes per cell (RGBA); producers are not required to say which.
    Resolution may differ from the source image.

    Attributes:
        data: uint8 buffer of width*height or width*height*4 values
        width: Mask grid width
        height: Mask grid height
    """

    data: np.ndarray
    width: int
    height: int

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise MaskFormatError(
                "Mask width and height must be at least 1",
                mask_shape=(self.height, self.width),
            )
        data = np.array(self.data, dtype=np.uint8, copy=True)
        data.setflags(write=False)
        object.__setattr__(self, "data", data)

    @property
    def channels(self) -> int:
        """1 or 4, decided by buffer length."""
        cells = self.width * self.height
        if self.data.size == cells:
            return 1
        if self.data.size == cells * 4:
            return 4
        raise MaskFormatError(
            "Mask buffer length matches neither single-channel nor RGBA layout",
            buffer_size=int(self.data.size),
            mask_shape=(self.height, self.width),
        )

    def as_grid(self) -> np.ndarray:
        """Return the buffer as (H, W) or (H, W, 4) depending on its encoding."""
        if self.channels == 1:
            return self.data.reshape(self.height, self.width)
        return self.data.reshape(self.height, self.width, 4)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Mask":
        """
        Wrap an (H, W), (H, W, 4) or boolean array as a Mask.

        Boolean arrays are mapped to 0/255 single-channel cells.
        """
        array = np.asarray(array)
        if array.dtype == bool:
            array = array.astype(np.uint8) * 255
        if array.ndim == 2:
            height, width = array.shape
        elif array.ndim == 3 and array.shape[2] == 4:
            height, width = array.shape[:2]
        else:
            raise MaskFormatError(
                "Mask arrays must be (H, W) or (H, W, 4)",
                mask_shape=tuple(array.shape),
            )
        return cls(data=array.reshape(-1), width=width, height=height)


def decode_image(data: bytes, source_name: Optional[str] = None) -> ImageBuffer:
    """
    Decode uploaded bytes into an RGBA buffer.

    EXIF orientation is applied so pixel space matches what a browser shows.

    Args:
        data: Encoded image bytes (PNG, JPEG, GIF, WebP, BMP...)
        source_name: Optional file name for error context

    Returns:
        ImageBuffer with width/height >= 1

    Raises:
        ImageDecodeError: if the bytes are empty, corrupt, or unsupported
    """
    if not data:
        raise ImageDecodeError("Image data is empty", source_name=source_name)

    try:
        with Image.open(io.BytesIO(data)) as pil_image:
            pil_image.load()
            pil_image = ImageOps.exif_transpose(pil_image)
            rgba = np.asarray(pil_image.convert("RGBA"), dtype=np.uint8)
    except UnidentifiedImageError as exc:
        raise ImageDecodeError(
            "File is not a recognized image", source_name=source_name
        ) from exc
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(
            f"Failed to decode image: {exc}", source_name=source_name
        ) from exc

    if rgba.ndim != 3 or rgba.shape[0] < 1 or rgba.shape[1] < 1:
        raise ImageDecodeError("Decoded image has no pixels", source_name=source_name)

    return ImageBuffer(rgba)


def load_image(path: Union[str, Path]) -> ImageBuffer:
    """
    Load an image file from disk.

    Raises:
        ImageDecodeError: if the file is missing or not an image
    """
    path = Path(path)
    if not path.is_file():
        raise ImageDecodeError("Image file not found", source_name=str(path))
    return decode_image(path.read_bytes(), source_name=path.name)


def encode_png(pixels: np.ndarray) -> bytes:
    """
    Encode an (H, W, 4) RGBA array as PNG bytes, keeping transparency.

    Raises:
        ValueError: if OpenCV fails to encode the buffer
    """
    bgra = cv2.cvtColor(np.ascontiguousarray(pixels, dtype=np.uint8), cv2.COLOR_RGBA2BGRA)
    ok, encoded = cv2.imencode(".png", bgra)
    if not ok:
        raise ValueError("PNG encoding failed")
    return encoded.tobytes()


def decode_png(data: bytes) -> np.ndarray:
    """Decode PNG bytes into an (H, W, 4) RGBA array."""
    return decode_image(data).copy_pixels()


def resize_rgba(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Resample an RGBA grid with bilinear scaling.

    Matches how a canvas draws a smaller or larger bitmap at a new size.
    """
    if pixels.shape[1] == width and pixels.shape[0] == height:
        return pixels
    return cv2.resize(pixels, (width, height), interpolation=cv2.INTER_LINEAR)

