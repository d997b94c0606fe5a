"""
Sticker artifact produced by a successful extraction.
"""

import base64
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import numpy as np

from ..common.constants import STICKER_ID_PREFIX, STICKER_MIME_TYPE
from ..common.image_utils import ImageBuffer, decode_png, encode_png


def generate_sticker_id() -> str:
    return f"{STICKER_ID_PREFIX}-{uuid.uuid4().hex}"


@dataclass(frozen=True)
class Sticker:
    """
    An immutable trimmed cutout.

    Attributes:
        id: Unique identifier ("sticker-<hex>")
        png_bytes: PNG-encoded RGBA image
        width: Image width in pixels
        height: Image height in pixels
        created_at: ISO-8601 creation timestamp (UTC)
    """

    id: str
    png_bytes: bytes
    width: int
    height: int
    created_at: str

    @classmethod
    def create(cls, image: ImageBuffer, sticker_id: Optional[str] = None) -> "Sticker":
        """Encode a trimmed buffer as a new sticker."""
        return cls(
            id=sticker_id or generate_sticker_id(),
            png_bytes=encode_png(image.pixels),
            width=image.width,
            height=image.height,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

    @property
    def download_name(self) -> str:
        """File name offered for download, e.g. sticker-3f2a9c1b.png"""
        return f"{STICKER_ID_PREFIX}-{self.id.removeprefix(STICKER_ID_PREFIX + '-')[:8]}.png"

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.png_bytes).decode("ascii")
        return f"data:{STICKER_MIME_TYPE};base64,{encoded}"

    def to_rgba(self) -> np.ndarray:
        """Decode the PNG back into an (H, W, 4) array."""
        return decode_png(self.png_bytes)

    def to_dict(self) -> dict:
        """Metadata without the image payload."""
        return {
            "id": self.id,
            "width": self.width,
            "height": self.height,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict, png_bytes: bytes) -> "Sticker":
        return cls(
            id=data["id"],
            png_bytes=png_bytes,
            width=int(data["width"]),
            height=int(data["height"]),
            created_at=data["created_at"],
        )
