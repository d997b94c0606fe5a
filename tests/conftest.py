"""
共通テストフィクスチャ

このファイルはバックエンド・フロントエンド両方のテストで
使用される共通のフィクスチャを定義します。
"""

import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from sticker_studio.common.image_utils import ImageBuffer


@pytest.fixture
def project_root() -> Path:
    """プロジェクトのルートディレクトリを返す"""
    return Path(__file__).parent.parent


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """テスト用の一時ディレクトリを提供"""
    return tmp_path


@pytest.fixture
def red_image() -> ImageBuffer:
    """50x50 の不透明な赤一色画像"""
    return ImageBuffer.solid(50, 50, (255, 0, 0, 255))


@pytest.fixture
def two_region_image() -> ImageBuffer:
    """左半分が赤、右半分が青の 100x100 画像"""
    pixels = np.zeros((100, 100, 4), dtype=np.uint8)
    pixels[:, :50] = (255, 0, 0, 255)
    pixels[:, 50:] = (0, 0, 255, 255)
    return ImageBuffer(pixels)


@pytest.fixture
def square_on_white_image() -> ImageBuffer:
    """白背景の中央 (40..59) に黒い正方形がある 100x100 画像"""
    pixels = np.full((100, 100, 4), 255, dtype=np.uint8)
    pixels[40:60, 40:60, :3] = 0
    return ImageBuffer(pixels)


def encode_with_pil(pixels: np.ndarray, fmt: str = "PNG") -> bytes:
    """numpy 配列を PIL でエンコードしてバイト列を返す"""
    buffer = io.BytesIO()
    Image.fromarray(pixels).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def red_png_bytes(red_image: ImageBuffer) -> bytes:
    """赤一色画像の PNG バイト列"""
    return encode_with_pil(red_image.copy_pixels())


@pytest.fixture
def two_region_png_bytes(two_region_image: ImageBuffer) -> bytes:
    """二色画像の PNG バイト列"""
    return encode_with_pil(two_region_image.copy_pixels())
