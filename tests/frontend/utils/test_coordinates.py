"""
座標変換テスト

studio_app/utils/coordinates.py のテスト
"""

import pytest

from studio_app.utils.coordinates import display_to_image_coords


class TestDisplayToImageCoords:
    """表示座標から画像座標への変換テスト"""

    def test_same_size(self):
        """等倍表示では座標は変わらない"""
        assert display_to_image_coords(10, 20, 100, 50, 100, 50) == (10, 20)

    def test_scaled_down_display(self):
        """縮小表示ではスケールが掛かる"""
        x, y = display_to_image_coords(100, 50, 400, 200, 1600, 800)
        assert (x, y) == (400.0, 200.0)

    def test_fractional_coordinates(self):
        """小数座標はそのまま保持される"""
        x, y = display_to_image_coords(1, 1, 3, 3, 10, 10)
        assert x == pytest.approx(10 / 3)
        assert y == pytest.approx(10 / 3)

    def test_out_of_range_not_clamped(self):
        """範囲外の座標はクランプされない"""
        assert display_to_image_coords(-5, 120, 100, 100, 200, 200) == (-10, 240)

    def test_invalid_display_size(self):
        """表示サイズが0の場合はエラー"""
        with pytest.raises(ValueError):
            display_to_image_coords(1, 1, 0, 10, 10, 10)
