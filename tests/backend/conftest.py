"""
バックエンドテスト用フィクスチャ

通知・ストアのフィクスチャと SAM2 予測器のモックを提供します。
実際のモデルなしで SAM2 アダプタをテストできます。
"""

import numpy as np
import pytest
from unittest.mock import MagicMock

from sticker_studio.collection.sticker_store import InMemoryStickerStore
from sticker_studio.common.notifier import RecordingNotifier


@pytest.fixture
def notifier() -> RecordingNotifier:
    """通知を記録するノーティファイア"""
    return RecordingNotifier()


@pytest.fixture
def store() -> InMemoryStickerStore:
    """インメモリのステッカーストア"""
    return InMemoryStickerStore()


@pytest.fixture
def mock_sam2_predictor():
    """SAM2ImagePredictor のモック

    predict() は3候補のマスクを返し、2番目の IoU が最も高くなります。
    """
    predictor = MagicMock()
    masks = np.zeros((3, 20, 30), dtype=np.float32)
    masks[0, :5, :5] = 1.0
    masks[1, 5:15, 10:20] = 1.0
    masks[2, :, :] = 1.0
    predictor.predict.return_value = (masks, np.array([0.5, 0.9, 0.2]), None)
    return predictor
