"""
スタジオワークスペース コンポーネントテスト

studio_app/components/studio_workspace.py のテスト
"""

from unittest.mock import MagicMock

import pytest

from sticker_studio.annotation.flood_fill_segmenter import FloodFillSegmenter
from sticker_studio.annotation.session import ClickKind
from sticker_studio.collection.sticker_store import InMemoryStickerStore
from sticker_studio.extraction.orchestrator import ExtractionOrchestrator, StudioState


@pytest.fixture
def workspace(mock_streamlit):
    """初期化済みオーケストレータとコンポーネントモジュール"""
    from studio_app.components import studio_workspace
    from studio_app.services.workspace import LOOP_KEY, run_async

    orchestrator = ExtractionOrchestrator(FloodFillSegmenter(), InMemoryStickerStore())
    run_async(orchestrator.initialize())
    yield orchestrator, studio_workspace, run_async
    mock_streamlit.session_state[LOOP_KEY].close()


def make_upload(name: str, data: bytes) -> MagicMock:
    uploaded = MagicMock()
    uploaded.name = name
    uploaded.size = len(data)
    uploaded.getvalue.return_value = data
    return uploaded


# =============================================================================
# TestHandleUpload
# =============================================================================


class TestHandleUpload:
    """アップロード処理のテスト"""

    def test_no_upload(self, workspace):
        """ファイルがなければ何もしない"""
        orchestrator, component, _ = workspace
        assert component.handle_upload(orchestrator, None) is False
        assert orchestrator.state is StudioState.EMPTY

    def test_upload_loaded_once(self, workspace, red_png_bytes):
        """同じファイルは再実行時に再読込されない"""
        orchestrator, component, _ = workspace
        uploaded = make_upload("red.png", red_png_bytes)

        assert component.handle_upload(orchestrator, uploaded) is True
        session = orchestrator.session
        assert component.handle_upload(orchestrator, uploaded) is False
        assert orchestrator.session is session
        assert orchestrator.state is StudioState.LOADED

    def test_invalid_upload(self, workspace):
        """壊れたファイルは読み込まれない"""
        orchestrator, component, _ = workspace
        uploaded = make_upload("broken.png", b"not an image")

        assert component.handle_upload(orchestrator, uploaded) is False
        assert orchestrator.state is StudioState.EMPTY

    def test_new_upload_resets_click_mode(self, workspace, mock_streamlit, red_png_bytes, two_region_png_bytes):
        """新しい画像の読込でクリックモードが Include に戻る"""
        orchestrator, component, _ = workspace
        component.handle_upload(orchestrator, make_upload("red.png", red_png_bytes))
        orchestrator.click_mode = ClickKind.EXCLUDE
        mock_streamlit.session_state[component.CLICK_MODE_KEY] = ClickKind.EXCLUDE

        assert component.handle_upload(orchestrator, make_upload("two.png", two_region_png_bytes)) is True

        assert component.CLICK_MODE_KEY not in mock_streamlit.session_state
        assert orchestrator.click_mode is ClickKind.INCLUDE

    def test_failed_upload_keeps_click_mode(self, workspace, mock_streamlit, red_png_bytes):
        """読込に失敗した場合はクリックモードを保持する"""
        orchestrator, component, _ = workspace
        component.handle_upload(orchestrator, make_upload("red.png", red_png_bytes))
        mock_streamlit.session_state[component.CLICK_MODE_KEY] = ClickKind.EXCLUDE

        assert component.handle_upload(orchestrator, make_upload("broken.png", b"not an image")) is False

        assert mock_streamlit.session_state[component.CLICK_MODE_KEY] is ClickKind.EXCLUDE


# =============================================================================
# TestHandleCanvasClick
# =============================================================================


class TestHandleCanvasClick:
    """キャンバスクリック処理のテスト"""

    def test_no_event(self, workspace, red_png_bytes):
        """イベントがなければ何もしない"""
        orchestrator, component, run_async = workspace
        run_async(orchestrator.load_image(red_png_bytes))
        assert component.handle_canvas_click(orchestrator, None) is False

    def test_no_image(self, workspace):
        """画像未読込ならクリックは無視される"""
        orchestrator, component, _ = workspace
        event = {"x": 1, "y": 1, "width": 10, "height": 10, "unix_time": 1}
        assert component.handle_canvas_click(orchestrator, event) is False

    def test_click_scaled_to_image(self, workspace, two_region_png_bytes):
        """表示座標が画像座標に変換されてマスクが生成される"""
        orchestrator, component, run_async = workspace
        run_async(orchestrator.load_image(two_region_png_bytes))
        orchestrator.click_mode = ClickKind.INCLUDE

        event = {"x": 5, "y": 20, "width": 50, "height": 50, "unix_time": 100}
        assert component.handle_canvas_click(orchestrator, event) is True

        click = orchestrator.clicks[0]
        assert (click.x, click.y) == (10.0, 40.0)
        assert orchestrator.state is StudioState.MASKED

    def test_same_event_processed_once(self, workspace, two_region_png_bytes):
        """同じイベントは再実行時に二重登録されない"""
        orchestrator, component, run_async = workspace
        run_async(orchestrator.load_image(two_region_png_bytes))

        event = {"x": 5, "y": 5, "width": 100, "height": 100, "unix_time": 7}
        component.handle_canvas_click(orchestrator, event)
        assert component.handle_canvas_click(orchestrator, event) is False
        assert len(orchestrator.clicks) == 1
