"""
ワークスペースサービス テスト

studio_app/services/workspace.py のテスト
"""

import pytest

from sticker_studio.common import config_utils


@pytest.fixture
def studio_env(monkeypatch, tmp_path):
    """一時ディレクトリをストアに使う設定"""
    monkeypatch.setenv("STICKER_STUDIO_STORE_DIR", str(tmp_path / "stickers"))
    monkeypatch.setenv("STICKER_STUDIO_BACKEND", "flood_fill")
    monkeypatch.delenv("STICKER_STUDIO_CONFIG", raising=False)
    monkeypatch.setattr(config_utils, "_config", None)
    return tmp_path


def close_loop(st_mock):
    from studio_app.services.workspace import LOOP_KEY

    loop = st_mock.session_state.get(LOOP_KEY)
    if loop is not None:
        loop.close()


# =============================================================================
# TestRunAsync
# =============================================================================


class TestRunAsync:
    """イベントループ実行のテスト"""

    def test_returns_result(self, mock_streamlit):
        """コルーチンの結果が返る"""
        from studio_app.services.workspace import run_async

        async def answer():
            return 42

        try:
            assert run_async(answer()) == 42
        finally:
            close_loop(mock_streamlit)

    def test_loop_reused(self, mock_streamlit):
        """同じセッションではループが再利用される"""
        from studio_app.services.workspace import LOOP_KEY, run_async

        async def noop():
            return None

        try:
            run_async(noop())
            loop = mock_streamlit.session_state[LOOP_KEY]
            run_async(noop())
            assert mock_streamlit.session_state[LOOP_KEY] is loop
        finally:
            close_loop(mock_streamlit)


# =============================================================================
# TestGetOrchestrator
# =============================================================================


class TestGetOrchestrator:
    """オーケストレータ生成のテスト"""

    def test_created_once_and_initialized(self, mock_streamlit, studio_env):
        """初回に生成・初期化され、以降は同じインスタンス"""
        from studio_app.services.notifier import StreamlitNotifier
        from studio_app.services.workspace import get_orchestrator

        try:
            first = get_orchestrator()
            second = get_orchestrator()
        finally:
            close_loop(mock_streamlit)

        assert first is second
        assert first.is_ready
        assert isinstance(first.notifier, StreamlitNotifier)
        assert (studio_env / "stickers").is_dir()
