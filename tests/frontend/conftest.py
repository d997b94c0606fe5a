"""
フロントエンドテスト用フィクスチャ

Streamlit と streamlit-image-coordinates のモックを提供します。
"""

import pytest
from unittest.mock import MagicMock, patch


class SessionState(dict):
    """属性アクセスにも対応したセッション状態のモック"""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        self[name] = value


@pytest.fixture
def mock_streamlit():
    """Streamlitモジュールのモック

    Streamlitのセッション状態とUI関数をモックします。
    sys.modules はテスト終了時に復元されるため、studio_app の
    モジュールはテストごとにモックに対して再インポートされます。
    """
    st_mock = MagicMock()

    # セッション状態のモック
    st_mock.session_state = SessionState()

    # UI要素のモック
    st_mock.button = MagicMock(return_value=False)
    st_mock.radio = MagicMock(return_value=None)
    st_mock.file_uploader = MagicMock(return_value=None)
    st_mock.toast = MagicMock()
    st_mock.error = MagicMock()
    st_mock.rerun = MagicMock()

    # レイアウトのモック
    st_mock.columns = MagicMock(side_effect=lambda layout, **kwargs: [
        MagicMock() for _ in range(layout if isinstance(layout, int) else len(layout))
    ])
    st_mock.spinner.return_value.__enter__ = MagicMock()
    st_mock.spinner.return_value.__exit__ = MagicMock(return_value=False)

    coords_mock = MagicMock()
    coords_mock.streamlit_image_coordinates = MagicMock(return_value=None)

    with patch.dict("sys.modules", {
        "streamlit": st_mock,
        "streamlit_image_coordinates": coords_mock,
    }):
        yield st_mock
