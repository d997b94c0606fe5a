"""
StreamlitNotifier テスト

studio_app/services/notifier.py のテスト
"""

from sticker_studio.common.notifier import NotificationKind


# =============================================================================
# TestStreamlitNotifier
# =============================================================================


class TestStreamlitNotifier:
    """トースト通知のテスト"""

    def test_notify_queues_toast(self, mock_streamlit):
        """通知はセッション状態のキューに積まれる"""
        from studio_app.services.notifier import StreamlitNotifier

        notifier = StreamlitNotifier()
        notifier.notify(NotificationKind.INFO, "Sticker extracted!", "Added")

        assert mock_streamlit.session_state[StreamlitNotifier.QUEUE_KEY] == [
            (NotificationKind.INFO, "Sticker extracted!", "Added")
        ]
        mock_streamlit.toast.assert_not_called()

    def test_flush_shows_and_clears(self, mock_streamlit):
        """flush でトーストが表示されキューが空になる"""
        from studio_app.services.notifier import StreamlitNotifier

        notifier = StreamlitNotifier()
        notifier.notify(NotificationKind.INFO, "Saved", "ok")
        notifier.notify(NotificationKind.ERROR, "Segmentation failed", "Could not generate mask")

        assert notifier.flush() == 2
        assert mock_streamlit.toast.call_count == 2
        message = mock_streamlit.toast.call_args_list[1].args[0]
        assert "Segmentation failed" in message
        assert "Could not generate mask" in message
        assert mock_streamlit.session_state[StreamlitNotifier.QUEUE_KEY] == []

    def test_flush_empty(self, mock_streamlit):
        """キューが空なら何も表示しない"""
        from studio_app.services.notifier import StreamlitNotifier

        assert StreamlitNotifier().flush() == 0
        mock_streamlit.toast.assert_not_called()
