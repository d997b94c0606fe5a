"""
Toast-based notifier for the Streamlit front-end.
"""

import streamlit as st

from sticker_studio.common.logger import get_logger
from sticker_studio.common.notifier import NotificationKind

logger = get_logger(__name__)

ICONS = {
    NotificationKind.INFO: "✅",
    NotificationKind.ERROR: "⚠️",
}


class StreamlitNotifier:
    """
    Show notifications as st.toast messages.

    Notifications raised before a rerun are queued in session state and
    flushed on the next render, so they survive st.rerun().
    """

    QUEUE_KEY = "studio_pending_toasts"

    def notify(self, kind: NotificationKind, title: str, message: str) -> None:
        if kind is NotificationKind.ERROR:
            logger.error(f"{title}: {message}")
        else:
            logger.info(f"{title}: {message}")
        st.session_state.setdefault(self.QUEUE_KEY, []).append((kind, title, message))

    def flush(self) -> int:
        """Display queued toasts. Returns how many were shown."""
        pending = st.session_state.get(self.QUEUE_KEY, [])
        for kind, title, message in pending:
            st.toast(f"**{title}**\n\n{message}", icon=ICONS.get(kind))
        st.session_state[self.QUEUE_KEY] = []
        return len(pending)
