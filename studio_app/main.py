"""
Sticker Studio

Streamlit application for cutting objects out of photos with a few clicks.

Features:
- Click-to-segment with include/exclude points
- Undo / reset of the click history
- Transparent, trimmed PNG stickers
- Persistent sticker collection with download

Usage:
    streamlit run studio_app/main.py
"""

import streamlit as st

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Sticker Studio",
    page_icon="✂️",
    layout="wide",
)

import sys
from pathlib import Path

# Make the repository root importable when run as a script
repo_root = Path(__file__).resolve().parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from studio_app.components.sticker_collection import render_sticker_collection
from studio_app.components.studio_workspace import render_studio_workspace
from studio_app.services.notifier import StreamlitNotifier
from studio_app.services.workspace import get_orchestrator

HELP_TEXT = """
**How to make a sticker**

1. Upload a photo (PNG, JPEG, GIF, WebP or BMP).
2. Keep **Include** selected and click on the object you want.
3. Switch to **Exclude** and click on any part that should be left out.
4. Use **Undo** to drop the last click or **Reset** to start over.
5. Press **Extract Sticker**. The cutout is trimmed and added to your collection.
"""


def main():
    """Main application entry point."""
    st.title("✂️ Sticker Studio")
    st.markdown("Click on an object to turn it into a sticker")

    orchestrator = get_orchestrator()

    studio_tab, help_tab = st.tabs(["Studio", "Help"])
    with studio_tab:
        workspace_col, collection_col = st.columns([3, 1])
        with workspace_col:
            render_studio_workspace(orchestrator)
        with collection_col:
            render_sticker_collection(orchestrator.store)
    with help_tab:
        st.markdown(HELP_TEXT)

    notifier = orchestrator.notifier
    if isinstance(notifier, StreamlitNotifier):
        notifier.flush()


if __name__ == "__main__":
    main()
