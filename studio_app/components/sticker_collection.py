"""
Sticker Collection Component

Lists extracted stickers, newest first, with download and delete actions.
"""

import streamlit as st

from sticker_studio.collection.sticker_store import StickerStore
from sticker_studio.common.constants import STICKER_MIME_TYPE
from sticker_studio.common.exceptions import StoreError
from sticker_studio.common.logger import get_logger

logger = get_logger(__name__)

GRID_COLUMNS = 2


def delete_sticker(store: StickerStore, sticker_id: str) -> bool:
    try:
        return store.remove_artifact(sticker_id)
    except StoreError as e:
        logger.error(f"Failed to delete sticker: {e}")
        st.error(f"Failed to delete sticker: {e.message}")
        return False


def clear_collection(store: StickerStore) -> bool:
    try:
        store.clear_all()
    except StoreError as e:
        logger.error(f"Failed to clear collection: {e}")
        st.error(f"Failed to clear collection: {e.message}")
        return False
    return True


def render_sticker_collection(store: StickerStore) -> None:
    """Render the collection panel."""
    try:
        stickers = store.list_artifacts()
    except StoreError as e:
        logger.error(f"Failed to load collection: {e}")
        st.error(f"Failed to load collection: {e.message}")
        return

    st.subheader(f"🖼️ Sticker Collection ({len(stickers)})")
    if not stickers:
        st.caption("Extract stickers to see them here")
        return

    if st.button("🗑️ Clear All", key="collection_clear_all"):
        if clear_collection(store):
            st.rerun()

    columns = st.columns(GRID_COLUMNS)
    for index, sticker in enumerate(stickers):
        with columns[index % GRID_COLUMNS]:
            with st.container(border=True):
                st.image(sticker.png_bytes, caption=f"{sticker.width}x{sticker.height}")
                st.download_button(
                    "⬇️ Download",
                    data=sticker.png_bytes,
                    file_name=sticker.download_name,
                    mime=STICKER_MIME_TYPE,
                    key=f"download_{sticker.id}",
                    use_container_width=True,
                )
                if st.button("Delete", key=f"delete_{sticker.id}", use_container_width=True):
                    if delete_sticker(store, sticker.id):
                        st.rerun()
