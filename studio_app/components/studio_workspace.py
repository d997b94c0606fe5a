"""
Studio Workspace Component

Upload, click-to-segment canvas, and the Undo / Reset / Extract controls.
"""

from typing import Optional

import streamlit as st
from PIL import Image
from streamlit_image_coordinates import streamlit_image_coordinates

from sticker_studio.annotation.session import ClickKind
from sticker_studio.common.constants import IMAGE_EXTENSIONS
from sticker_studio.extraction.orchestrator import ExtractionOrchestrator, StudioState

from ..services.workspace import run_async
from ..utils.coordinates import display_to_image_coords

UPLOAD_KEY = "studio_upload"
PROCESSED_UPLOAD_KEY = "studio_processed_upload"
CANVAS_RENDER_KEY = "studio_canvas_render_id"
LAST_CLICK_KEY = "studio_last_click"
CLICK_MODE_KEY = "studio_click_mode"

MAX_DISPLAY_WIDTH = 800

CLICK_MODE_LABELS = {
    ClickKind.INCLUDE: "➕ Include",
    ClickKind.EXCLUDE: "➖ Exclude",
}


def handle_upload(orchestrator: ExtractionOrchestrator, uploaded) -> bool:
    """
    Load a newly uploaded file into the workspace.

    The same file is only processed once across reruns.

    Returns:
        True if a new image was loaded (requires rerun)
    """
    if uploaded is None:
        return False

    file_id = f"{uploaded.name}_{uploaded.size}"
    if st.session_state.get(PROCESSED_UPLOAD_KEY) == file_id:
        return False

    st.session_state[PROCESSED_UPLOAD_KEY] = file_id
    loaded = run_async(orchestrator.load_image(uploaded.getvalue(), uploaded.name))
    if loaded:
        st.session_state[CANVAS_RENDER_KEY] = st.session_state.get(CANVAS_RENDER_KEY, 0) + 1
        # start the new image in Include mode
        st.session_state.pop(CLICK_MODE_KEY, None)
    return loaded


def handle_canvas_click(orchestrator: ExtractionOrchestrator, value: Optional[dict]) -> bool:
    """
    Turn a canvas click event into an image-space click.

    Args:
        orchestrator: Session orchestrator
        value: Event dict from streamlit_image_coordinates
            (x, y, width, height, unix_time) or None

    Returns:
        True if a click was recorded (requires rerun)
    """
    image = orchestrator.image
    if value is None or image is None or orchestrator.is_segmenting:
        return False

    event_id = (value.get("x"), value.get("y"), value.get("unix_time"))
    if st.session_state.get(LAST_CLICK_KEY) == event_id:
        return False
    st.session_state[LAST_CLICK_KEY] = event_id

    x, y = display_to_image_coords(
        value["x"],
        value["y"],
        value.get("width") or image.width,
        value.get("height") or image.height,
        image.width,
        image.height,
    )
    run_async(orchestrator.add_click(x, y))
    return True


def _render_click_mode(orchestrator: ExtractionOrchestrator) -> None:
    modes = list(CLICK_MODE_LABELS)
    selected = st.radio(
        "Click mode",
        modes,
        index=modes.index(orchestrator.click_mode),
        format_func=CLICK_MODE_LABELS.get,
        horizontal=True,
        disabled=not orchestrator.is_ready or orchestrator.is_segmenting,
        key=CLICK_MODE_KEY,
    )
    if selected is not None:
        orchestrator.click_mode = selected


def _render_controls(orchestrator: ExtractionOrchestrator) -> bool:
    """Undo / Reset / Extract buttons. Returns True if a rerun is needed."""
    has_image = orchestrator.image is not None
    has_clicks = bool(orchestrator.clicks)
    busy = orchestrator.is_segmenting

    col1, col2, col3 = st.columns([1, 1, 2])
    with col1:
        if st.button(
            "↩️ Undo",
            disabled=not has_image or not has_clicks or busy,
            use_container_width=True,
            key="studio_undo",
        ):
            run_async(orchestrator.remove_last_click())
            return True
    with col2:
        if st.button(
            "🔄 Reset",
            disabled=not has_image or not has_clicks or busy,
            use_container_width=True,
            key="studio_reset",
        ):
            orchestrator.reset()
            return True
    with col3:
        if st.button(
            "✂️ Extract Sticker",
            type="primary",
            disabled=not orchestrator.can_extract,
            use_container_width=True,
            key="studio_extract",
        ):
            orchestrator.extract()
            return True
    return False


def _render_canvas(orchestrator: ExtractionOrchestrator) -> bool:
    preview = orchestrator.preview()
    if preview is None:
        st.info("Upload an image to start. Then click on the object you want to cut out.")
        return False

    image = orchestrator.image
    display_width = min(image.width, MAX_DISPLAY_WIDTH)
    render_id = st.session_state.get(CANVAS_RENDER_KEY, 0)
    value = streamlit_image_coordinates(
        Image.fromarray(preview),
        width=display_width,
        key=f"studio_canvas_{render_id}",
    )

    include_count, exclude_count = orchestrator.session.get_click_counts()
    state = orchestrator.state
    status = {
        StudioState.LOADED: "Click on the object to select it",
        StudioState.ANNOTATED: "No mask yet. Try another click",
        StudioState.MASKED: "Mask ready. Extract it or refine with more clicks",
    }.get(state, "")
    st.caption(
        f"{image.width}x{image.height} px | "
        f"{include_count} include / {exclude_count} exclude clicks | {status}"
    )
    return handle_canvas_click(orchestrator, value)


def render_studio_workspace(orchestrator: ExtractionOrchestrator) -> None:
    """Render the full workspace and rerun after any state change."""
    uploaded = st.file_uploader(
        "Upload an image",
        type=[ext.lstrip(".") for ext in IMAGE_EXTENSIONS],
        disabled=not orchestrator.is_ready,
        key=UPLOAD_KEY,
    )
    if handle_upload(orchestrator, uploaded):
        st.rerun()

    _render_click_mode(orchestrator)
    clicked = _render_canvas(orchestrator)
    changed = _render_controls(orchestrator)
    if clicked or changed:
        st.rerun()
