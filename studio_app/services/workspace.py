"""
Per-browser-session workspace wiring.

Each Streamlit session owns one orchestrator and one event loop; the loop
is reused across reruns so background threads and provider state persist.
"""

import asyncio
from typing import Awaitable, TypeVar

import streamlit as st

from sticker_studio.common.config_utils import get_config
from sticker_studio.common.logger import get_logger, set_global_log_level
from sticker_studio.extraction.orchestrator import ExtractionOrchestrator

from .notifier import StreamlitNotifier

logger = get_logger(__name__)

T = TypeVar("T")

ORCHESTRATOR_KEY = "studio_orchestrator"
LOOP_KEY = "studio_event_loop"


def run_async(coro: Awaitable[T]) -> T:
    """Run a coroutine on this session's event loop."""
    loop = st.session_state.get(LOOP_KEY)
    if loop is None or loop.is_closed():
        loop = asyncio.new_event_loop()
        st.session_state[LOOP_KEY] = loop
    return loop.run_until_complete(coro)


def get_orchestrator() -> ExtractionOrchestrator:
    """
    Get (or create and initialize) the session's orchestrator.

    Initialization is retried on every rerun until it succeeds.
    """
    orchestrator = st.session_state.get(ORCHESTRATOR_KEY)
    if orchestrator is None:
        config = get_config()
        set_global_log_level(config.log_level)
        orchestrator = ExtractionOrchestrator.from_config(config, notifier=StreamlitNotifier())
        st.session_state[ORCHESTRATOR_KEY] = orchestrator
        logger.info(f"Created workspace with config: {config.to_dict()}")

    if not orchestrator.is_ready:
        with st.spinner("Loading segmentation model..."):
            run_async(orchestrator.initialize())
    return orchestrator
