"""
Sticker Studio App Services
"""

from .notifier import StreamlitNotifier
from .workspace import get_orchestrator, run_async

__all__ = ["StreamlitNotifier", "get_orchestrator", "run_async"]
