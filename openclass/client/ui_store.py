# openclass/client/ui_store.py
"""Client-only view state shared across screens."""
from typing import Callable, List
import logging

logger = logging.getLogger(__name__)

VIEW_MODES = ("grid", "list")

Listener = Callable[["UIStore"], None]


class UIStore:
    def __init__(self, sidebar_open: bool = True, view_mode: str = "grid"):
        if view_mode not in VIEW_MODES:
            raise ValueError(f"view_mode must be one of {VIEW_MODES}")
        self.sidebar_open = sidebar_open
        self.view_mode = view_mode
        self.is_loading = False
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self):
        for listener in list(self._listeners):
            listener(self)

    def set_sidebar_open(self, open: bool):
        if self.sidebar_open != open:
            self.sidebar_open = open
            self._emit()

    def toggle_sidebar(self):
        self.set_sidebar_open(not self.sidebar_open)

    def set_view_mode(self, mode: str):
        if mode not in VIEW_MODES:
            raise ValueError(f"view_mode must be one of {VIEW_MODES}")
        if self.view_mode != mode:
            self.view_mode = mode
            self._emit()

    def set_loading(self, loading: bool):
        if self.is_loading != loading:
            self.is_loading = loading
            self._emit()
