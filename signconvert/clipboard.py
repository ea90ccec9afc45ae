from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Callable

logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    pass


class BrowserClipboard:
    """
    Writes to the visitor's clipboard, not the server's.

    write_text() returns a Future that settles only once the page reports
    whether navigator.clipboard.writeText went through. Button callbacks run
    before the page is drawn, so the request goes out on the next render().
    """

    def __init__(self, bridge: Callable[[int | None, str | None], dict | None] | None = None):
        if bridge is None:
            from .browser import clipboard_bridge as bridge
        self._bridge = bridge
        self._request = 0
        self._pending: tuple[int, str, Future] | None = None

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    def write_text(self, text: str) -> Future:
        if not isinstance(text, str):
            raise ClipboardError(f"can only copy text, got {type(text).__name__}")

        if self._pending is not None:
            # Superseded before the page answered
            self._pending[2].cancel()

        self._request += 1
        future = Future()
        self._pending = (self._request, text, future)
        return future

    def render(self) -> None:
        request, text = (self._pending[0], self._pending[1]) if self._pending else (None, None)
        try:
            outcome = self._bridge(request, text)
        except Exception as e:
            self._settle(request, ClipboardError(str(e) or "clipboard unavailable"))
            return

        if outcome:
            error = None if outcome.get("ok") else ClipboardError(outcome.get("error") or "write was rejected")
            self._settle(outcome.get("request"), error)

    def _settle(self, request: int | None, error: ClipboardError | None) -> None:
        if self._pending is None or request != self._pending[0]:
            return
        future = self._pending[2]
        self._pending = None
        if error is None:
            future.set_result(None)
        else:
            future.set_exception(error)


class MemoryClipboard:
    """Keeps copied text in memory. Used by the demo CLI and the tests."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.history: list[str] = []

    @property
    def text(self) -> str | None:
        return self.history[-1] if self.history else None

    def write_text(self, text: str) -> Future:
        if self.fail:
            raise ClipboardError("clipboard unavailable")
        self.history.append(text)
        future = Future()
        future.set_result(None)
        return future
