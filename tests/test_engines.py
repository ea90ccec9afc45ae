from types import SimpleNamespace
from unittest.mock import MagicMock, call, patch

import numpy as np
import pytest

from signconvert import browser
from signconvert.clipboard import BrowserClipboard, ClipboardError, MemoryClipboard
from signconvert.engines import ConsoleSpeechEngine, PlaceholderTextEngine


class TestPlaceholderTextEngine:
    def test_returns_placeholder_with_or_without_frame(self):
        engine = PlaceholderTextEngine()
        frame = np.zeros((4, 4, 3), dtype=np.uint8)
        assert engine.frame_to_text(frame) == "Hello, how are you?"
        assert engine.frame_to_text(None) == "Hello, how are you?"

    def test_custom_text(self):
        assert PlaceholderTextEngine("Hi").frame_to_text(None) == "Hi"


class TestConsoleSpeechEngine:
    def test_produces_no_audio(self, caplog):
        with caplog.at_level("INFO"):
            assert ConsoleSpeechEngine().text_to_speech("hello") is None
        assert "Converting to speech..." in caplog.text


# ---------------------------------------------------------------------------
# Clipboards
# ---------------------------------------------------------------------------

class TestMemoryClipboard:
    def test_keeps_history(self):
        clipboard = MemoryClipboard()
        clipboard.write_text("a")
        clipboard.write_text("b")
        assert clipboard.text == "b"
        assert clipboard.history == ["a", "b"]

    def test_failure(self):
        with pytest.raises(ClipboardError):
            MemoryClipboard(fail=True).write_text("a")


class TestBrowserClipboard:
    def test_rejects_non_text(self):
        with pytest.raises(ClipboardError):
            BrowserClipboard(bridge=MagicMock()).write_text(b"bytes")

    def test_nothing_pending_sends_no_request(self):
        bridge = MagicMock(return_value=None)
        BrowserClipboard(bridge=bridge).render()
        bridge.assert_called_once_with(None, None)

    def test_pending_text_is_sent_until_answered(self):
        bridge = MagicMock(return_value=None)
        clipboard = BrowserClipboard(bridge=bridge)
        future = clipboard.write_text('say "hi"')

        clipboard.render()
        clipboard.render()

        assert bridge.call_args_list == [call(1, 'say "hi"'), call(1, 'say "hi"')]
        assert clipboard.is_pending
        assert not future.done()

    def test_success_settles_future(self):
        bridge = MagicMock(return_value={"request": 1, "ok": True})
        clipboard = BrowserClipboard(bridge=bridge)
        future = clipboard.write_text("hi")

        clipboard.render()

        assert future.result() is None
        assert not clipboard.is_pending

    def test_rejection_fails_future(self):
        bridge = MagicMock(return_value={"request": 1, "ok": False, "error": "NotAllowedError"})
        clipboard = BrowserClipboard(bridge=bridge)
        future = clipboard.write_text("hi")

        clipboard.render()

        with pytest.raises(ClipboardError, match="NotAllowedError"):
            future.result()

    def test_outcome_for_older_request_is_ignored(self):
        bridge = MagicMock(return_value=None)
        clipboard = BrowserClipboard(bridge=bridge)
        clipboard.write_text("a")
        second = clipboard.write_text("b")

        bridge.return_value = {"request": 1, "ok": True}
        clipboard.render()

        assert not second.done()


# ---------------------------------------------------------------------------
# Page components
# ---------------------------------------------------------------------------

class TestBrowserComponents:
    def test_clipboard_bridge_sends_request_and_returns_outcome(self):
        mount = MagicMock(return_value=SimpleNamespace(outcome={"request": 3, "ok": True}))
        with patch("signconvert.browser._component", return_value=mount) as component:
            outcome = browser.clipboard_bridge(3, "hi")

        component.assert_called_once_with("signconvert_clipboard")
        assert mount.call_args.kwargs["data"] == {"request": 3, "text": "hi"}
        assert outcome == {"request": 3, "ok": True}

    def test_clipboard_bridge_without_outcome(self):
        mount = MagicMock(return_value=SimpleNamespace())
        with patch("signconvert.browser._component", return_value=mount):
            assert browser.clipboard_bridge(None, None) is None

    def test_color_scheme_reads_page_state(self):
        mount = MagicMock(return_value=SimpleNamespace(scheme="dark"))
        with patch("signconvert.browser._component", return_value=mount) as component:
            assert browser.color_scheme() == "dark"
        component.assert_called_once_with("signconvert_color_scheme")

    def test_color_scheme_before_page_reports(self):
        mount = MagicMock(return_value=SimpleNamespace(scheme=None))
        with patch("signconvert.browser._component", return_value=mount):
            assert browser.color_scheme() is None

    def test_scripts_use_the_page_apis(self):
        assert "navigator.clipboard.writeText" in browser._SCRIPTS["signconvert_clipboard"]
        assert "prefers-color-scheme: dark" in browser._SCRIPTS["signconvert_color_scheme"]
