from __future__ import annotations

import logging
from typing import Protocol

import numpy as np

logger = logging.getLogger(__name__)


class TextEngine(Protocol):
    def frame_to_text(self, frame: np.ndarray | None) -> str: ...


class SpeechEngine(Protocol):
    def text_to_speech(self, text: str) -> bytes | None: ...


class PlaceholderTextEngine:
    """
    Stand-in until a recognition model is wired up: ignores the frame and
    always answers with the same sentence.
    """

    def __init__(self, text: str = "Hello, how are you?"):
        self.text = text

    def frame_to_text(self, frame: np.ndarray | None) -> str:
        if frame is not None:
            logger.debug("Ignoring frame of shape %s", frame.shape)
        return self.text


class ConsoleSpeechEngine:
    """Logs the request and produces no audio."""

    def text_to_speech(self, text: str) -> bytes | None:
        logger.info("Converting to speech...")
        if text:
            logger.debug("Speech text: %s", text)
        return None
