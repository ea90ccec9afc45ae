# signconvert/controller.py
from __future__ import annotations

import logging
import weakref
from concurrent.futures import Future
from typing import Callable

import numpy as np

from .camera import INSECURE_CONTEXT_MESSAGE, CameraSessionManager, Environment, MediaDevices
from .config import ConverterConfig
from .engines import ConsoleSpeechEngine, PlaceholderTextEngine, SpeechEngine, TextEngine
from .records import ConversionLog, ConversionRecord
from .theme import ThemeContext

logger = logging.getLogger(__name__)


class ConverterController:
    """
    Everything the page does, minus the drawing:
      camera start/stop -> convert (text | speech) -> conversion log -> copy / clear

    The camera is stopped when the controller is closed or collected, so an
    abandoned session never keeps the device open.
    """

    def __init__(self, cfg: ConverterConfig, devices: MediaDevices, clipboard,
                 text_engine: TextEngine | None = None,
                 speech_engine: SpeechEngine | None = None,
                 frame_source: Callable[[], np.ndarray | None] | None = None,
                 log: ConversionLog | None = None):
        self.cfg = cfg
        self.camera = CameraSessionManager(devices, cfg.media_stream_constraints())
        if log is None:
            log = ConversionLog(copy_window=cfg.copy_window, max_records=cfg.max_records)
        self.log = log
        self.clipboard = clipboard
        self.text_engine = text_engine or PlaceholderTextEngine(cfg.placeholder_text)
        self.speech_engine = speech_engine or ConsoleSpeechEngine()
        self.frame_source = frame_source or (lambda: None)
        self.theme = ThemeContext()

        self.initialized = False
        self._finalizer = weakref.finalize(self, self.camera.stop)

    def initialize(self, environment: Environment | None, color_scheme: str | None = None) -> None:
        """One-time setup for a new page session."""
        if self.initialized:
            return
        self.initialized = True

        self.theme.follow(color_scheme)
        self.camera.environment = environment
        if environment is not None and not environment.is_secure:
            self.camera.error = INSECURE_CONTEXT_MESSAGE

    # Camera
    @property
    def is_streaming(self) -> bool:
        return self.camera.is_streaming

    @property
    def can_convert(self) -> bool:
        return self.camera.is_streaming

    @property
    def error(self) -> str | None:
        return self.camera.error

    def start_camera(self) -> None:
        self.camera.start()

    def stop_camera(self) -> None:
        self.camera.stop()

    # Conversions
    def convert_to_text(self) -> ConversionRecord | None:
        if not self.can_convert:
            logger.warning("Convert to text ignored, camera is not streaming")
            return None
        text = self.text_engine.frame_to_text(self.frame_source())
        return self.log.add_record(text)

    def convert_to_speech(self) -> bytes | None:
        if not self.can_convert:
            logger.warning("Convert to speech ignored, camera is not streaming")
            return None
        latest = self.log.records[0].text if len(self.log) else ""
        return self.speech_engine.text_to_speech(latest)

    def clear_conversions(self) -> None:
        self.log.clear()

    def copy(self, record: ConversionRecord) -> Future:
        return self.log.copy(record, self.clipboard)

    # Theme
    def follow_color_scheme(self, color_scheme: str | None) -> None:
        """
        The first reading of the platform preference can be missing or stale,
        so every page run reports it again.
        """
        self.theme.follow(color_scheme)

    def toggle_dark_mode(self) -> None:
        self.theme.toggle()

    def close(self) -> None:
        self._finalizer()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
