"""
Sign language converter.

Handles:
- Camera session lifecycle (browser capture through streamlit-webrtc)
- Conversion log (newest-first records, copy, clear)
- Pluggable frame-to-text and text-to-speech engines
- Light/dark theme context
"""

from .camera import CameraAccessError, CameraSessionManager, Environment, SimulatedDevices
from .clipboard import BrowserClipboard, ClipboardError, MemoryClipboard
from .config import ConverterConfig
from .controller import ConverterController
from .engines import ConsoleSpeechEngine, PlaceholderTextEngine
from .records import ConversionLog, ConversionRecord
from .theme import ThemeContext

__all__ = [
    "BrowserClipboard",
    "CameraAccessError",
    "CameraSessionManager",
    "ClipboardError",
    "ConsoleSpeechEngine",
    "ConversionLog",
    "ConversionRecord",
    "ConverterConfig",
    "ConverterController",
    "Environment",
    "MemoryClipboard",
    "PlaceholderTextEngine",
    "SimulatedDevices",
    "ThemeContext",
]
