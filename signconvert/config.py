from __future__ import annotations

import os
from dataclasses import dataclass, field


def _default_ice_servers() -> list[dict]:
    return [{"urls": ["stun:stun.l.google.com:19302"]}]


@dataclass
class ConverterConfig:
    # Camera
    camera_width: int = 1280            # ideal, the browser may pick less
    camera_height: int = 720
    facing_mode: str = "user"
    ice_servers: list[dict] = field(default_factory=_default_ice_servers)
    acquire_timeout: float = 30.0       # seconds to wait for the browser stream

    # Conversions
    placeholder_text: str = "Hello, how are you?"
    copy_window: float = 2.0            # seconds a record stays marked as copied
    max_records: int | None = None      # None keeps every record

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        if self.copy_window <= 0:
            raise ValueError("copy_window must be positive")
        if self.acquire_timeout <= 0:
            raise ValueError("acquire_timeout must be positive")
        if self.max_records is not None and self.max_records < 1:
            raise ValueError("max_records must be at least 1 when set")

    def media_stream_constraints(self) -> dict:
        return {
            "video": {
                "width": {"ideal": self.camera_width},
                "height": {"ideal": self.camera_height},
                "facingMode": self.facing_mode,
            },
            "audio": False,
        }

    @classmethod
    def from_env(cls, environ=None) -> "ConverterConfig":
        """
        Build a config from CONVERTER_* environment variables, falling back to
        the defaults above for anything unset.
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        if env.get("CONVERTER_PLACEHOLDER_TEXT"):
            kwargs["placeholder_text"] = env["CONVERTER_PLACEHOLDER_TEXT"]
        if env.get("CONVERTER_COPY_WINDOW"):
            kwargs["copy_window"] = float(env["CONVERTER_COPY_WINDOW"])
        if env.get("CONVERTER_ACQUIRE_TIMEOUT"):
            kwargs["acquire_timeout"] = float(env["CONVERTER_ACQUIRE_TIMEOUT"])
        if env.get("CONVERTER_MAX_RECORDS"):
            kwargs["max_records"] = int(env["CONVERTER_MAX_RECORDS"])
        if env.get("CONVERTER_LOG_LEVEL"):
            kwargs["log_level"] = env["CONVERTER_LOG_LEVEL"].upper()
        if env.get("CONVERTER_STUN_URLS"):
            urls = [u.strip() for u in env["CONVERTER_STUN_URLS"].split(",") if u.strip()]
            kwargs["ice_servers"] = [{"urls": urls}]

        return cls(**kwargs)
