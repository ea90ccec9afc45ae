from __future__ import annotations

import logging
from concurrent.futures import CancelledError, Future
from dataclasses import dataclass
from functools import partial
from typing import Protocol
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

DENIED_MESSAGE = "Camera access denied. Please enable camera permissions."
INSECURE_CONTEXT_MESSAGE = "Camera access requires HTTPS or localhost connection."

LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "::1"}


class CameraAccessError(Exception):
    pass


@dataclass(frozen=True)
class Environment:
    """Where the page was loaded from, as far as camera access is concerned."""

    scheme: str
    host: str

    @property
    def is_secure(self) -> bool:
        return self.scheme == "https" or self.host in LOOPBACK_HOSTS

    @classmethod
    def from_headers(cls, headers) -> "Environment":
        """
        Prefer the Origin header (it carries the scheme the browser used) and
        fall back to Host over plain http.
        """
        origin = headers.get("Origin") or headers.get("origin")
        if origin:
            parts = urlsplit(origin)
            return cls(scheme=parts.scheme.lower(), host=(parts.hostname or "").lower())

        host = headers.get("Host") or headers.get("host") or ""
        proto = headers.get("X-Forwarded-Proto") or headers.get("x-forwarded-proto") or "http"
        return cls(scheme=proto.lower(), host=(urlsplit(f"//{host}").hostname or "").lower())


class MediaDevices(Protocol):
    def request_stream(self, constraints: dict) -> Future: ...


class DisplaySurface:
    """The thing a stream is shown on. Holds at most one stream."""

    def __init__(self):
        self.src_object = None

    def attach(self, stream) -> None:
        self.src_object = stream

    def detach(self) -> None:
        self.src_object = None


class CameraSessionManager:
    """
    Owns the single live capture stream.

    start() never raises: every failure lands in `error`. A start that is
    still pending when stop() is called is abandoned, and a stream it delivers
    later is released straight away.
    """

    def __init__(self, devices: MediaDevices, constraints: dict,
                 environment: Environment | None = None,
                 surface: DisplaySurface | None = None):
        self.devices = devices
        self.constraints = constraints
        self.environment = environment
        self.surface = surface or DisplaySurface()

        self.error: str | None = None
        self._stream = None
        self._pending: Future | None = None
        self._generation = 0

    @property
    def is_streaming(self) -> bool:
        return self._stream is not None

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    @property
    def wants_device(self) -> bool:
        return self.is_streaming or self.is_pending

    def start(self) -> None:
        if self.is_streaming or self.is_pending:
            logger.debug("Camera already %s, ignoring start", "on" if self.is_streaming else "starting")
            return

        if self.environment is not None and not self.environment.is_secure:
            self.error = INSECURE_CONTEXT_MESSAGE
            logger.warning("Refusing camera access from %s://%s", self.environment.scheme, self.environment.host)
            return

        self._generation += 1
        try:
            future = self.devices.request_stream(self.constraints)
        except Exception as e:
            self._fail(e)
            return

        self._pending = future
        future.add_done_callback(partial(self._on_acquired, self._generation))

    def _on_acquired(self, generation: int, future: Future) -> None:
        if generation != self._generation:
            if not future.cancelled() and future.exception() is None:
                logger.info("Discarding camera stream that arrived after stop")
                _stop_tracks(future.result())
            return

        self._pending = None
        try:
            stream = future.result()
        except CancelledError:
            return
        except Exception as e:
            self._fail(e)
            return

        self._stream = stream
        self.surface.attach(stream)
        self.error = None
        logger.info("Camera started")

    def _fail(self, exc: Exception) -> None:
        self.error = str(exc) or DENIED_MESSAGE
        logger.error("Error accessing camera: %s", self.error)

    def stop(self) -> None:
        if self._pending is not None:
            self._generation += 1
            self._pending.cancel()
            self._pending = None
            logger.info("Cancelled pending camera request")

        if self._stream is None:
            return

        _stop_tracks(self._stream)
        self.surface.detach()
        self._stream = None
        logger.info("Camera stopped")

    def ended(self) -> None:
        """The stream was closed from the outside (e.g. the browser)."""
        if self._stream is not None:
            logger.info("Camera stream ended")
        self.stop()


def _stop_tracks(stream) -> None:
    for track in stream.get_tracks():
        track.stop()
        track.enabled = False


class SimulatedTrack:
    kind = "video"

    def __init__(self):
        self.enabled = True
        self.ready_state = "live"

    def stop(self) -> None:
        self.ready_state = "ended"


class SimulatedStream:
    def __init__(self, tracks=None):
        self.tracks = tracks if tracks is not None else [SimulatedTrack()]

    def get_tracks(self) -> list:
        return list(self.tracks)


class SimulatedDevices:
    """
    In-memory camera for the demo CLI and the tests.

    With `deny` set every request fails with that message. With `defer` set
    requests stay pending until resolve() or reject() is called.
    """

    def __init__(self, deny: str | None = None, defer: bool = False):
        self.deny = deny
        self.defer = defer
        self.requests: list[dict] = []
        self.streams: list[SimulatedStream] = []
        self._waiting: list[Future] = []

    def request_stream(self, constraints: dict) -> Future:
        self.requests.append(constraints)
        future = Future()
        if self.defer:
            # A prompt already on screen can't be taken back, so neither can
            # the request.
            future.set_running_or_notify_cancel()
            self._waiting.append(future)
        elif self.deny is not None:
            future.set_exception(CameraAccessError(self.deny))
        else:
            future.set_result(self._new_stream())
        return future

    def _new_stream(self) -> SimulatedStream:
        stream = SimulatedStream()
        self.streams.append(stream)
        return stream

    def resolve(self) -> None:
        self._waiting.pop(0).set_result(self._new_stream())

    def reject(self, message: str = "") -> None:
        self._waiting.pop(0).set_exception(CameraAccessError(message))
