from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from typing import Callable

import av
import numpy as np
from streamlit_webrtc import VideoProcessorBase

from .camera import DENIED_MESSAGE, CameraAccessError

logger = logging.getLogger(__name__)


class FrameGrabber(VideoProcessorBase):
    """
    Passes the browser video through untouched and keeps the latest frame.

    recv() runs on the streamlit-webrtc worker thread, so the frame is only
    handed over under the lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._frame: np.ndarray | None = None

    def recv(self, frame: av.VideoFrame) -> av.VideoFrame:
        img = frame.to_ndarray(format="bgr24")
        with self._lock:
            self._frame = img
        return frame

    def latest_frame(self) -> np.ndarray | None:
        with self._lock:
            return None if self._frame is None else self._frame.copy()


class WebRtcTrack:
    kind = "video"

    def __init__(self):
        self.enabled = True
        self.ready_state = "live"

    def stop(self) -> None:
        # The browser side closes once the streamer is rendered with
        # desired_playing_state=False.
        self.ready_state = "ended"


class WebRtcStream:
    def __init__(self, ctx):
        self.ctx = ctx
        self.tracks = [WebRtcTrack()]

    def get_tracks(self) -> list:
        return list(self.tracks)

    @property
    def live(self) -> bool:
        return any(t.ready_state == "live" for t in self.tracks)

    def latest_frame(self) -> np.ndarray | None:
        processor = getattr(self.ctx, "video_processor", None)
        if processor is None:
            return None
        return processor.latest_frame()


class WebRtcDevices:
    """
    Camera backend fed by a streamlit-webrtc context.

    request_stream() only records the request; the page then renders the
    streamer with desired_playing_state=True and the browser asks for the
    camera. sync() is called after every render and settles the request once
    the streamer is playing, or fails it after `timeout` seconds.
    """

    def __init__(self, timeout: float = 30.0, monotonic: Callable[[], float] = time.monotonic):
        self.timeout = timeout
        self._monotonic = monotonic
        self._pending: Future | None = None
        self._requested_at = 0.0
        self._stream: WebRtcStream | None = None
        self.on_ended: Callable[[], None] | None = None

    def request_stream(self, constraints: dict) -> Future:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        future = Future()
        self._pending = future
        self._requested_at = self._monotonic()
        return future

    def sync(self, ctx) -> None:
        playing = bool(ctx is not None and ctx.state.playing)

        if self._pending is not None:
            future = self._pending
            if future.cancelled():
                self._pending = None
            elif playing:
                self._pending = None
                self._stream = WebRtcStream(ctx)
                future.set_result(self._stream)
            else:
                self.expire()
            return

        if self._stream is not None and self._stream.live and not playing:
            # Stopped from the browser, e.g. the streamer's own stop button.
            self._stream = None
            if self.on_ended is not None:
                self.on_ended()

    def expire(self) -> bool:
        future = self._pending
        if future is None or future.done():
            return False
        if self._monotonic() - self._requested_at < self.timeout:
            return False
        self._pending = None
        logger.warning("No camera stream after %.0fs", self.timeout)
        future.set_exception(CameraAccessError(DENIED_MESSAGE))
        return True

    def latest_frame(self) -> np.ndarray | None:
        if self._stream is None or not self._stream.live:
            return None
        return self._stream.latest_frame()
