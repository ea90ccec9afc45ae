from __future__ import annotations

import logging
import time
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import datetime
from functools import partial
from typing import Callable

from .clipboard import ClipboardError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionRecord:
    id: int
    text: str
    timestamp: str


class ConversionLog:
    """
    Newest-first list of conversion records.

    Records only ever enter at the head. Ids come from the creation instant in
    milliseconds and are bumped when two records land in the same millisecond,
    so they stay strictly increasing.
    """

    def __init__(self, copy_window: float = 2.0, max_records: int | None = None,
                 clock: Callable[[], datetime] = datetime.now,
                 monotonic: Callable[[], float] = time.monotonic):
        self.copy_window = copy_window
        self.max_records = max_records
        self._clock = clock
        self._monotonic = monotonic

        self._records: list[ConversionRecord] = []
        self._last_id = 0
        self._copied_id: int | None = None
        self._copied_at = 0.0

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))

    @property
    def records(self) -> list[ConversionRecord]:
        return list(self._records)

    def _next_id(self, now: datetime) -> int:
        record_id = int(now.timestamp() * 1000)
        if record_id <= self._last_id:
            record_id = self._last_id + 1
        self._last_id = record_id
        return record_id

    def add_record(self, text: str) -> ConversionRecord:
        now = self._clock()
        record = ConversionRecord(
            id=self._next_id(now),
            text=text,
            timestamp=now.strftime("%X"),
        )
        self._records.insert(0, record)

        if self.max_records is not None and len(self._records) > self.max_records:
            dropped = len(self._records) - self.max_records
            del self._records[self.max_records:]
            logger.debug("Dropped %d oldest record(s) over cap %d", dropped, self.max_records)

        return record

    def clear(self) -> None:
        self._records = []

    def copy(self, record: ConversionRecord, clipboard) -> Future:
        """
        Send the record's text to the clipboard. The record is marked as
        copied when the write succeeds, which may be after this returns.
        """
        try:
            future = clipboard.write_text(record.text)
        except ClipboardError as e:
            future = Future()
            future.set_exception(e)

        future.add_done_callback(partial(self._on_written, record.id))
        return future

    def _on_written(self, record_id: int, future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("Failed to copy text: %s", error)
            return

        self._copied_id = record_id
        self._copied_at = self._monotonic()

    @property
    def copied_id(self) -> int | None:
        if self._copied_id is None:
            return None
        if self._monotonic() - self._copied_at >= self.copy_window:
            self._copied_id = None
        return self._copied_id

    def is_copied(self, record_id: int) -> bool:
        return self.copied_id == record_id
