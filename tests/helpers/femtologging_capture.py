"""Capture femtologging output for assertions on catalog events."""

from __future__ import annotations

import contextlib
import dataclasses
import threading
import time
import typing as typ

from femtologging import get_logger


@dataclasses.dataclass(slots=True)
class CapturedRecord:
    """One captured femtologging record."""

    logger: str
    level: str
    message: str


class FemtoLogCapture:
    """femtologging handler that stores records in memory.

    femtologging delivers records on a worker thread, so assertions wait on
    a condition variable instead of reading the list immediately.
    """

    def __init__(self) -> None:
        """Start with no records."""
        self.records: list[CapturedRecord] = []
        self._condition = threading.Condition()

    def handle(self, logger: str, level: str, message: str) -> None:
        """Receive a record from the femtologging worker thread."""
        with self._condition:
            self.records.append(CapturedRecord(str(logger), str(level), message))
            self._condition.notify_all()

    def wait_for(
        self, predicate: typ.Callable[[CapturedRecord], bool], timeout: float = 1.0
    ) -> CapturedRecord:
        """Return the first record matching ``predicate``, waiting if needed."""
        deadline = time.monotonic() + timeout
        with self._condition:
            while True:
                for record in self.records:
                    if predicate(record):
                        return record
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self._condition.wait(timeout=remaining)
        messages = [record.message for record in self.records]
        msg = f"no matching record captured; got {messages}"
        raise AssertionError(msg)

    def wait_for_event(self, event: str, timeout: float = 1.0) -> CapturedRecord:
        """Return the first record tagged ``[event]``."""
        tag = f"[{event}]"
        return self.wait_for(lambda record: record.message.startswith(tag), timeout)


@contextlib.contextmanager
def capture_femto_logs(
    logger_name: str, *, level: str = "TRACE"
) -> typ.Iterator[FemtoLogCapture]:
    """Capture records emitted by the named femtologging logger."""
    logger = get_logger(logger_name)
    previous_level = logger.level
    previous_propagate = logger.propagate
    logger.set_level(level)
    logger.set_propagate(False)

    handler = FemtoLogCapture()
    logger.add_handler(handler)
    try:
        yield handler
    finally:
        logger.remove_handler(handler)
        logger.set_level(previous_level)
        logger.set_propagate(previous_propagate)
