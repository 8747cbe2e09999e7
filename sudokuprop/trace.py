"""Trace sinks receiving step-by-step solver events."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import IO, List, Optional
import logging


class TraceSink(ABC):
    """Destination for free-form diagnostic text written by the solver."""

    @abstractmethod
    def append(self, text: str) -> None:
        """Record one event."""
        pass


class NullTraceSink(TraceSink):
    """Discards every event."""

    def append(self, text: str) -> None:
        pass


class MemoryTraceSink(TraceSink):
    """Keeps events in memory."""

    def __init__(self):
        self.events: List[str] = []

    def append(self, text: str) -> None:
        self.events.append(text)

    def __len__(self) -> int:
        return len(self.events)


class LoggingTraceSink(TraceSink):
    """Forwards events to a ``logging`` logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger("sudokuprop.trace")
        self.level = level

    def append(self, text: str) -> None:
        self.logger.log(self.level, text)


class FileTraceSink(TraceSink):
    """
    Appends events to a text file, one per line.

    The file is opened on the first event, so a session that traces
    nothing leaves no empty file behind.
    """

    def __init__(self, path: str):
        self.path = path
        self._file: Optional[IO[str]] = None

    @property
    def used(self) -> bool:
        return self._file is not None

    def append(self, text: str) -> None:
        if self._file is None:
            self._file = open(self.path, "w")
        self._file.write(text.rstrip("\n") + "\n")

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> FileTraceSink:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
