"""Progress sinks for human-readable status lines."""

from collections.abc import Callable
from typing import Protocol


class ProgressSink(Protocol):
    def emit(self, message: str) -> None: ...


class CallbackSink:
    def __init__(self, callback: Callable[[str], None]) -> None:
        self._callback = callback

    def emit(self, message: str) -> None:
        self._callback(message)


class NullSink:
    def emit(self, message: str) -> None:
        _ = message


class ListSink:
    """Collects lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def emit(self, message: str) -> None:
        self.lines.append(message)


ProgressLike = ProgressSink | Callable[[str], None] | None


def as_sink(progress: ProgressLike) -> ProgressSink:
    """Accept a sink, a plain callable, or None."""
    if progress is None:
        return NullSink()
    if hasattr(progress, "emit"):
        return progress  # type: ignore[return-value]
    return CallbackSink(progress)
