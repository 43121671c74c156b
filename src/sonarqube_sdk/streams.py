"""Server-sent event parsing and the open-response envelope for streaming calls."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SSEEvent:
    event: str | None
    data: str
    id: str | None = None
    retry: int | None = None
    raw: str | None = None

    def json(self) -> Any | None:
        """Attempt to parse event data as JSON."""
        try:
            return json.loads(self.data) if self.data else None
        except ValueError:
            return None


@dataclass
class _PendingEvent:
    name: str | None = None
    id: str | None = None
    retry: int | None = None
    data: list[str] = field(default_factory=list)
    lines: list[str] = field(default_factory=list)

    def apply(self, line: str) -> None:
        self.lines.append(line)
        key, _, value = line.partition(":")
        value = value[1:] if value.startswith(" ") else value
        if key == "data":
            self.data.append(value)
        elif key == "event":
            self.name = value
        elif key == "id":
            self.id = value
        elif key == "retry" and value.isdigit():
            self.retry = int(value)

    def finish(self) -> SSEEvent | None:
        if not self.data:
            return None
        return SSEEvent(
            event=self.name or "message",
            data="\n".join(self.data),
            id=self.id,
            retry=self.retry,
            raw="\n".join(self.lines),
        )


def parse_sse_lines(lines: Iterable[str]) -> Iterator[SSEEvent]:
    """Parse server-sent event lines into events.

    A blank line dispatches the pending event; ``:`` lines are keep-alive
    comments. Events without ``data`` are dropped.
    """
    pending = _PendingEvent()
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if line.startswith(":"):
            continue
        if line:
            pending.apply(line)
            continue
        event = pending.finish()
        if event is not None:
            yield event
        pending = _PendingEvent()

    event = pending.finish()
    if event is not None:
        yield event


class EventStream:
    """A successful streaming response whose body is still open.

    The caller owns the stream and must close it, directly or by using it as a
    context manager. Iterating yields :class:`SSEEvent` objects.
    """

    def __init__(self, response: httpx.Response) -> None:
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.response.headers

    @property
    def closed(self) -> bool:
        return self.response.is_closed

    def iter_lines(self) -> Iterator[str]:
        return self.response.iter_lines()

    def events(self) -> Iterator[SSEEvent]:
        return parse_sse_lines(self.response.iter_lines())

    def __iter__(self) -> Iterator[SSEEvent]:
        return self.events()

    def close(self) -> None:
        if not self.response.is_closed:
            logger.debug(f"Closing event stream from {self.response.request.url}")
        self.response.close()

    def __enter__(self) -> "EventStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
