"""
Server-sent event decoding and the pull-based :class:`Stream`.

The ``text/event-stream`` format is parsed by hand (no external SSE library
needed): the body is split on CR, LF or CRLF by :func:`iter_sse_lines`;
``event:`` and ``data:`` fields accumulate until a blank line dispatches the
frame; ``id:``/``retry:`` fields and ``:`` comments (heartbeats) are ignored.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Iterator, List, Optional, TypeVar, Union

import requests

from opencode_client.errors import (
    APIConnectionError,
    DecodeError,
    OpencodeError,
    RequestCancelledError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

READ_CHUNK_SIZE = 512


def iter_sse_lines(chunks: Iterable[bytes]) -> Iterator[bytes]:
    """Split a byte stream into lines without their terminators.

    A chunk ending in ``\\r`` keeps that line pending until the next chunk
    shows whether a ``\\n`` follows, so a CRLF split across chunks is one
    line ending.
    """
    pending = b""
    for chunk in chunks:
        if not chunk:
            continue
        lines = (pending + chunk).splitlines(keepends=True)
        pending = b""
        last = len(lines) - 1
        for index, line in enumerate(lines):
            if line.endswith(b"\n") or (line.endswith(b"\r") and index < last):
                yield line.rstrip(b"\r\n")
            else:
                pending = line
    if pending:
        yield pending.rstrip(b"\r\n")


@dataclass(frozen=True)
class ServerSentEvent:
    event: str
    data: str


class SSEDecoder:
    """Turn an iterable of lines into :class:`ServerSentEvent` frames.

    Parameters
    ----------
    lines : iterable of str or bytes
        Lines without their trailing newline, as produced by
        :func:`iter_sse_lines`.

    Raises
    ------
    DecodeError
        When a line is not valid UTF-8.
    """

    def __init__(self, lines: Iterable[Union[str, bytes]]):
        self._lines = lines

    def __iter__(self) -> Iterator[ServerSentEvent]:
        current_event = ""
        current_data_lines: List[str] = []

        for raw_line in self._lines:
            if isinstance(raw_line, bytes):
                try:
                    line = raw_line.decode("utf-8")
                except UnicodeDecodeError as exc:
                    raise DecodeError(f"event stream line is not valid UTF-8: {exc}") from exc
            else:
                line = raw_line
            # An empty line ends the SSE block.
            if line == "":
                if current_data_lines:
                    yield ServerSentEvent(current_event or "message", "\n".join(current_data_lines))
                current_event = ""
                current_data_lines = []
                continue

            if line.startswith(":"):
                continue
            name, _, value = line.partition(":")
            if value.startswith(" "):
                value = value[1:]
            if name == "event":
                current_event = value
            elif name == "data":
                current_data_lines.append(value)
            # id: and retry: are not used by this client.

        # Connection closed without the trailing blank line.
        if current_data_lines:
            yield ServerSentEvent(current_event or "message", "\n".join(current_data_lines))


class Stream(Generic[T]):
    """Pull-based iterator over decoded server-sent events.

    Usage::

        with client.event.stream() as stream:
            while stream.next():
                handle(stream.current())
            if stream.err():
                raise stream.err()

    A stream is also a plain iterator (``for event in stream``), which
    raises the terminal error, if any, once the events run out.

    Parameters
    ----------
    response : requests.Response, optional
        Open streaming response.  ``None`` when the request already failed.
    decode : callable, optional
        Converts one frame's ``data`` into ``T``.
    error : Exception, optional
        Initial error; when set, :meth:`next` returns False immediately.
    cancel_event : threading.Event, optional
        Checked before reading each event.
    """

    def __init__(
        self,
        response: Optional[requests.Response] = None,
        decode: Optional[Callable[[str], T]] = None,
        error: Optional[OpencodeError] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self._response = response
        self._decode = decode
        self._error = error
        self._cancel_event = cancel_event
        self._current: Optional[T] = None
        self._closed = False
        self._events: Iterator[ServerSentEvent] = iter(())
        if response is not None and error is None:
            self._events = iter(
                SSEDecoder(iter_sse_lines(response.iter_content(chunk_size=READ_CHUNK_SIZE)))
            )
        if error is not None:
            self.close()

    def next(self) -> bool:
        """Advance to the next event.  False at end of stream or on error."""
        if self._error is not None or self._closed:
            return False
        if self._cancel_event is not None and self._cancel_event.is_set():
            self._fail(RequestCancelledError("event stream cancelled"))
            return False
        try:
            frame = next(self._events)
        except StopIteration:
            self.close()
            return False
        except requests.RequestException as exc:
            error = APIConnectionError(f"event stream interrupted: {exc}")
            error.__cause__ = exc
            self._fail(error)
            return False
        except DecodeError as exc:
            self._fail(exc)
            return False
        try:
            self._current = self._decode(frame.data) if self._decode else frame.data
        except DecodeError as exc:
            self._fail(exc)
            return False
        return True

    def current(self) -> T:
        """The event produced by the last successful :meth:`next`."""
        return self._current

    def err(self) -> Optional[OpencodeError]:
        """The terminal error, or None."""
        return self._error

    @property
    def closed(self) -> bool:
        """True once the connection has been released."""
        return self._closed

    def close(self) -> None:
        """Release the connection.  Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._response is not None:
            self._response.close()
            logger.debug("OpenCode event stream closed")

    def _fail(self, error: OpencodeError) -> None:
        logger.error("OpenCode event stream failed: %s", error)
        self._error = error
        self.close()

    def __iter__(self) -> Iterator[T]:
        try:
            while self.next():
                yield self.current()
        finally:
            self.close()
        if self._error is not None:
            raise self._error

    def __enter__(self) -> "Stream[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
