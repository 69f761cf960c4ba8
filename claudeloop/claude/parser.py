"""Parsing of the newline-delimited stream-json output."""

from __future__ import annotations

import json
from typing import IO, Iterable, Iterator, Protocol, Union

from claudeloop.claude.errors import ParseError
from claudeloop.claude.messages import ParsedResult, StreamMessage

_MAX_LINE_BYTES = 1024 * 1024

Stream = Union[IO[str], IO[bytes], Iterable[str], Iterable[bytes]]


class StreamHandler(Protocol):
    """Receives assistant text as soon as it arrives."""

    def on_text(self, text: str) -> None:
        ...


class NoOpHandler:
    """A stream handler that ignores all text."""

    def on_text(self, text: str) -> None:
        return None


def _reject_constant(name: str) -> float:
    raise ValueError(f"invalid JSON constant {name}")


def _strip_eol(raw, newline, carriage):
    if raw.endswith(newline):
        raw = raw[:-1]
    if raw.endswith(carriage):
        raw = raw[:-1]
    return raw


def _lines(stream: Stream) -> Iterator[str]:
    try:
        for raw in stream:
            if isinstance(raw, bytes):
                raw = _strip_eol(raw, b"\n", b"\r")
                size = len(raw)
                text = raw.decode("utf-8", errors="replace")
            else:
                text = _strip_eol(raw, "\n", "\r")
                size = len(text.encode("utf-8", errors="replace"))
            if size > _MAX_LINE_BYTES:
                raise ParseError("scanner error", cause=ValueError("token too long"))
            yield text
    except (OSError, UnicodeDecodeError) as err:
        raise ParseError("scanner error", cause=err) from err


class Parser:
    """Collects assistant text and the final result from stream-json output."""

    def __init__(self, handler: StreamHandler | None = None) -> None:
        self.handler = handler

    def parse(self, stream: Stream) -> ParsedResult:
        """Read every line of *stream*; malformed JSON lines are skipped."""
        result = ParsedResult()
        pieces: list[str] = []

        for line in _lines(stream):
            if not line:
                continue
            try:
                msg = StreamMessage.from_dict(json.loads(line, parse_constant=_reject_constant))
            except (ValueError, TypeError):
                continue

            result.raw_messages.append(msg)

            if msg.type == "assistant" and msg.message is not None:
                for block in msg.message.content:
                    if block.type == "text" and block.text:
                        pieces.append(block.text)
                        if self.handler is not None:
                            self.handler.on_text(block.text)
            elif msg.type == "result":
                result.result_text = msg.result
                result.total_cost_usd = msg.total_cost_usd
                result.is_error = msg.is_error

        result.output = "".join(pieces)
        return result