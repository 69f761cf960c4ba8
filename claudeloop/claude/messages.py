"""Records decoded from the stream-json output of the claude command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _get(data: Mapping[str, Any], key: str, kinds: tuple[type, ...], default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) and bool not in kinds:
        raise TypeError(f"{key}: unexpected boolean value")
    if not isinstance(value, kinds):
        raise TypeError(f"{key}: unexpected value {value!r}")
    return value


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what}: expected an object, got {type(data).__name__}")
    return data


@dataclass
class ContentBlock:
    """One block of assistant content, e.g. "text" or "tool_use"."""

    type: str = ""
    text: str = ""


@dataclass
class AssistantMessage:
    """The content blocks of one assistant message."""

    content: list[ContentBlock] = field(default_factory=list)


def _content_block(data: Any) -> ContentBlock:
    if data is None:
        return ContentBlock()
    data = _require_mapping(data, "content block")
    return ContentBlock(
        type=_get(data, "type", (str,), ""),
        text=_get(data, "text", (str,), ""),
    )


def _assistant_message(data: Any) -> AssistantMessage | None:
    if data is None:
        return None
    data = _require_mapping(data, "message")
    blocks = data.get("content")
    if blocks is None:
        return AssistantMessage()
    if not isinstance(blocks, list):
        raise TypeError("content: expected a list")
    return AssistantMessage(content=[_content_block(block) for block in blocks])


@dataclass
class StreamMessage:
    """A single line of stream-json output."""

    type: str = ""
    message: AssistantMessage | None = None
    result: str = ""
    total_cost_usd: float = 0.0
    is_error: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "StreamMessage":
        """Build from a decoded JSON object; raise TypeError on mismatched types."""
        if data is None:
            return cls()
        data = _require_mapping(data, "stream message")
        return cls(
            type=_get(data, "type", (str,), ""),
            message=_assistant_message(data.get("message")),
            result=_get(data, "result", (str,), ""),
            total_cost_usd=float(_get(data, "total_cost_usd", (int, float), 0.0)),
            is_error=_get(data, "is_error", (bool,), False),
        )


@dataclass
class ParsedResult:
    """The outcome of parsing a whole stream-json run."""

    output: str = ""
    result_text: str = ""
    total_cost_usd: float = 0.0
    is_error: bool = False
    raw_messages: list[StreamMessage] = field(default_factory=list)