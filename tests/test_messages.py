import json

import pytest

from claudeloop.claude.messages import (
    AssistantMessage,
    ContentBlock,
    ParsedResult,
    StreamMessage,
)


def _decode(text):
    return StreamMessage.from_dict(json.loads(text))


def test_unmarshal_assistant():
    msg = _decode('{"type":"assistant","message":{"content":[{"type":"text","text":"Hello, world!"}]}}')
    assert msg.type == "assistant"
    assert msg.message is not None
    assert len(msg.message.content) == 1
    assert msg.message.content[0].type == "text"
    assert msg.message.content[0].text == "Hello, world!"


def test_unmarshal_result():
    msg = _decode(
        '{"type":"result","result":"Task completed successfully.","total_cost_usd":0.0523,"is_error":false}'
    )
    assert msg.type == "result"
    assert msg.result == "Task completed successfully."
    assert msg.total_cost_usd == pytest.approx(0.0523, abs=0.0001)
    assert msg.is_error is False


def test_unmarshal_result_error():
    msg = _decode('{"type":"result","result":"Something went wrong","total_cost_usd":0.01,"is_error":true}')
    assert msg.type == "result"
    assert msg.result == "Something went wrong"
    assert msg.is_error is True


def test_unmarshal_multiple_content_blocks():
    msg = _decode(
        '{"type":"assistant","message":{"content":[{"type":"text","text":"First"},'
        '{"type":"tool_use","id":"123"},{"type":"text","text":"Second"}]}}'
    )
    assert msg.message == AssistantMessage(
        content=[
            ContentBlock("text", "First"),
            ContentBlock("tool_use", ""),
            ContentBlock("text", "Second"),
        ]
    )


def test_integer_cost_becomes_float():
    msg = StreamMessage.from_dict({"type": "result", "total_cost_usd": 2})
    assert msg.total_cost_usd == 2.0


def test_null_fields_keep_defaults():
    msg = StreamMessage.from_dict({"type": None, "message": None, "result": None})
    assert msg == StreamMessage()


def test_none_gives_empty_message():
    assert StreamMessage.from_dict(None) == StreamMessage()


@pytest.mark.parametrize(
    "data",
    [
        {"type": 5},
        {"result": ["x"]},
        {"total_cost_usd": "1.0"},
        {"total_cost_usd": True},
        {"is_error": "yes"},
        {"message": "text"},
        {"message": {"content": "text"}},
        [1, 2],
        "text",
    ],
)
def test_mismatched_types_raise(data):
    with pytest.raises(TypeError):
        StreamMessage.from_dict(data)


def test_parsed_result_zero_value():
    result = ParsedResult()
    assert result.output == ""
    assert result.result_text == ""
    assert result.total_cost_usd == 0
    assert result.is_error is False
    assert result.raw_messages == []