# -*- coding: utf-8 -*-

from datetime import datetime, timezone

import pytest

from core.chat.models import Message
from core.chat.normalizer import (
    has_real_history,
    last_activity_ms,
    normalize,
    parse_timestamp,
    to_epoch_ms,
    unwrap_transcript,
)

TS = 1_700_000_000_123  # 2023-11-14T22:13:20.123Z


def test_current_schema_passes_through():
    out = normalize([{"id": 7, "text": "hello", "isBot": False, "timestamp": "2023-11-14T22:13:20.123Z"}])
    assert out == [
        Message(id=7, text="hello", is_bot=False, timestamp=datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=timezone.utc))
    ]


@pytest.mark.parametrize(
    "record, is_bot",
    [
        ({"content": "x", "role": "user"}, False),
        ({"content": "x", "role": "assistant"}, True),
        ({"message": "x", "sender": "bot"}, True),
        ({"message": "x", "sender": "User"}, False),
        ({"text": "x", "bot": True}, True),
        ({"text": "x"}, False),
    ],
)
def test_legacy_author_fields(record, is_bot):
    (msg,) = normalize([record])
    assert msg.text == "x"
    assert msg.is_bot is is_bot


def test_text_field_priority():
    (msg,) = normalize([{"text": "first", "content": "second", "message": "third"}])
    assert msg.text == "first"


def test_epoch_ms_and_date_field():
    (a, b) = normalize([{"text": "a", "timestamp": TS}, {"text": "b", "date": str(TS)}])
    assert a.timestamp == b.timestamp
    assert to_epoch_ms(a.timestamp) == TS


def test_id_coercion_and_synthetic_ids():
    out = normalize([{"id": "42", "text": "a"}, {"text": "b"}, {"text": "c"}])
    assert out[0].id == 42
    assert out[2].id == out[1].id + 1


def test_unusable_records_are_dropped():
    out = normalize([None, 1, "text", [], {"text": ""}, {"text": "   "}, {"text": {"nested": True}}, {"text": "ok"}])
    assert [m.text for m in out] == ["ok"]


@pytest.mark.parametrize("raw", [None, 42, "[]", {"text": "x"}, float("nan")])
def test_non_list_input_yields_empty(raw):
    assert normalize(raw) == []


def test_never_throws_and_is_idempotent_on_garbage():
    raw = [
        {"id": float("nan"), "text": "a", "timestamp": "not a date"},
        {"id": float("inf"), "content": 12, "date": float("inf")},
        {"id": True, "message": "c", "timestamp": -1e30},
        {"id": "1e3", "text": "d", "isBot": "yes", "role": 5},
        {"text": "e", "timestamp": {"$date": TS}},
        {"text": "f", "timestamp": "2023-11-14T22:13:20.123456+03:00"},
    ]
    once = normalize(raw)
    assert len(once) == 6
    assert normalize(once) == once
    assert normalize([m.to_dict() for m in once]) == once


def test_timestamps_are_truncated_to_milliseconds():
    ts = parse_timestamp(datetime(2024, 1, 1, 0, 0, 0, 987654, tzinfo=timezone.utc))
    assert ts.microsecond == 987000


def test_naive_iso_is_treated_as_utc():
    assert parse_timestamp("2024-01-01T00:00:00") == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_unwrap_transcript():
    assert unwrap_transcript([1]) == [1]
    assert unwrap_transcript({"messages": [1, 2]}) == [1, 2]
    assert unwrap_transcript({"messages": "nope"}) == []
    assert unwrap_transcript(None) == []


def test_last_activity_uses_latest_parseable_timestamp():
    raw = [{"text": "a", "timestamp": TS}, {"text": "b", "timestamp": TS + 5000}, {"text": "c", "timestamp": "bad"}]
    assert last_activity_ms(raw) == TS + 5000
    assert last_activity_ms([{"text": "no time"}]) == 0
    assert last_activity_ms("garbage") == 0


def test_real_history_needs_a_user_message():
    welcome = normalize([{"text": "Welcome", "isBot": True}])
    assert not has_real_history(welcome)
    assert has_real_history(welcome + normalize([{"text": "hi", "isBot": False}]))
