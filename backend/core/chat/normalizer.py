# core/chat/normalizer.py
# -*- coding: utf-8 -*-
"""
把不同历史版本写入的消息记录统一成 Message。

历史上出现过的字段：
- 文本：text / content / message
- 作者：isBot(bool) / role / sender（非 "user" 即机器人）/ bot(bool)
- 时间：timestamp / date（ISO 字符串、毫秒时间戳或 datetime）
- id：数字或数字字符串；缺失时用 now_ms + 下标 生成

normalize 是纯函数且全域可用：任何输入都不抛异常，对自身输出再跑一次结果不变。
"""

from __future__ import annotations

import math
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from .models import Message, now_utc

TEXT_FIELDS = ("text", "content", "message")
TIMESTAMP_FIELDS = ("timestamp", "date")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _first_present(record: Dict[str, Any], names: Iterable[str]) -> Any:
    for name in names:
        value = record.get(name)
        if value is not None:
            return value
    return None


def _truncate_ms(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.replace(microsecond=(ts.microsecond // 1000) * 1000)


def _from_epoch_ms(value: float) -> Optional[datetime]:
    if not math.isfinite(value):
        return None
    try:
        return _EPOCH + timedelta(milliseconds=int(value))
    except (OverflowError, ValueError):
        return None


def to_epoch_ms(ts: datetime) -> int:
    return (ts - _EPOCH) // timedelta(milliseconds=1)


def parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return _truncate_ms(value)
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return _from_epoch_ms(float(value))
    if not isinstance(value, str):
        return None

    s = value.strip()
    if not s:
        return None
    try:
        return _from_epoch_ms(float(s))
    except ValueError:
        pass
    if s.endswith("Z") or s.endswith("z"):
        s = s[:-1] + "+00:00"
    try:
        return _truncate_ms(datetime.fromisoformat(s))
    except ValueError:
        return None


def _coerce_id(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value or None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) or None
    if isinstance(value, str):
        s = value.strip()
        try:
            return int(s) or None
        except ValueError:
            pass
        try:
            f = float(s)
        except ValueError:
            return None
        if not math.isfinite(f):
            return None
        return int(f) or None
    return None


def _coerce_text(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        text = value
    elif isinstance(value, (int, float)):
        text = str(value)
    else:
        return None
    return text if text.strip() else None


def _coerce_is_bot(record: Dict[str, Any]) -> bool:
    explicit = record.get("isBot")
    if isinstance(explicit, bool):
        return explicit
    role = record.get("role")
    if isinstance(role, str) and role.lower() != "user":
        return True
    sender = record.get("sender")
    if isinstance(sender, str) and sender.lower() != "user":
        return True
    return record.get("bot") is True


def _as_record(raw: Any) -> Optional[Dict[str, Any]]:
    if isinstance(raw, Message):
        return {"id": raw.id, "text": raw.text, "isBot": raw.is_bot, "timestamp": raw.timestamp}
    if isinstance(raw, dict):
        return raw
    return None


def normalize(raw_records: Any) -> List[Message]:
    if not isinstance(raw_records, (list, tuple)):
        return []

    base_id = int(time.time() * 1000)
    out: List[Message] = []
    for i, raw in enumerate(raw_records):
        record = _as_record(raw)
        if record is None:
            continue
        text = _coerce_text(_first_present(record, TEXT_FIELDS))
        if text is None:
            continue
        msg_id = _coerce_id(record.get("id"))
        ts = parse_timestamp(_first_present(record, TIMESTAMP_FIELDS))
        out.append(
            Message(
                id=msg_id if msg_id is not None else base_id + i,
                text=text,
                is_bot=_coerce_is_bot(record),
                timestamp=ts or now_utc(),
            )
        )
    return out


def unwrap_transcript(stored: Any) -> List[Any]:
    """存储值可能是数组，也可能是 {"messages": [...]}"""
    if isinstance(stored, list):
        return stored
    if isinstance(stored, dict) and isinstance(stored.get("messages"), list):
        return stored["messages"]
    return []


def last_activity_ms(raw_records: Any) -> int:
    """原始记录里可解析的最大时间戳（毫秒）；都解析不了则为 0"""
    if not isinstance(raw_records, (list, tuple)):
        return 0
    latest = 0
    for raw in raw_records:
        record = _as_record(raw)
        if record is None:
            continue
        ts = parse_timestamp(_first_present(record, TIMESTAMP_FIELDS))
        if ts is None:
            continue
        latest = max(latest, to_epoch_ms(ts))
    return latest


def has_real_history(messages: List[Message]) -> bool:
    return any(not m.is_bot for m in messages)
