# core/chat/models.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

Lang = Literal["en", "am", "om"]
LANGS = ("en", "am", "om")
DEFAULT_LANG: Lang = "en"


def now_utc() -> datetime:
    """当前时间（UTC，截断到毫秒，保证 JSON 往返不丢精度）"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def to_iso(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Message:
    id: int
    text: str
    is_bot: bool
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """持久化格式（与历史版本的 JSON 字段名保持一致）"""
        return {
            "id": self.id,
            "text": self.text,
            "isBot": self.is_bot,
            "timestamp": to_iso(self.timestamp),
        }

    def with_text(self, text: str) -> "Message":
        return Message(id=self.id, text=text, is_bot=self.is_bot, timestamp=self.timestamp)


@dataclass
class Candidate:
    """排序期的候选历史（不落库）"""
    key: str
    namespace: Optional[str]
    messages: List[Message]
    last_activity_at: int = 0


@dataclass
class SessionAuxState:
    is_open: bool = False
    is_minimized: bool = False
    lang: Lang = DEFAULT_LANG
    draft: str = ""
    last_topic: str = ""


@dataclass
class ExchangeContext:
    """发给远端问答服务的浅上下文：只带上一轮 + last topic"""
    last_topic: str = ""
    prev_user: str = ""
    prev_bot: str = ""
    is_follow_up: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lastTopic": self.last_topic,
            "prevUser": self.prev_user,
            "prevBot": self.prev_bot,
            "isFollowUp": self.is_follow_up,
        }


@dataclass
class PendingExchange:
    user_text: str
    pending_id: int
    namespace: str
    lang: Lang
    context: ExchangeContext = field(default_factory=ExchangeContext)
