# core/chat/transcript_store.py
# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import sqlite3
from typing import Any, List, Optional

from datasource.sqlstores.kv_store import KeyValueStore
from settings.logging_config import get_logger
from .models import DEFAULT_LANG, LANGS, Lang, Message, SessionAuxState
from .normalizer import normalize, unwrap_transcript

logger = get_logger(__name__)

# 按 namespace 拼接的基础 key：`base:ns`
OPEN_KEY = "chat_isOpen"
MINIMIZED_KEY = "chat_isMinimized"
LANG_KEY = "chat_lang"
DRAFT_KEY = "chat_draft"
MESSAGES_KEY = "chat_messages"
TOPIC_KEY = "chat_lastTopic"

BASE_KEYS = (OPEN_KEY, MINIMIZED_KEY, LANG_KEY, DRAFT_KEY, MESSAGES_KEY, TOPIC_KEY)

# 旧版本未分 namespace 的消息 key，仍需可读
LEGACY_MESSAGES_KEY = MESSAGES_KEY


def namespaced_key(base: str, namespace: str) -> str:
    return f"{base}:{namespace}"


def namespace_from_key(key: str) -> Optional[str]:
    """`chat_messages:<ns>` → ns；无冒号（旧 key）→ None"""
    idx = key.find(":")
    if idx == -1:
        return None
    return key[idx + 1:]


class TranscriptStore:
    """
    会话记录 + 会话辅助字段的读写：
    - 读：缺失 / 损坏 / 类型不对 → 返回类型化默认值，不抛异常
    - 写：尽力而为，失败（如磁盘满）只记日志，不影响内存里的会话
    """

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    # ------------------------------------------------------------------
    # 底层 JSON 读写
    # ------------------------------------------------------------------
    def read_raw(self, key: str) -> Any:
        try:
            raw = self.kv.get(key)
        except sqlite3.Error as e:
            logger.warning("read %s failed: %s", key, e)
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            return None

    def _read(self, key: str, fallback: Any, expected: type) -> Any:
        value = self.read_raw(key)
        if value is None or not isinstance(value, expected):
            return fallback
        return value

    def _write(self, key: str, value: Any) -> None:
        try:
            self.kv.set(key, json.dumps(value, ensure_ascii=False))
        except (sqlite3.Error, TypeError, ValueError) as e:
            logger.warning("write %s failed: %s", key, e)

    # ------------------------------------------------------------------
    # transcript
    # ------------------------------------------------------------------
    def read_messages(self, namespace: str) -> List[Message]:
        stored = self.read_raw(namespaced_key(MESSAGES_KEY, namespace))
        return normalize(unwrap_transcript(stored))

    def write_messages(self, namespace: str, messages: List[Message]) -> None:
        self._write(namespaced_key(MESSAGES_KEY, namespace), [m.to_dict() for m in messages])

    # ------------------------------------------------------------------
    # SessionAuxState
    # ------------------------------------------------------------------
    def read_open(self, namespace: str) -> bool:
        return self._read(namespaced_key(OPEN_KEY, namespace), False, bool)

    def write_open(self, namespace: str, value: bool) -> None:
        self._write(namespaced_key(OPEN_KEY, namespace), bool(value))

    def read_minimized(self, namespace: str) -> bool:
        return self._read(namespaced_key(MINIMIZED_KEY, namespace), False, bool)

    def write_minimized(self, namespace: str, value: bool) -> None:
        self._write(namespaced_key(MINIMIZED_KEY, namespace), bool(value))

    def read_lang(self, namespace: str) -> Lang:
        value = self._read(namespaced_key(LANG_KEY, namespace), DEFAULT_LANG, str)
        return value if value in LANGS else DEFAULT_LANG

    def write_lang(self, namespace: str, value: Lang) -> None:
        self._write(namespaced_key(LANG_KEY, namespace), value)

    def read_draft(self, namespace: str) -> str:
        return self._read(namespaced_key(DRAFT_KEY, namespace), "", str)

    def write_draft(self, namespace: str, value: str) -> None:
        self._write(namespaced_key(DRAFT_KEY, namespace), value)

    def read_last_topic(self, namespace: str) -> str:
        return self._read(namespaced_key(TOPIC_KEY, namespace), "", str)

    def write_last_topic(self, namespace: str, value: str) -> None:
        self._write(namespaced_key(TOPIC_KEY, namespace), value)

    def read_aux(self, namespace: str) -> SessionAuxState:
        return SessionAuxState(
            is_open=self.read_open(namespace),
            is_minimized=self.read_minimized(namespace),
            lang=self.read_lang(namespace),
            draft=self.read_draft(namespace),
            last_topic=self.read_last_topic(namespace),
        )

    # ------------------------------------------------------------------
    # 注销账号时清理当前 namespace 的全部 chat 字段
    # ------------------------------------------------------------------
    def clear_namespace(self, namespace: str) -> None:
        for base in BASE_KEYS:
            key = namespaced_key(base, namespace)
            try:
                self.kv.remove(key)
            except sqlite3.Error as e:
                logger.warning("remove %s failed: %s", key, e)
