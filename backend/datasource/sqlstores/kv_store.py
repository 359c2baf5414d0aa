# datasource/sqlstores/kv_store.py
# -*- coding: utf-8 -*-
"""
KeyValueStore
- 设备级持久化 KV（语义对齐浏览器 localStorage：字符串 key → 字符串 value）
- 写入成功后发布 storage-mutated 信号，供跨 tab 同步使用
"""

from __future__ import annotations
from typing import Optional, List
from common.signals import SignalBus, STORAGE_MUTATED
from ..connections.sqlite_connection import SQLiteConnection


class KeyValueStore:
    def __init__(self, conn: SQLiteConnection | None = None, bus: Optional[SignalBus] = None) -> None:
        self.conn = conn or SQLiteConnection()
        self.bus = bus

    def get(self, key: str) -> Optional[str]:
        row = self.conn.query_one(
            "SELECT value FROM kv_store WHERE key = ?",
            (key,),
        )
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        self.conn.execute(
            """
            INSERT INTO kv_store(key, value)
            VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET
              value = excluded.value,
              updated_at = datetime('now')
            """,
            (key, value),
        )
        self._notify(key)

    def remove(self, key: str) -> None:
        self.conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        self._notify(key)

    def clear(self) -> None:
        self.conn.execute("DELETE FROM kv_store")
        self._notify(None)

    def keys(self, prefix: str = "") -> List[str]:
        rows = self.conn.query_all(
            "SELECT key FROM kv_store WHERE substr(key, 1, ?) = ? ORDER BY key",
            (len(prefix), prefix),
        )
        return [r["key"] for r in rows]

    def _notify(self, key: Optional[str]) -> None:
        if self.bus is not None:
            self.bus.publish(STORAGE_MUTATED, key=key)
