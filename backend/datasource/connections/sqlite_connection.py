# datasource/connections/sqlite_connection.py
# -*- coding: utf-8 -*-
"""
SQLiteConnection（核心版）
- 初始化本地 KV 表（替代浏览器 localStorage）
- 不包含业务逻辑
"""

from __future__ import annotations
import os
import sqlite3
import threading
from pathlib import Path
from typing import Any, Iterable, Optional


CORE_DDL = r"""
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;

-- 设备级 KV：key → JSON 文本
CREATE TABLE IF NOT EXISTS kv_store (
  key          TEXT PRIMARY KEY,
  value        TEXT NOT NULL,
  updated_at   TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_kv_store_updated
  ON kv_store (updated_at DESC);
"""


class SQLiteConnection:
    """SQLite 核心连接层（无业务）"""

    def __init__(self, db_path: Optional[str] = None) -> None:
        default_path = Path(os.getcwd()) / "db" / "chat.sqlite3"
        self.db_path = Path(db_path or os.getenv("CHAT_DB_PATH", default_path))
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(self.db_path.as_posix(), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.RLock()

        self._init_core_schema()

    def _init_core_schema(self) -> None:
        with self._lock, self._conn:
            self._conn.executescript(CORE_DDL)

    # ---------- 基础操作 ----------
    def execute(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        with self._lock, self._conn:
            return self._conn.execute(sql, params)

    def query_all(self, sql: str, params: Iterable[Any] = ()) -> list[dict]:
        with self._lock:
            cur = self._conn.execute(sql, params)
            return [dict(r) for r in cur.fetchall()]

    def query_one(self, sql: str, params: Iterable[Any] = ()) -> Optional[dict]:
        with self._lock:
            cur = self._conn.execute(sql, params)
            row = cur.fetchone()
            return dict(row) if row else None

    def close(self) -> None:
        try:
            self._conn.close()
        except Exception:
            pass
