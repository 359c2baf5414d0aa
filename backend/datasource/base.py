# datasource/base.py
# -*- coding: utf-8 -*-

from __future__ import annotations
from typing import Optional

from settings.config import Settings
from common.signals import SignalBus

from datasource.connections.sqlite_connection import SQLiteConnection

from datasource.sqlstores.kv_store import KeyValueStore
from datasource.sqlstores.identity_session_store import IdentitySessionStore


class Datasource:
    """
    设备级 Datasource
    - 只负责连接、信号总线与 store 聚合
    - 不包含任何业务逻辑
    - 同一 origin 下的多个 ChatSession（多个 tab）共享同一个 Datasource
    """

    def __init__(self, settings: Optional[Settings] = None, bus: Optional[SignalBus] = None):
        self.settings = settings or Settings()
        self.bus = bus or SignalBus()

        # ---------- SQLite ----------
        self.sqlite_conn = SQLiteConnection(
            db_path=self.settings.sqlite_path
        )
        self.kv = KeyValueStore(self.sqlite_conn, bus=self.bus)
        self.identity_session = IdentitySessionStore(self.kv)

    def close(self):
        # SQLite 是唯一需要显式 close 的资源
        try:
            if self.sqlite_conn:
                self.sqlite_conn.close()
        except Exception:
            pass
