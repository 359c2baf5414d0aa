# datasource/sqlstores/identity_session_store.py
# -*- coding: utf-8 -*-
"""
IdentitySessionStore
- 外部认证模块与 chat 引擎共享的身份记录：user / auth_token / last_auth_change
- 设备级命名空间候选集：chat_ns_candidates（JSON 数组，只增不删）
"""

from __future__ import annotations
import json
import time
from typing import Any, Dict, List, Optional
from .kv_store import KeyValueStore

USER_KEY = "user"
AUTH_TOKEN_KEY = "auth_token"
LAST_AUTH_CHANGE_KEY = "last_auth_change"
CANDIDATES_KEY = "chat_ns_candidates"

Row = Dict[str, Any]


class IdentitySessionStore:
    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    # ---------- user ----------
    def get_user(self) -> Optional[Row]:
        """损坏或非对象的记录一律按“无身份”处理"""
        raw = self.kv.get(USER_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return None
        return data if isinstance(data, dict) else None

    def set_user(self, user: Row) -> None:
        self.kv.set(USER_KEY, json.dumps(user, ensure_ascii=False))

    def remove_user(self) -> None:
        self.kv.remove(USER_KEY)

    # ---------- token ----------
    def get_token(self) -> Optional[str]:
        return self.kv.get(AUTH_TOKEN_KEY)

    def set_token(self, token: str) -> None:
        self.kv.set(AUTH_TOKEN_KEY, token)

    def remove_token(self) -> None:
        self.kv.remove(AUTH_TOKEN_KEY)

    # ---------- auth change marker ----------
    def touch_auth_change(self) -> int:
        now_ms = int(time.time() * 1000)
        self.kv.set(LAST_AUTH_CHANGE_KEY, str(now_ms))
        return now_ms

    # ---------- namespace candidates ----------
    def get_candidates(self) -> List[str]:
        raw = self.kv.get(CANDIDATES_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return []
        if not isinstance(data, list):
            return []
        return [str(v).lower() for v in data if v]

    def set_candidates(self, candidates: List[str]) -> None:
        self.kv.set(CANDIDATES_KEY, json.dumps(candidates, ensure_ascii=False))
