# identity/identity_manager.py
# -*- coding: utf-8 -*-

from __future__ import annotations
import sqlite3
from typing import TYPE_CHECKING, Any, Dict, Optional, Set

from common.normalize import GUEST_NAMESPACE
from common.signals import SignalBus, IDENTITY_CHANGED
from datasource.sqlstores.identity_session_store import IdentitySessionStore
from settings.logging_config import get_logger
from .models import Identity

if TYPE_CHECKING:
    from core.chat.transcript_store import TranscriptStore

logger = get_logger(__name__)


class IdentityManager:
    """
    Identity 层核心入口：
    - 读取外部认证模块写入的当前用户
    - 推导当前命名空间（namespace）
    - 维护设备级命名空间候选集（只增不删）
    - 登录 / 登出 / 注销前先落候选集，再清身份，保证之后还能找回历史对话
    """

    def __init__(
        self,
        store: IdentitySessionStore,
        bus: Optional[SignalBus] = None,
        transcripts: Optional["TranscriptStore"] = None,
    ):
        self.store = store
        self.bus = bus
        self.transcripts = transcripts

    # ---------- 当前身份 ----------
    def current_identity(self) -> Optional[Identity]:
        return Identity.from_record(self.store.get_user())

    # ---------- namespace ----------
    @staticmethod
    def current_namespace(identity: Optional[Identity]) -> str:
        if identity is None:
            return GUEST_NAMESPACE
        return identity.namespace

    def candidate_namespaces(self, identity: Optional[Identity]) -> Set[str]:
        """
        当前 namespace ∪ 身份上的全部标识 ∪ 设备上历史出现过的全部标识。
        身份上出现了新标识时顺带写回候选集。
        """
        out: Set[str] = {self.current_namespace(identity)}
        fields = identity.identifying_fields() if identity else []
        out.update(fields)

        persisted = self.store.get_candidates()
        out.update(persisted)

        if any(f not in persisted for f in fields):
            self.persist_candidates(identity)
        return out

    def persist_candidates(self, identity: Optional[Identity]) -> None:
        if identity is None:
            return
        prev = self.store.get_candidates()
        merged = list(prev)
        for v in identity.identifying_fields():
            if v not in merged:
                merged.append(v)
        if merged == prev:
            return
        try:
            self.store.set_candidates(merged)
        except sqlite3.Error as e:
            logger.warning("persist namespace candidates failed: %s", e)

    # ---------- 认证生命周期（由外部认证模块调用） ----------
    def login(self, user: Dict[str, Any], token: Optional[str] = None) -> Identity:
        identity = Identity.from_record(user)
        self.persist_candidates(identity)
        if token:
            self.store.set_token(token)
        self.store.set_user(user)
        self._announce()
        return identity

    def update_profile(self, user: Dict[str, Any]) -> Identity:
        """资料变更（例如改邮箱）：旧标识已在候选集里，新标识追加进去"""
        self.persist_candidates(self.current_identity())
        identity = Identity.from_record(user)
        self.persist_candidates(identity)
        self.store.set_user(user)
        self._announce()
        return identity

    def logout(self) -> None:
        self.persist_candidates(self.current_identity())
        self.store.remove_token()
        self.store.remove_user()
        self._announce()

    def delete_account(self) -> None:
        """注销：候选集保留，但当前 namespace 下的 chat 数据有意清空"""
        identity = self.current_identity()
        self.persist_candidates(identity)
        if self.transcripts is not None:
            self.transcripts.clear_namespace(self.current_namespace(identity))
        self.store.remove_token()
        self.store.remove_user()
        self._announce()

    def _announce(self) -> None:
        try:
            self.store.touch_auth_change()
        except sqlite3.Error as e:
            logger.warning("touch last_auth_change failed: %s", e)
        if self.bus is not None:
            self.bus.publish(IDENTITY_CHANGED)
