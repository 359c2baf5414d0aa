# core/chat/synchronizer.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import Any, Callable, List, Optional

from common.signals import FOCUS_REGAINED, IDENTITY_CHANGED, STORAGE_MUTATED, SignalBus
from datasource.sqlstores.identity_session_store import (
    CANDIDATES_KEY,
    LAST_AUTH_CHANGE_KEY,
    USER_KEY,
)
from identity.identity_manager import IdentityManager
from settings.logging_config import get_logger
from .ranker import CandidateRanker

logger = get_logger(__name__)

# 这些 key 变化意味着身份上下文可能变了（None 表示整库被清空）
WATCHED_KEYS = {USER_KEY, CANDIDATES_KEY, LAST_AUTH_CHANGE_KEY, None}

NamespaceListener = Callable[[str, str], None]


class CrossTabSynchronizer:
    """
    纯事件驱动（无轮询）：
    - storage-mutated（只关心 WATCHED_KEYS）
    - focus-regained
    - identity-changed（同一 tab 内登录/登出）
    - 打开聊天窗口（由 ChatSession 直接调用 on_widget_opened）

    每次触发都重新推导 namespace；变化时通知监听者。
    是否存在可加载的历史只做存在性检查，真正加载仍由用户主动点击。
    """

    def __init__(
        self,
        identity_manager: IdentityManager,
        ranker: CandidateRanker,
        bus: Optional[SignalBus] = None,
    ):
        self.identity_manager = identity_manager
        self.ranker = ranker
        self.bus = bus
        self.namespace = IdentityManager.current_namespace(identity_manager.current_identity())
        self.has_past_chat = False
        self._listeners: List[NamespaceListener] = []
        self._unsubscribers: List[Callable[[], None]] = []
        self.recompute()

    # ---------- 订阅 ----------
    def attach(self) -> "CrossTabSynchronizer":
        if self.bus is None or self._unsubscribers:
            return self
        self._unsubscribers = [
            self.bus.subscribe(STORAGE_MUTATED, self._on_storage),
            self.bus.subscribe(FOCUS_REGAINED, self._on_signal),
            self.bus.subscribe(IDENTITY_CHANGED, self._on_signal),
        ]
        return self

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def on_namespace_changed(self, listener: NamespaceListener) -> None:
        self._listeners.append(listener)

    # ---------- 事件入口 ----------
    def _on_storage(self, key: Optional[str] = None, **_: Any) -> None:
        if key in WATCHED_KEYS:
            self.recompute()

    def _on_signal(self, **_: Any) -> None:
        self.recompute()

    def on_widget_opened(self) -> None:
        self.recompute()

    # ---------- 重新推导 ----------
    def recompute(self) -> bool:
        """返回 namespace 是否发生变化"""
        identity = self.identity_manager.current_identity()
        current = IdentityManager.current_namespace(identity)
        previous = self.namespace
        changed = current != previous
        if changed:
            self.namespace = current
            logger.debug("chat namespace changed: %s -> %s", previous, current)

        candidates = self.identity_manager.candidate_namespaces(identity)
        fields = identity.identifying_fields() if identity else []
        self.has_past_chat = self.ranker.has_eligible_history(candidates, current, fields)

        if changed:
            for listener in list(self._listeners):
                listener(previous, current)
        return changed
