# core/chat/chat_session.py
# -*- coding: utf-8 -*-

from __future__ import annotations

import time
from typing import List, Optional

from identity.identity_manager import IdentityManager
from .answer_client import RemoteAnswerClient
from .intent_router import IntentRouter, build_context
from .models import LANGS, Lang, Message, PendingExchange, now_utc
from .normalizer import has_real_history
from .ranker import CandidateRanker
from .synchronizer import CrossTabSynchronizer
from .transcript_store import TranscriptStore
from . import responses as R


class ChatSession:
    """
    聊天组件的状态机（渲染层只读取这里的状态）：
    - 打开 / 最小化 / 语言 / 草稿，变更即落库
    - 新 namespace 一律从本地化欢迎语开始；历史只在用户点击“加载”时才载入
    - 发送：先追加用户消息和一条占位消息，远端答案回来后按 id 原地替换
    """

    def __init__(
        self,
        identity_manager: IdentityManager,
        transcripts: TranscriptStore,
        ranker: CandidateRanker,
        synchronizer: CrossTabSynchronizer,
        router: IntentRouter,
        answer_client: Optional[RemoteAnswerClient] = None,
        last_topic_max: int = 160,
    ):
        self.identity_manager = identity_manager
        self.transcripts = transcripts
        self.ranker = ranker
        self.synchronizer = synchronizer
        self.router = router
        self.answer_client = answer_client
        self.last_topic_max = last_topic_max

        self.namespace = synchronizer.namespace
        aux = transcripts.read_aux(self.namespace)
        self.is_open = aux.is_open
        self.is_minimized = aux.is_minimized
        self.lang: Lang = aux.lang
        self.draft = aux.draft
        self.last_topic = aux.last_topic
        self.messages: List[Message] = []
        self.messages = [self._welcome()]

        synchronizer.on_namespace_changed(self._on_namespace_changed)

    # ------------------------------------------------------------------
    # 派生状态
    # ------------------------------------------------------------------
    @property
    def has_past_chat(self) -> bool:
        return self.synchronizer.has_past_chat

    @property
    def is_fresh_welcome(self) -> bool:
        return len(self.messages) == 1 and self.messages[0].is_bot

    @property
    def display_messages(self) -> List[Message]:
        """有历史可加载且当前只有欢迎语时，只显示“加载历史”按钮"""
        if self.has_past_chat and self.is_fresh_welcome:
            return []
        return list(self.messages)

    @property
    def suggestions(self) -> List[str]:
        return list(R.SUGGESTIONS[self.lang])

    # ------------------------------------------------------------------
    # 窗口状态
    # ------------------------------------------------------------------
    def open(self) -> None:
        self.is_open = True
        self.transcripts.write_open(self.namespace, True)
        self.synchronizer.on_widget_opened()

    def close(self) -> None:
        self.is_open = False
        self.transcripts.write_open(self.namespace, False)

    def toggle_minimized(self) -> None:
        self.is_minimized = not self.is_minimized
        self.transcripts.write_minimized(self.namespace, self.is_minimized)

    def set_draft(self, text: str) -> None:
        self.draft = text or ""
        self.transcripts.write_draft(self.namespace, self.draft)

    def set_language(self, lang: str) -> None:
        if lang not in LANGS:
            raise ValueError(f"Unsupported language: {lang}")
        if lang == self.lang:
            return
        self.lang = lang  # type: ignore[assignment]
        self.transcripts.write_lang(self.namespace, self.lang)

        if not has_real_history(self.messages) and self.messages and self.messages[0].is_bot:
            self.messages[0] = self.messages[0].with_text(R.WELCOME[self.lang])
        else:
            self.messages.append(self._bot(R.LANGUAGE_SWITCHED[self.lang]))
        self._persist_messages()

    # ------------------------------------------------------------------
    # 历史
    # ------------------------------------------------------------------
    def load_past_chat(self) -> bool:
        identity = self.identity_manager.current_identity()
        candidates = self.identity_manager.candidate_namespaces(identity)
        fields = identity.identifying_fields() if identity else []
        history = self.ranker.select_best_history(candidates, self.namespace, fields)
        if not history:
            return False
        self.messages = list(history)
        return True

    # ------------------------------------------------------------------
    # 发送
    # ------------------------------------------------------------------
    def begin_send(self, text: Optional[str] = None) -> Optional[PendingExchange]:
        user_text = (self.draft if text is None else text).strip()
        if not user_text:
            return None

        context = build_context(self.messages, self.last_topic, user_text)
        if self.is_fresh_welcome:
            # 未加载历史就发送：接在已存的对话后面，不覆盖
            stored = self.transcripts.read_messages(self.namespace)
            if has_real_history(stored):
                self.messages = stored
        user_msg = Message(id=self._next_id(), text=user_text, is_bot=False, timestamp=now_utc())
        self.messages.append(user_msg)
        placeholder = self._bot(R.PENDING_TEXT)
        self.messages.append(placeholder)

        self.set_draft("")
        self._persist_messages()
        return PendingExchange(
            user_text=user_text,
            pending_id=placeholder.id,
            namespace=self.namespace,
            lang=self.lang,
            context=context,
        )

    def complete_send(self, pending: PendingExchange, remote_answer: Optional[str] = None) -> Optional[str]:
        """
        占位消息已不在当前 namespace 的记录里（切换了账号 / 组件已重置）→ 丢弃迟到的答案。
        """
        if pending.namespace != self.namespace:
            self._drop_stored_placeholder(pending)
            return None
        idx = next((i for i, m in enumerate(self.messages) if m.id == pending.pending_id), None)
        if idx is None:
            self._drop_stored_placeholder(pending)
            return None

        if remote_answer is None:
            answer = self.router.route(pending.user_text, pending.lang)
        else:
            answer = self.router.apply_overrides(pending.user_text, remote_answer, pending.lang)

        self.messages[idx] = self.messages[idx].with_text(answer)
        self.last_topic = pending.user_text[: self.last_topic_max]
        self.transcripts.write_last_topic(self.namespace, self.last_topic)
        self._persist_messages()
        return answer

    def send(self, text: Optional[str] = None) -> Optional[str]:
        pending = self.begin_send(text)
        if pending is None:
            return None
        remote = None
        if self.answer_client is not None:
            remote = self.answer_client.ask(pending.user_text, pending.lang, pending.context)
        return self.complete_send(pending, remote)

    def dispose(self) -> None:
        self.synchronizer.detach()

    # ------------------------------------------------------------------
    # 内部
    # ------------------------------------------------------------------
    def _on_namespace_changed(self, previous: str, current: str) -> None:
        self.namespace = current
        self.messages = [self._welcome()]
        self.draft = ""
        self.last_topic = self.transcripts.read_last_topic(current)
        self.transcripts.write_draft(current, "")
        self.transcripts.write_open(current, self.is_open)
        self.transcripts.write_minimized(current, self.is_minimized)
        self.transcripts.write_lang(current, self.lang)

    def _drop_stored_placeholder(self, pending: PendingExchange) -> None:
        """丢弃迟到答案时，把已落库的占位消息从原 namespace 的记录里删掉"""
        stored = self.transcripts.read_messages(pending.namespace)
        kept = [m for m in stored if m.id != pending.pending_id]
        if len(kept) != len(stored):
            self.transcripts.write_messages(pending.namespace, kept)

    def _persist_messages(self) -> None:
        # 只有欢迎语的记录不算历史，不覆盖存储里已有的真实对话
        if has_real_history(self.messages):
            self.transcripts.write_messages(self.namespace, self.messages)

    def _welcome(self) -> Message:
        return self._bot(R.WELCOME[self.lang])

    def _bot(self, text: str) -> Message:
        return Message(id=self._next_id(), text=text, is_bot=True, timestamp=now_utc())

    def _next_id(self) -> int:
        now_ms = int(time.time() * 1000)
        highest = max((m.id for m in self.messages), default=0)
        return max(now_ms, highest + 1)
