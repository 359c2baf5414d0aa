# core/chat/factory.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import Optional

from datasource.base import Datasource
from identity.identity_manager import IdentityManager
from .answer_client import RemoteAnswerClient
from .chat_session import ChatSession
from .intent_router import IntentRouter
from .ranker import CandidateRanker
from .synchronizer import CrossTabSynchronizer
from .transcript_store import TranscriptStore


def create_identity_manager(ds: Datasource) -> IdentityManager:
    return IdentityManager(
        store=ds.identity_session,
        bus=ds.bus,
        transcripts=TranscriptStore(ds.kv),
    )


def create_chat_session(
    ds: Datasource,
    *,
    answer_client: Optional[RemoteAnswerClient] = None,
) -> ChatSession:
    """
    组装一个聊天组件实例（相当于一个 tab）。
    answer_client 未显式传入时按 settings.chat_answer_url 决定是否启用远端问答。
    """
    settings = ds.settings
    transcripts = TranscriptStore(ds.kv)
    identity_manager = create_identity_manager(ds)
    ranker = CandidateRanker(transcripts)
    synchronizer = CrossTabSynchronizer(identity_manager, ranker, bus=ds.bus).attach()

    if answer_client is None and settings.chat_answer_url:
        answer_client = RemoteAnswerClient(settings.chat_answer_url, timeout=settings.chat_answer_timeout)

    return ChatSession(
        identity_manager=identity_manager,
        transcripts=transcripts,
        ranker=ranker,
        synchronizer=synchronizer,
        router=IntentRouter(max_chars=settings.chat_answer_max_chars),
        answer_client=answer_client,
        last_topic_max=settings.chat_last_topic_max,
    )
