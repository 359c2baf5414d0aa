# core/chat/ranker.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import Iterable, List, Optional, Set, Tuple

from common.normalize import GUEST_NAMESPACE
from settings.logging_config import get_logger
from .models import Candidate, Message
from .normalizer import has_real_history, last_activity_ms, normalize, unwrap_transcript
from .transcript_store import (
    LEGACY_MESSAGES_KEY,
    MESSAGES_KEY,
    TranscriptStore,
    namespace_from_key,
    namespaced_key,
)

logger = get_logger(__name__)

# 分档：档位优先，同档内再比最近活跃时间
TIER_CURRENT = 4000
TIER_IDENTITY_FIELD = 3000
TIER_OTHER = 2000
TIER_LEGACY = 1000

Score = Tuple[int, int]


def is_eligible(namespace: Optional[str], current_namespace: str, identity_fields: Set[str]) -> bool:
    """
    guest 会话：只看旧 key（无 namespace）和 guest。
    登录会话：只看当前 namespace 或本人身份标识对应的 namespace；
    guest 与其它账号的记录一律排除，避免串号。
    """
    if current_namespace == GUEST_NAMESPACE:
        return namespace is None or namespace == GUEST_NAMESPACE
    if namespace is None or namespace == GUEST_NAMESPACE:
        return False
    return namespace == current_namespace or namespace in identity_fields


def score(candidate: Candidate, current_namespace: str, identity_fields: Set[str]) -> Score:
    ns = candidate.namespace
    if ns == current_namespace:
        tier = TIER_CURRENT
    elif ns and ns != GUEST_NAMESPACE and ns in identity_fields:
        tier = TIER_IDENTITY_FIELD
    elif ns and ns != GUEST_NAMESPACE:
        tier = TIER_OTHER
    else:
        tier = TIER_LEGACY
    return tier, candidate.last_activity_at


class CandidateRanker:
    """
    身份变化后找回“最可能属于当前用户”的历史对话：
      1) 枚举候选 namespace 对应的全部 key + 旧版未分 namespace 的 key
      2) 读取并归一化；没有用户消息的记录（只有欢迎语）不算历史
      3) 按 guest / 登录 两种会话过滤可用候选
      4) 分档打分，档位压过时间
      5) 取最高分；同分按 key 排序保证确定性
      6) 胜出者不在当前 key 时复制过去（read-repair，不删源）
    """

    def __init__(self, store: TranscriptStore):
        self.store = store

    @staticmethod
    def history_keys(candidate_namespaces: Iterable[str]) -> List[str]:
        keys = sorted({namespaced_key(MESSAGES_KEY, ns) for ns in candidate_namespaces if ns})
        keys.append(LEGACY_MESSAGES_KEY)
        return keys

    def collect(
        self,
        candidate_namespaces: Iterable[str],
        current_namespace: str,
        identity_fields: Set[str],
    ) -> List[Candidate]:
        out: List[Candidate] = []
        for key in self.history_keys(candidate_namespaces):
            ns = namespace_from_key(key)
            if not is_eligible(ns, current_namespace, identity_fields):
                continue
            raw = unwrap_transcript(self.store.read_raw(key))
            messages = normalize(raw)
            if not has_real_history(messages):
                continue
            out.append(
                Candidate(
                    key=key,
                    namespace=ns,
                    messages=messages,
                    last_activity_at=last_activity_ms(raw),
                )
            )
        return out

    def best(
        self,
        candidate_namespaces: Iterable[str],
        current_namespace: str,
        identity_fields: Iterable[str],
    ) -> Optional[Candidate]:
        fields = {f for f in identity_fields if f}
        candidates = self.collect(candidate_namespaces, current_namespace, fields)
        if not candidates:
            return None
        candidates.sort(key=lambda c: c.key)
        return max(candidates, key=lambda c: score(c, current_namespace, fields))

    def has_eligible_history(
        self,
        candidate_namespaces: Iterable[str],
        current_namespace: str,
        identity_fields: Iterable[str],
    ) -> bool:
        return self.best(candidate_namespaces, current_namespace, identity_fields) is not None

    def select_best_history(
        self,
        candidate_namespaces: Iterable[str],
        current_namespace: str,
        identity_fields: Iterable[str],
    ) -> Optional[List[Message]]:
        winner = self.best(candidate_namespaces, current_namespace, identity_fields)
        if winner is None:
            return None

        canonical = namespaced_key(MESSAGES_KEY, current_namespace)
        if winner.key != canonical:
            logger.info("read-repair chat history %s -> %s", winner.key, canonical)
            self.store.write_messages(current_namespace, winner.messages)
        return winner.messages
