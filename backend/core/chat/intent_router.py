# core/chat/intent_router.py
# -*- coding: utf-8 -*-

from __future__ import annotations

import re
from typing import List, Optional, TYPE_CHECKING

from .models import ExchangeContext, Lang, Message
from . import responses as R

if TYPE_CHECKING:
    from .answer_client import RemoteAnswerClient

TOXIC_RE = re.compile(r"(stupid|idiot|selfish|shut up|trash|useless|f\*?ck|bitch|dumb|nonsense|get lost)", re.I)
GREETING_RE = re.compile(r"(?:^|\b)(hello|hi|hey)(?:\b|!|\.|\?|,)", re.I)
CONTACT_RE = re.compile(
    r"(someone|staff|person|employee|inside|office).*\b(contact|phone|number|email|whatsapp)"
    r"|\b(give me (his|her) contact)",
    re.I,
)
FEELINGS_RE = re.compile(
    r"(have|got|with) (feelings|emotion|emotions|feel)|do you (feel|have feelings)|are you (human|a person)",
    re.I,
)
HELP_RE = re.compile(r"(help|guide|support|assist)", re.I)
VERIFY_RE = re.compile(r"(\bverify\b|verification|get\s*verified|apply\s*now)", re.I)
ENGLISH_ONLY_RE = re.compile(r"only\s+supports\s+english", re.I)
FOLLOW_UP_RE = re.compile(r"^(next|continue|what about|and|more|that|it|them|those|this)\b", re.I)

# 长篇 markdown / 上游报错痕迹
NOISE_RE = re.compile(r"Quick Overview|# |## |\* |- |APICallError|Connect Timeout|UND_ERR_CONNECT_TIMEOUT", re.I)

_URL_RE = re.compile(r"https?://\S+")
_BRACKET_RE = re.compile(r"\s*\[[^\]]*\]\s*")
_PAREN_RE = re.compile(r"\s*\([^)]*\)\s*")
_SPACES_RE = re.compile(r"\s{2,}")


def clean_text(text: str) -> str:
    """去掉裸链接、[标签]、(括号旁白)，并压缩空白"""
    if not text:
        return ""
    out = _URL_RE.sub(" ", text)
    out = _BRACKET_RE.sub(" ", out)
    out = _PAREN_RE.sub(" ", out)
    out = _SPACES_RE.sub(" ", out)
    return out.strip()


def is_greeting(text: str) -> bool:
    return bool(GREETING_RE.search(text or ""))


def is_follow_up(text: str) -> bool:
    return bool(FOLLOW_UP_RE.match((text or "").strip()))


def build_context(messages: List[Message], last_topic: str, user_text: str) -> ExchangeContext:
    """只取上一条用户消息、上一条机器人消息和 last topic，不带完整记录"""
    prev_user = next((m.text for m in reversed(messages) if not m.is_bot), "")
    prev_bot = next((m.text for m in reversed(messages) if m.is_bot), "")
    return ExchangeContext(
        last_topic=last_topic,
        prev_user=prev_user,
        prev_bot=prev_bot,
        is_follow_up=is_follow_up(user_text),
    )


class IntentRouter:
    """
    规则按顺序匹配，先中先得：
      安全过滤 → 关键词表 → 问候 → 索要员工联系方式 → 问“你是人吗/有感情吗” → 求助 → 兜底
    所有输出（包括远端答案）都经过 sanitize 再展示。
    """

    def __init__(self, max_chars: int = 450):
        self.max_chars = max_chars

    # ------------------------------------------------------------------
    # 本地规则
    # ------------------------------------------------------------------
    def local_answer(self, user_text: str, lang: Lang) -> str:
        lowered = (user_text or "").lower()

        if TOXIC_RE.search(lowered):
            return R.SAFETY[lang]

        for keyword, answer in R.KEYWORD_ANSWERS:
            if keyword in lowered:
                return answer

        if GREETING_RE.search(user_text or ""):
            return R.GREETING[lang]
        if CONTACT_RE.search(user_text or ""):
            return R.CONTACT_REFUSAL[lang]
        if FEELINGS_RE.search(user_text or ""):
            return R.NOT_HUMAN[lang]
        if HELP_RE.search(lowered):
            return R.HELP_MENU[lang]
        return R.FALLBACK[lang]

    def route(self, user_text: str, lang: Lang) -> str:
        return self.sanitize(self.local_answer(user_text, lang), lang)

    # ------------------------------------------------------------------
    # 后处理
    # ------------------------------------------------------------------
    def sanitize(self, text: str, lang: Lang) -> str:
        cleaned = clean_text(text)
        if not cleaned or len(cleaned) > self.max_chars or NOISE_RE.search(cleaned):
            return R.CLARIFY[lang]
        return cleaned

    def apply_overrides(self, user_text: str, remote_answer: Optional[str], lang: Lang) -> str:
        """远端答案回来之后，安全 / 问候 / 认证流程 这几条本地规则仍然优先"""
        if TOXIC_RE.search(user_text or ""):
            return self.sanitize(R.SAFETY[lang], lang)

        answer = remote_answer or self.local_answer(user_text, lang)
        if is_greeting(user_text):
            answer = R.GREETING[lang]
        if VERIFY_RE.search(user_text or ""):
            answer = R.VERIFICATION_STEPS
        if ENGLISH_ONLY_RE.search(answer):
            answer = R.MULTILINGUAL_NOTE
        return self.sanitize(answer, lang)

    # ------------------------------------------------------------------
    # 对外入口
    # ------------------------------------------------------------------
    def respond(
        self,
        user_text: str,
        lang: Lang,
        context: Optional[ExchangeContext] = None,
        client: Optional["RemoteAnswerClient"] = None,
    ) -> str:
        if client is None:
            return self.route(user_text, lang)
        remote = client.ask(user_text, lang, context or ExchangeContext())
        if remote is None:
            return self.route(user_text, lang)
        return self.apply_overrides(user_text, remote, lang)
