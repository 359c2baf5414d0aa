# core/answer/answer_service.py
# -*- coding: utf-8 -*-

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Pattern, Tuple

from common.normalize import normalize_input
from core.chat import responses as R
from core.chat.intent_router import TOXIC_RE
from core.llm.llm_client import LLMClient
from settings.config import Settings
from settings.logging_config import get_logger
from .faq import FAQ, FRIENDLY_WELCOME

logger = get_logger(__name__)

_ETHIOPIC_RE = re.compile(r"[\u1200-\u137F]")
_OROMO_HINTS_RE = re.compile(r"(akkam|maal|galatoomi|baga|nagaan|eessa|barbaada|tartiiba|akka|ragaa)", re.I)

_GREETING_RE = re.compile(r"\b(hi|hello|hey|selam|good morning|good afternoon|good evening)\b", re.I)

# (pattern, {lang: answer})；None 表示回本地化欢迎语
_SMALL_TALK: List[Tuple[Pattern[str], Optional[Dict[str, str]]]] = [
    (re.compile(r"(thank\s*you|thanks|tnx|thx|much\s+appreciated)", re.I), {
        "en": "You're welcome! If you need anything else, just ask.",
        "am": "እንኳን ደህና መጣችሁ! ተጨማሪ እርዳታ ከፈለጉ ይጠይቁ።",
        "om": "Kama nagaan! Yoo waa biraa barbaaddan na gaafadhaa.",
    }),
    (re.compile(r"\b(bye|goodbye|see\s+you|cya|later)\b", re.I), {
        "en": "Goodbye! Have a great day.",
        "am": "ደህና ሁኑ! መልካም ቀን ይሁን።",
        "om": "Nagaatti! Guyyaa gaarii qabaadhaa.",
    }),
    (re.compile(r"(how\s+are\s+you|how\s+is\s+it\s+going|\bsup\b|what's\s+up)", re.I), {
        "en": "I'm doing great and ready to help! How can I assist you today?",
        "am": "ደህና ነኝ፣ ለመርዳት ዝግጁ ነኝ። ዛሬ እንዴት ልርዳዎት?",
        "om": "Gaarii nan jira; isiniif qophaa’ee jira! Har’a maal isin gargaara?",
    }),
    (re.compile(r"(who\s+are\s+you|what\s+are\s+you|are\s+you\s+a\s+bot)", re.I), {
        "en": "I'm the MinT Innovation Portal assistant, here to help with projects, verification, requests, and events.",
        "am": "እኔ የMinT ኢኖቬሽን ፖርታል አገልጋይ ነኝ፤ በፕሮጀክቶች፣ ማረጋገጫ፣ መጠየቂያዎችና ክስተቶች ላይ እርዳታ እሰጣለሁ።",
        "om": "Ani gargaaraa MinT Innovation Portal; projjektoota, mirkaneessa, kadhatoowwan fi taateewwan irratti isin deeggara.",
    }),
    (re.compile(r"(help|what\s+can\s+you\s+do|how\s+to\s+use)", re.I), None),
    (re.compile(r"^(ok|okay|k|sure|alright|cool|nice|great)[.!\s]*$", re.I), {
        "en": "Got it. Anything else I can help you with?",
        "am": "ተቀብዬ አለኝ። ሌላ እንዲረዳዎ አለ?",
        "om": "Na gahu. Waan biraa isin gargaaruu danda’aa?",
    }),
]

_LANG_NAMES = {"en": "English", "am": "Amharic", "om": "Afan Oromo"}


def detect_lang(text: str, hint: Optional[str] = None) -> str:
    h = (hint or "").strip().lower()
    if h in R.WELCOME:
        return h
    if _ETHIOPIC_RE.search(text or ""):
        return "am"
    if _OROMO_HINTS_RE.search(text or ""):
        return "om"
    return "en"


def is_greeting(text: str) -> bool:
    return bool(_GREETING_RE.search(text or ""))


def small_talk(text: str, lang: str) -> Optional[str]:
    s = (text or "").strip().lower()
    if not s:
        return None
    if is_greeting(s):
        return FRIENDLY_WELCOME[lang]
    for pattern, replies in _SMALL_TALK:
        if pattern.search(s):
            return FRIENDLY_WELCOME[lang] if replies is None else replies[lang]
    return None


def match_faq(text: str, lang: str) -> Optional[str]:
    for patterns, answer in FAQ[lang]:
        if any(p.search(text) for p in patterns):
            return answer
    return None


class AnswerService:
    """
    远端问答服务（聊天组件的可选增强）：
      语言识别 → 拼写纠正 → 安全过滤 → 寒暄 → 多语言 FAQ → （可选）LLM → 简短兜底
    """

    def __init__(self, settings: Optional[Settings] = None, llm: Optional[LLMClient] = None) -> None:
        self.settings = settings or Settings()
        self.llm = llm

    def answer(self, message: str, lang_hint: Optional[str] = None, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        lang = detect_lang(message, lang_hint)
        user_msg = normalize_input(message)

        if TOXIC_RE.search(user_msg):
            return self._result(R.SAFETY[lang], "safety", lang)

        small = small_talk(user_msg, lang)
        if small:
            return self._result(small, "small-talk", lang)

        faq = match_faq(user_msg, lang)
        if faq:
            return self._result(faq, "faq-local", lang, sources=[{"id": "local-faq"}])

        if self._llm_enabled():
            text = self._ask_llm(message, lang, context or {})
            if text:
                return self._result(text, "llm", lang)

        return self._result(R.FALLBACK[lang], "fallback", lang)

    # ------------------------------------------------------------------
    # LLM（可选）
    # ------------------------------------------------------------------
    def _llm_enabled(self) -> bool:
        return bool(self.llm is not None and self.settings.answer_use_llm)

    def _ask_llm(self, message: str, lang: str, context: Dict[str, Any]) -> Optional[str]:
        hints: List[str] = []
        for label, key in (("Last topic", "lastTopic"), ("Previous user turn", "prevUser"), ("Previous assistant turn", "prevBot")):
            value = str(context.get(key) or "").strip()
            if value:
                hints.append(f"{label}: {value}")

        system = (
            "You are the MinT Innovation Portal assistant. "
            f"Answer concisely in {_LANG_NAMES[lang]} with accurate portal guidance "
            "about verification, projects, funding, and events."
        )
        user = "\n".join(hints + [f"User question: {message}"])
        try:
            resp = self.llm.chat(
                [{"role": "system", "content": system}, {"role": "user", "content": user}],
                intent="support_chat",
            )
        except Exception as e:
            logger.warning("llm answer failed, falling back: %s", e)
            return None
        content = resp.get("content") if isinstance(resp, dict) else None
        return content.strip() if isinstance(content, str) and content.strip() else None

    @staticmethod
    def _result(answer: str, model_used: str, lang: str, sources: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        return {
            "answer": answer,
            "sources": sources or [],
            "modelUsed": model_used,
            "lang": lang,
        }
