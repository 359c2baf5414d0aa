# api/deps.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from settings.config import Settings

from core.answer.answer_service import AnswerService
from core.llm.llm_client import LLMClient


# -------------------------------------------------
# Settings
# -------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# -------------------------------------------------
# Core clients
# -------------------------------------------------
@lru_cache(maxsize=1)
def get_llm_client() -> Optional[LLMClient]:
    """未开启 ANSWER_USE_LLM 或缺少 key 时不创建，问答服务只走本地规则"""
    settings = get_settings()
    if not (settings.answer_use_llm and settings.openai_api_key and settings.openai_model):
        return None
    return LLMClient(settings)


@lru_cache(maxsize=1)
def get_answer_service() -> AnswerService:
    return AnswerService(settings=get_settings(), llm=get_llm_client())
