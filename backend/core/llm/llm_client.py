# core/llm/llm_client.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import Any, Dict, List, Optional

from settings.config import Settings
from .model_registry import ModelRegistry


class LLMClient:
    """
    问答服务使用的 LLM 入口：
      - chat(messages, intent=None, **kwargs) -> Dict[str, Any]

    约定返回：
      {
        "content": str | None,
        "model": str | None,
        "usage": dict | None,
        "provider": str,
      }
    """

    def __init__(self, settings: Optional[Settings] = None, registry: Optional[ModelRegistry] = None) -> None:
        self.settings = settings or Settings()
        self.registry = registry or ModelRegistry()

    def chat(
        self,
        messages: List[Dict[str, Any]],
        *,
        intent: Optional[str] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        provider = self.registry.get_provider(settings=self.settings, intent=intent)
        params = {**self.registry.defaults_for(intent), **kwargs}
        return provider.chat(messages=messages, **params)
