# core/llm/model_registry.py
# -*- coding: utf-8 -*-

from typing import Any, Dict

from .providers.openai import OpenAILLMProvider

# 按 intent 的默认生成参数；聊天组件的答案要短
INTENT_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "support_chat": {"temperature": 0.2, "max_tokens": 300},
}


class ModelRegistry:
    """
    按 intent 选择 provider 与默认参数。
    目前只有 OpenAI 兼容协议一种 provider，provider 实例按 settings 复用。
    """

    def __init__(self) -> None:
        self._providers: Dict[int, OpenAILLMProvider] = {}

    def get_provider(self, *, settings, intent: str | None = None) -> OpenAILLMProvider:
        key = id(settings)
        provider = self._providers.get(key)
        if provider is None:
            provider = OpenAILLMProvider(settings)
            self._providers[key] = provider
        return provider

    @staticmethod
    def defaults_for(intent: str | None) -> Dict[str, Any]:
        return dict(INTENT_DEFAULTS.get(intent or "", {}))
