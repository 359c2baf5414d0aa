# core/llm/providers/openai.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from openai import OpenAI


class OpenAILLMProvider:
    """
    OpenAI Provider（Chat Completions，非流式）
    - 支持自定义 base_url（OPENAI_API_BASE），方便接入兼容 OpenAI 协议的网关
    - 超时沿用问答超时（CHAT_ANSWER_TIMEOUT），避免组件端一直停在占位消息
    """

    PROVIDER_NAME = "openai"

    def __init__(self, settings, temperature: float = 0.2) -> None:
        api_key = settings.openai_api_key
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY is not set")

        self.model: str = settings.openai_model
        if not self.model:
            raise RuntimeError("OPENAI_MODEL is empty")

        self.temperature: float = float(temperature)
        self.client = OpenAI(
            api_key=api_key,
            base_url=settings.openai_api_base or None,  # 为空时用官方默认
            timeout=settings.chat_answer_timeout,
            max_retries=1,
        )

    def chat(
        self,
        *,
        messages: List[Dict[str, Any]],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        final_model = (model or self.model).strip()
        final_temperature = self.temperature if temperature is None else float(temperature)

        clean_kwargs = dict(kwargs)
        clean_kwargs.pop("messages", None)
        clean_kwargs.pop("stream", None)

        resp = self.client.chat.completions.create(
            model=final_model,
            messages=messages,
            temperature=final_temperature,
            **clean_kwargs,
        )
        content, usage = self._extract_chat_content_and_usage(resp)
        return {
            "content": content,
            "model": final_model,
            "usage": usage,
            "provider": self.PROVIDER_NAME,
        }

    @staticmethod
    def _extract_chat_content_and_usage(resp: Any) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        content: Optional[str] = None
        usage: Optional[Dict[str, Any]] = None

        choices = getattr(resp, "choices", None) or []
        if choices:
            msg = getattr(choices[0], "message", None)
            content = getattr(msg, "content", None)

        u = getattr(resp, "usage", None)
        if u is not None:
            # usage 一般是 pydantic 模型
            usage = u.model_dump() if hasattr(u, "model_dump") else None

        return content, usage
