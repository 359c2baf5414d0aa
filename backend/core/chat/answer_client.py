# core/chat/answer_client.py
# -*- coding: utf-8 -*-

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from typing import Any, Dict, Optional, Tuple

from settings.logging_config import get_logger
from .models import ExchangeContext, Lang

logger = get_logger(__name__)


def http_json(
    method: str,
    url: str,
    payload: Dict[str, Any] | None = None,
    *,
    timeout: float = 10,
) -> Tuple[int, Any]:
    data = None
    headers = {"Content-Type": "application/json"}
    if payload is not None:
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    req = urllib.request.Request(url, data=data, headers=headers, method=method)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8")
            return resp.status, json.loads(raw) if raw else None
    except urllib.error.HTTPError as e:
        raw = e.read().decode("utf-8", errors="replace")
        return e.code, raw or e.reason


class RemoteAnswerClient:
    """
    远端问答服务（可选增强）：
    - 只发送当前问题 + 上一轮 + last topic
    - 任何失败（网络、超时、非 2xx、响应不是 {"answer": str}）都返回 None，由本地规则兜底
    """

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = timeout

    def ask(self, message: str, lang: Lang, context: ExchangeContext) -> Optional[str]:
        payload = {
            "message": message,
            "lang": lang,
            "context": context.to_dict(),
        }
        try:
            status, body = http_json("POST", self.url, payload, timeout=self.timeout)
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
            logger.info("answer service unavailable: %s", e)
            return None

        if status < 200 or status >= 300:
            logger.info("answer service returned status %s", status)
            return None
        answer = body.get("answer") if isinstance(body, dict) else None
        if not isinstance(answer, str) or not answer.strip():
            return None
        return answer
