# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import Any

GUEST_NAMESPACE = "guest"


def normalize_namespace(value: Any) -> str:
    """
    Normalize an identifying value into a namespace key.

    - Strings and integers are accepted; anything else (None, bool, nested objects) yields "".
    - Lowercasing is enough for equality checks; emails and usernames are stored case-folded.
    """
    if isinstance(value, bool) or value is None:
        return ""
    if not isinstance(value, (str, int)):
        return ""
    return str(value).strip().lower()


# 常见拼写错误（答疑服务在匹配前做一次轻量纠正）
_TYPO_REPLACEMENTS = {
    "verfication": "verification",
    "certifcate": "certificate",
    "certficate": "certificate",
    "inovation": "innovation",
}


def normalize_input(text: str | None) -> str:
    out = (text or "").strip().lower()
    for wrong, right in _TYPO_REPLACEMENTS.items():
        out = out.replace(wrong, right)
    return out
