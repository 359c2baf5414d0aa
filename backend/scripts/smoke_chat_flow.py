#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import argparse
import json
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.chat.answer_client import http_json  # noqa: E402
from core.chat.factory import create_chat_session, create_identity_manager  # noqa: E402
from datasource.base import Datasource  # noqa: E402
from settings.config import Settings  # noqa: E402


def check_health(api_base: str, timeout: float) -> Dict[str, Any]:
    status, body = http_json("GET", f"{api_base}/health", timeout=timeout)
    if status >= 400:
        raise RuntimeError(f"/health failed: {status} {body}")
    return body or {}


def ask_service(api_base: str, message: str, lang: str, timeout: float) -> Dict[str, Any]:
    status, body = http_json("POST", f"{api_base}/chat", {"message": message, "lang": lang}, timeout=timeout)
    if status >= 400:
        raise RuntimeError(f"/chat failed: {status} {body}")
    return body or {}


def dump(label: str, messages: List[Any]) -> None:
    print(f"-- {label}")
    for m in messages:
        who = "bot " if m.is_bot else "user"
        print(f"   [{who}] {m.text}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat widget smoke flow (guest → login → logout)")
    parser.add_argument("--api-base", default="", help="answer service base url, e.g. http://127.0.0.1:8000")
    parser.add_argument("--db", default="", help="sqlite path (default: a temp file)")
    parser.add_argument("--timeout", type=float, default=10.0)
    parser.add_argument("--user-id", default="u1")
    parser.add_argument("--email", default="a@x.com")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    api_base = args.api_base.rstrip("/")
    db_path = args.db or str(Path(tempfile.mkdtemp()) / "chat.sqlite3")

    print("== Chat Widget Smoke Test ==")
    print(f"DB: {db_path}")
    print(f"Answer service: {api_base or '(local rules only)'}")

    if api_base:
        print("\n[0/4] Answer service health")
        print(json.dumps(check_health(api_base, args.timeout), ensure_ascii=False))
        print(json.dumps(ask_service(api_base, "how to verify", "en", args.timeout), ensure_ascii=False, indent=2))

    settings = Settings(
        sqlite_path=db_path,
        chat_answer_url=f"{api_base}/chat" if api_base else "",
        chat_answer_timeout=args.timeout,
    )
    ds = Datasource(settings)
    try:
        identity = create_identity_manager(ds)
        tab = create_chat_session(ds)

        print("\n[1/4] Guest conversation")
        tab.open()
        tab.send("hi")
        tab.send("how to verify")
        dump(f"namespace={tab.namespace}", tab.messages)

        print("\n[2/4] Login (guest history must not follow the account)")
        identity.login({"id": args.user_id, "email": args.email}, token="smoke-token")
        print(f"namespace={tab.namespace} has_past_chat={tab.has_past_chat}")
        tab.send("office hours")
        dump(f"namespace={tab.namespace}", tab.messages)

        print("\n[3/4] Logout, then a second tab offers the guest history")
        identity.logout()
        second = create_chat_session(ds)
        print(f"namespace={second.namespace} has_past_chat={second.has_past_chat}")
        if second.load_past_chat():
            dump("loaded", second.messages)

        print("\n[4/4] Login again with a changed email (history found by stable id)")
        identity.login({"id": args.user_id, "email": f"new.{args.email}"})
        third = create_chat_session(ds)
        print(f"namespace={third.namespace} has_past_chat={third.has_past_chat}")
        if third.load_past_chat():
            dump("loaded", third.messages)

        for s in (tab, second, third):
            s.dispose()
    finally:
        ds.close()
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        raise SystemExit(1)
