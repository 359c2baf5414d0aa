# -*- coding: utf-8 -*-

import json

import pytest

from core.chat.factory import create_chat_session, create_identity_manager
from core.chat.transcript_store import TranscriptStore
from datasource.base import Datasource
from settings.config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(
        sqlite_path=str(tmp_path / "chat.sqlite3"),
        chat_answer_url="",
        answer_use_llm=False,
    )


@pytest.fixture
def ds(settings):
    datasource = Datasource(settings)
    yield datasource
    datasource.close()


@pytest.fixture
def transcripts(ds):
    return TranscriptStore(ds.kv)


@pytest.fixture
def identity_manager(ds):
    return create_identity_manager(ds)


@pytest.fixture
def new_session(ds):
    """每次调用相当于打开一个新的 tab（共享同一个 Datasource）"""
    sessions = []

    def _make(**kwargs):
        session = create_chat_session(ds, **kwargs)
        sessions.append(session)
        return session

    yield _make
    for s in sessions:
        s.dispose()


@pytest.fixture
def put_raw(ds):
    def _put(key, value):
        ds.kv.set(key, value if isinstance(value, str) else json.dumps(value))

    return _put


def user_msg(text, ts, msg_id=None):
    return {"id": msg_id or ts, "text": text, "isBot": False, "timestamp": ts}


def bot_msg(text, ts, msg_id=None):
    return {"id": msg_id or ts, "text": text, "isBot": True, "timestamp": ts}
