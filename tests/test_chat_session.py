# -*- coding: utf-8 -*-

import json
import sqlite3

import pytest

from core.chat import responses as R
from core.chat.models import ExchangeContext

from conftest import bot_msg, user_msg

T0 = 1_700_000_000_000


class FakeClient:
    def __init__(self, answer):
        self.answer = answer
        self.calls = []

    def ask(self, message, lang, context):
        self.calls.append((message, lang, context))
        return self.answer


def _user_texts(messages):
    return [m.text for m in messages if not m.is_bot]


def test_fresh_session_shows_welcome(new_session):
    session = new_session()
    assert session.namespace == "guest"
    assert session.is_fresh_welcome
    assert [m.text for m in session.display_messages] == [R.WELCOME["en"]]
    assert session.suggestions == R.SUGGESTIONS["en"]


def test_welcome_alone_is_not_persisted(new_session, transcripts):
    session = new_session()
    session.set_language("am")
    assert transcripts.read_messages("guest") == []
    assert session.messages[0].text == R.WELCOME["am"]


def test_window_state_is_persisted_per_namespace(new_session, transcripts):
    session = new_session()
    session.open()
    session.toggle_minimized()
    session.set_draft("how do I")

    aux = transcripts.read_aux("guest")
    assert (aux.is_open, aux.is_minimized, aux.draft) == (True, True, "how do I")

    session.close()
    assert transcripts.read_open("guest") is False


def test_send_uses_draft_and_local_rules(new_session, transcripts):
    session = new_session()
    session.set_draft("how to verify")

    answer = session.send()

    assert answer == R.VERIFICATION_STEPS
    assert session.draft == ""
    assert [m.text for m in session.messages[1:]] == ["how to verify", R.VERIFICATION_STEPS]
    assert transcripts.read_messages("guest") == session.messages
    assert transcripts.read_last_topic("guest") == "how to verify"


def test_blank_input_is_ignored(new_session):
    session = new_session()
    assert session.send("   ") is None
    assert session.begin_send("") is None
    assert session.is_fresh_welcome


def test_pending_placeholder_is_replaced_in_place(new_session):
    session = new_session()
    pending = session.begin_send("what about funding")

    assert session.messages[-1].id == pending.pending_id
    assert session.messages[-1].text == R.PENDING_TEXT
    assert isinstance(pending.context, ExchangeContext)

    answer = session.complete_send(pending, "Funding calls are announced on the Events page.")
    assert answer == "Funding calls are announced on the Events page."
    assert session.messages[-1].id == pending.pending_id
    assert session.messages[-1].text == answer
    assert len(session.messages) == 3


def test_message_ids_are_unique_and_increasing(new_session):
    session = new_session()
    session.send("one")
    session.send("two")
    ids = [m.id for m in session.messages]
    assert ids == sorted(set(ids))


def test_stale_answer_after_identity_change_is_discarded(new_session, identity_manager):
    session = new_session()
    pending = session.begin_send("tell me about projects")

    identity_manager.login({"id": "u1"})

    assert session.namespace == "u1"
    assert session.is_fresh_welcome
    assert session.complete_send(pending, "late answer") is None
    assert all(m.text != "late answer" for m in session.messages)


def test_remote_client_gets_shallow_context(new_session):
    client = FakeClient("Projects are listed at the Projects page.")
    session = new_session(answer_client=client)
    session.send("show me projects")
    session.send("more")

    message, lang, context = client.calls[-1]
    assert (message, lang) == ("more", "en")
    assert context.prev_user == "show me projects"
    assert context.prev_bot == "Projects are listed at the Projects page."
    assert context.last_topic == "show me projects"
    assert context.is_follow_up is True


def test_greeting_overrides_remote_answer_in_session(new_session):
    session = new_session(answer_client=FakeClient("Some remote welcome text"))
    assert session.send("hey!") == R.GREETING["en"]


def test_last_topic_is_truncated(ds, new_session, transcripts):
    session = new_session()
    session.last_topic_max = 10
    session.send("a very long question about events")
    assert transcripts.read_last_topic("guest") == "a very lon"


def test_language_switch_with_history_appends_note(new_session, transcripts):
    session = new_session()
    session.send("hello")
    session.set_language("om")

    assert session.messages[-1].text == R.LANGUAGE_SWITCHED["om"]
    assert session.messages[0].text == R.WELCOME["en"]
    assert transcripts.read_lang("guest") == "om"
    assert session.suggestions == R.SUGGESTIONS["om"]


def test_unsupported_language_is_rejected(new_session):
    with pytest.raises(ValueError):
        new_session().set_language("fr")


def test_other_tab_offers_and_loads_past_chat(new_session):
    first = new_session()
    first.send("how to verify")

    second = new_session()
    assert second.has_past_chat
    assert second.display_messages == []

    assert second.load_past_chat() is True
    assert _user_texts(second.messages) == ["how to verify"]


def test_login_switches_every_tab(new_session, identity_manager):
    a, b = new_session(), new_session()
    a.open()
    identity_manager.login({"email": "A@x.com"})
    assert a.namespace == b.namespace == "a@x.com"
    assert a.is_open is True


def test_guest_transcript_is_not_offered_after_login(new_session, put_raw, identity_manager):
    put_raw("chat_messages:guest", [bot_msg("Welcome", T0), user_msg("guest question", T0 + 1)])
    session = new_session()
    assert session.has_past_chat

    identity_manager.login({"id": "u1", "email": "a@x.com"})

    assert session.namespace == "u1"
    assert not session.has_past_chat
    assert session.load_past_chat() is False
    assert [m.text for m in session.display_messages] == [R.WELCOME["en"]]


def test_namespace_change_restores_that_namespaces_topic(new_session, put_raw, identity_manager):
    put_raw("chat_lastTopic:u1", json.dumps("funding"))
    session = new_session()
    session.set_draft("unsent")
    identity_manager.login({"id": "u1"})
    assert session.last_topic == "funding"
    assert session.draft == ""


def test_send_from_fresh_welcome_keeps_stored_history(new_session, transcripts, put_raw):
    put_raw("chat_messages:guest", [bot_msg("Welcome", T0), user_msg("old question", T0 + 1)])
    session = new_session()
    assert session.is_fresh_welcome

    session.send("new question")

    assert _user_texts(session.messages) == ["old question", "new question"]
    assert _user_texts(transcripts.read_messages("guest")) == ["old question", "new question"]


def test_discarded_answer_leaves_no_placeholder_in_storage(new_session, transcripts, identity_manager):
    session = new_session()
    pending = session.begin_send("tell me about projects")
    assert R.PENDING_TEXT in [m.text for m in transcripts.read_messages("guest")]

    identity_manager.login({"id": "u1"})
    assert session.complete_send(pending, "late answer") is None

    stored = transcripts.read_messages("guest")
    assert _user_texts(stored) == ["tell me about projects"]
    assert all(m.id != pending.pending_id for m in stored)


def test_storage_failures_do_not_block_the_session(new_session, ds, monkeypatch):
    session = new_session()

    def disk_full(key, value):
        raise sqlite3.OperationalError("database or disk is full")

    monkeypatch.setattr(ds.kv, "set", disk_full)

    assert session.send("how to verify") == R.VERIFICATION_STEPS
    assert [m.text for m in session.messages[1:]] == ["how to verify", R.VERIFICATION_STEPS]
    assert session.draft == ""
