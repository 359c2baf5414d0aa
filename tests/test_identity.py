# -*- coding: utf-8 -*-

import json

from common.signals import IDENTITY_CHANGED
from core.chat.normalizer import normalize
from datasource.sqlstores.identity_session_store import CANDIDATES_KEY, LAST_AUTH_CHANGE_KEY
from identity.identity_manager import IdentityManager
from identity.models import Identity

from conftest import user_msg


def test_namespace_priority():
    assert Identity.from_record({"_id": "ABC", "id": "u1", "email": "A@X.com"}).namespace == "abc"
    assert Identity.from_record({"id": "u1", "email": "a@x.com"}).namespace == "u1"
    assert Identity.from_record({"email": "A@X.com", "username": "al"}).namespace == "a@x.com"
    assert Identity.from_record({"username": "Al"}).namespace == "al"
    assert Identity.from_record({"name": "no identifiers"}).namespace == "guest"


def test_non_object_record_means_guest():
    assert Identity.from_record(None) is None
    assert Identity.from_record(["u1"]) is None
    assert IdentityManager.current_namespace(None) == "guest"


def test_unusable_field_types_are_skipped():
    identity = Identity.from_record({"_id": True, "id": 42, "email": {"x": 1}, "username": "  Bob "})
    assert identity.identifying_fields() == ["42", "bob"]
    assert identity.namespace == "42"


def test_malformed_user_record_reads_as_guest(ds, identity_manager):
    ds.kv.set("user", "{broken")
    assert identity_manager.current_identity() is None


def test_candidates_union_and_persist(identity_manager, ds):
    identity = Identity.from_record({"id": "u1", "email": "a@x.com"})
    out = identity_manager.candidate_namespaces(identity)
    assert out == {"u1", "a@x.com"}
    assert json.loads(ds.kv.get(CANDIDATES_KEY)) == ["u1", "a@x.com"]


def test_candidates_are_append_only(identity_manager, ds):
    identity_manager.login({"id": "u1", "email": "a@x.com"})
    identity_manager.update_profile({"id": "u1", "email": "b@x.com"})
    identity_manager.logout()

    assert ds.identity_session.get_candidates() == ["u1", "a@x.com", "b@x.com"]
    assert identity_manager.current_identity() is None
    assert identity_manager.candidate_namespaces(None) == {"guest", "u1", "a@x.com", "b@x.com"}


def test_corrupt_candidates_are_treated_as_empty(identity_manager, ds):
    ds.kv.set(CANDIDATES_KEY, "not json")
    assert identity_manager.candidate_namespaces(None) == {"guest"}


def test_login_announces_change(identity_manager, ds):
    events = []
    ds.bus.subscribe(IDENTITY_CHANGED, lambda: events.append("changed"))
    identity = identity_manager.login({"_id": "X1"}, token="t0k")

    assert identity.namespace == "x1"
    assert events == ["changed"]
    assert ds.identity_session.get_token() == "t0k"
    assert ds.kv.get(LAST_AUTH_CHANGE_KEY)


def test_delete_account_clears_chat_but_keeps_candidates(identity_manager, transcripts, ds):
    identity_manager.login({"id": "u1"})
    transcripts.write_messages("u1", normalize([user_msg("hi", 1_700_000_000_000)]))
    transcripts.write_lang("u1", "am")

    identity_manager.delete_account()

    assert transcripts.read_messages("u1") == []
    assert transcripts.read_lang("u1") == "en"
    assert ds.identity_session.get_user() is None
    assert ds.identity_session.get_token() is None
    assert "u1" in ds.identity_session.get_candidates()
