# -*- coding: utf-8 -*-

import pytest

from core.chat import responses as R
from core.chat.intent_router import IntentRouter, build_context, clean_text
from core.chat.models import ExchangeContext
from core.chat.normalizer import normalize

from conftest import bot_msg, user_msg


@pytest.fixture
def router():
    return IntentRouter(max_chars=450)


class FakeClient:
    def __init__(self, answer):
        self.answer = answer
        self.calls = []

    def ask(self, message, lang, context):
        self.calls.append((message, lang, context))
        return self.answer


@pytest.mark.parametrize(
    "text",
    ["you are stupid", "how to verify, idiot", "Shut up and tell me the website", "this is useless"],
)
@pytest.mark.parametrize("lang", ["en", "am", "om"])
def test_toxic_input_always_gets_safety_reply(router, text, lang):
    assert router.route(text, lang) == R.SAFETY[lang]
    assert router.respond(text, lang, client=FakeClient("Here is the website")) == R.SAFETY[lang]


@pytest.mark.parametrize("text", ["how to verify", "hi, how to verify", "Hello! how to verify?", "help me: how to verify"])
def test_verification_steps_fire_before_greeting_and_help(router, text):
    assert router.route(text, "en") == R.VERIFICATION_STEPS


@pytest.mark.parametrize("text", ["hi", "hello", "hey", "hi!", "Hello.", "hey?", "hi,"])
def test_greeting_wins_over_remote_answer(router, text):
    client = FakeClient("Welcome to the portal! Here is a long remote answer.")
    assert router.respond(text, "en", client=client) == R.GREETING["en"]
    assert router.route(text, "am") == R.GREETING["am"]


def test_greeting_is_not_matched_inside_words(router):
    assert router.route("this thing", "en") == R.FALLBACK["en"]


def test_verification_override_on_remote_answer(router):
    assert router.respond("verification please", "en", client=FakeClient("Something else")) == R.VERIFICATION_STEPS


def test_remote_answer_is_used_and_cleaned(router):
    remote = "Projects live on the Projects page [1] (see docs) https://example.org/p"
    assert router.respond("where are projects", "en", client=FakeClient(remote)) == "Projects live on the Projects page"


def test_unavailable_service_falls_back_to_local_rules(router):
    assert router.respond("office hours", "en", client=FakeClient(None)).startswith("Office hours")


def test_english_only_remote_reply_is_replaced(router):
    remote = "Sorry, this assistant only supports English."
    assert router.respond("selam", "am", client=FakeClient(remote)) == R.MULTILINGUAL_NOTE


@pytest.mark.parametrize(
    "remote",
    [
        "x" * 451,
        "## Quick Overview\n- step one",
        "APICallError: Connect Timeout Error",
        "   ",
    ],
)
def test_noisy_or_oversized_answers_become_clarify(router, remote):
    assert router.respond("tell me about funding", "om", client=FakeClient(remote)) == R.CLARIFY["om"]


def test_contact_feelings_help_and_fallback(router):
    refusal = router.route("can someone in the office give me their whatsapp", "en")
    assert refusal == router.sanitize(R.CONTACT_REFUSAL["en"], "en")
    assert "http" not in refusal
    assert router.route("are you human?", "en") == R.NOT_HUMAN["en"]
    assert router.route("I need some assistance", "en") == R.HELP_MENU["en"]
    assert router.route("qwerty", "om") == R.FALLBACK["om"]


def test_keyword_table_is_english(router):
    assert router.route("what are your office hours", "am").startswith("Office hours")


def test_clean_text():
    assert clean_text("See [a] here (aside)  https://x.y/z  now") == "See here now"
    assert clean_text("") == ""


def test_build_context_uses_only_last_turn():
    messages = normalize([
        bot_msg("Welcome", 1),
        user_msg("first question", 2),
        bot_msg("first answer", 3),
        user_msg("second question", 4),
        bot_msg("second answer", 5),
    ])
    ctx = build_context(messages, "second question", "more")
    assert ctx == ExchangeContext(
        last_topic="second question",
        prev_user="second question",
        prev_bot="second answer",
        is_follow_up=True,
    )
    assert ctx.to_dict()["isFollowUp"] is True
    assert build_context(messages, "", "what is mint").is_follow_up is False
