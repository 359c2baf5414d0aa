# -*- coding: utf-8 -*-

from core.llm.llm_client import LLMClient
from core.llm.model_registry import ModelRegistry


class FakeProvider:
    def __init__(self):
        self.calls = []

    def chat(self, *, messages, **kwargs):
        self.calls.append((messages, kwargs))
        return {"content": "ok", "provider": "fake"}


class FakeRegistry(ModelRegistry):
    def __init__(self, provider):
        super().__init__()
        self.provider = provider

    def get_provider(self, *, settings, intent=None):
        return self.provider


def test_intent_defaults_are_applied_and_overridable(settings):
    provider = FakeProvider()
    client = LLMClient(settings, registry=FakeRegistry(provider))

    client.chat([{"role": "user", "content": "hi"}], intent="support_chat")
    client.chat([{"role": "user", "content": "hi"}], intent="support_chat", max_tokens=50)
    client.chat([{"role": "user", "content": "hi"}])

    assert provider.calls[0][1] == {"temperature": 0.2, "max_tokens": 300}
    assert provider.calls[1][1]["max_tokens"] == 50
    assert provider.calls[2][1] == {}


def test_defaults_for_unknown_intent():
    assert ModelRegistry.defaults_for(None) == {}
    assert ModelRegistry.defaults_for("support_chat") is not ModelRegistry.defaults_for("support_chat")
