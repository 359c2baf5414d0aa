# -*- coding: utf-8 -*-

import pytest
from fastapi.testclient import TestClient

from api.deps import get_answer_service
from api.main import create_app
from core.answer.answer_service import AnswerService
from core.answer.faq import FRIENDLY_WELCOME


@pytest.fixture
def client(settings):
    app = create_app()
    app.dependency_overrides[get_answer_service] = lambda: AnswerService(settings=settings)
    with TestClient(app) as c:
        yield c


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


@pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "   "}])
def test_empty_message_is_rejected(client, body):
    resp = client.post("/chat", json=body)
    assert resp.status_code == 400


def test_chat_greeting(client):
    resp = client.post("/chat", json={"message": "hello", "lang": "en"})
    assert resp.status_code == 200
    assert resp.json() == {
        "answer": FRIENDLY_WELCOME["en"],
        "sources": [],
        "modelUsed": "small-talk",
        "lang": "en",
    }


def test_chat_accepts_widget_context(client):
    resp = client.post(
        "/chat",
        json={
            "message": "how to register",
            "lang": "en",
            "context": {"lastTopic": "login", "prevUser": "login", "prevBot": "Go to /login", "isFollowUp": False},
        },
    )
    body = resp.json()
    assert resp.status_code == 200
    assert body["modelUsed"] == "faq-local"
    assert "/register" in body["answer"]


def test_unexpected_error_is_500(settings):
    class Broken:
        def answer(self, *args, **kwargs):
            raise RuntimeError("db gone")

    app = create_app()
    app.dependency_overrides[get_answer_service] = lambda: Broken()
    with TestClient(app) as c:
        resp = c.post("/chat", json={"message": "anything"})
    assert resp.status_code == 500
    assert resp.json()["detail"] == "db gone"
