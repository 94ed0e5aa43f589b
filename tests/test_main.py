"""HTTP surface tests with the chain and completion collaborators faked."""

import pytest
from fastapi.testclient import TestClient

import main
from chat import ChatSession
from models import ChatMessage
from tests.conftest import ETH, WALLET
from wallet_analyzer import RecommendationOrchestrator


@pytest.fixture
def client(monkeypatch, chain_factory, completion_factory):
    monkeypatch.delenv("AI_PROVIDER", raising=False)
    completion = completion_factory(ChatMessage(role="assistant", content="- Rotate addresses"))
    chain = chain_factory(native=2 * ETH)

    def build_session(cfg):
        return RecommendationOrchestrator(chain, completion), ChatSession(completion)

    monkeypatch.setattr(main, "build_session", build_session)
    with TestClient(main.app) as test_client:
        yield test_client


def test_health(client) -> None:
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "version": main.VERSION}


def test_connect_runs_analysis(client) -> None:
    resp = client.post("/connect", json={"address": WALLET})

    assert resp.status_code == 200
    body = resp.json()
    assert body["connection_status"] == "ready"
    assert body["balances"][0]["amount"] == "2.0"
    assert body["heuristic_tips"][0]["source"] == "heuristic"
    assert [t["text"] for t in body["ai_tips"]] == ["🤖 Rotate addresses"]

    assert client.get("/state").json() == body


def test_connect_invalid_address(client) -> None:
    resp = client.post("/connect", json={"address": "nope"})

    assert resp.status_code == 422


def test_disconnect(client) -> None:
    client.post("/connect", json={"address": WALLET})

    resp = client.post("/disconnect")

    assert resp.json()["connection_status"] == "disconnected"
    assert resp.json()["balances"] == []


def test_chat_round_trip(client) -> None:
    resp = client.post("/chat", json={"message": "hello"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["loading"] is False
    assert [m["role"] for m in body["transcript"]] == ["assistant", "user", "assistant"]
    assert body["transcript"][1]["content"] == "hello"

    reset = client.post("/chat/reset").json()
    assert len(reset["transcript"]) == 1
    assert client.get("/chat").json() == reset
