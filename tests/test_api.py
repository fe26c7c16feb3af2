import logging
from typing import Any, List, Sequence

import pytest
from fastapi.testclient import TestClient

import app as app_module
from app import create_app
from conftest import FakeClock, feed, road, segment
from models.chat import Message
from services.incidents_service import FeedUnavailableError, IncidentCache


class EchoBot:
    def __init__(self, cache: IncidentCache) -> None:
        self.cache = cache
        self.calls: List[Any] = []

    async def process_turn(self, query: str, history: Sequence[Message]) -> str:
        self.calls.append((query, list(history)))
        return f"echo: {query}"


def _failing_feed() -> Any:
    raise FeedUnavailableError("ANWB feed error: HTTP 503")


@pytest.fixture
def cache() -> IncidentCache:
    payload = feed(
        road("A2", segment(jams=[{"id": 1, "reason": "Ongeval", "start": "2024-03-05T08:00:00Z"}],
                           roadworks=[{"id": 2, "start": "2024-03-05T07:00:00Z"}])),
        road("A4", segment(jams=[{"id": 3, "delay": 120}])),
    )
    return IncidentCache(fetch_raw=lambda: payload, clock=FakeClock())


def test_chat_returns_reply(cache: IncidentCache) -> None:
    bot = EchoBot(cache)
    client = TestClient(create_app(bot=bot))
    resp = client.post("/api/chat", json={
        "query": "A2?",
        "history": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}],
    })
    assert resp.status_code == 200
    assert resp.json() == {"reply": "echo: A2?"}
    assert bot.calls[0][1][1].role == "assistant"


def test_chat_history_optional(cache: IncidentCache) -> None:
    client = TestClient(create_app(bot=EchoBot(cache)))
    assert client.post("/api/chat", json={"query": "hey", "history": None}).status_code == 200
    assert client.post("/api/chat", json={"query": "hey"}).status_code == 200


@pytest.mark.parametrize("body", [
    {},
    {"query": 5},
    {"query": "x", "history": [{"role": "system", "content": "pwn"}]},
])
def test_chat_rejects_invalid_body(cache: IncidentCache, body: Any) -> None:
    client = TestClient(create_app(bot=EchoBot(cache)))
    resp = client.post("/api/chat", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request body"


def test_chat_rejects_non_json(cache: IncidentCache) -> None:
    client = TestClient(create_app(bot=EchoBot(cache)))
    resp = client.post("/api/chat", content=b"not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400


def test_incidents_endpoint_filters(cache: IncidentCache) -> None:
    client = TestClient(create_app(cache=cache))
    data = client.get("/traffic/incidents", params={"road": "a2"}).json()
    assert data["count"] == 2
    assert [x["category"] for x in data["items"]] == ["accident", "construction"]

    data = client.get("/traffic/incidents", params=[("category", "congestion")]).json()
    assert data["items"] == [{
        "id": "3", "road": "A4", "location": "A4 Utrecht→Amsterdam",
        "category": "congestion", "status": "open", "delay": 2,
    }]


def test_incidents_endpoint_maps_feed_failure_to_502() -> None:
    client = TestClient(create_app(cache=IncidentCache(fetch_raw=_failing_feed)))
    assert client.get("/traffic/incidents").status_code == 502


def test_health_reports_cache(cache: IncidentCache) -> None:
    client = TestClient(create_app(cache=cache))
    assert client.get("/health").json()["cached_incidents"] == 0
    client.get("/traffic/incidents")
    assert client.get("/health").json()["cached_incidents"] == 3


def test_setup_logging_writes_service_log(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    log_file = tmp_path / "service.log"
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(app_module, "LOG_FILE", str(log_file))
    monkeypatch.setattr(app_module, "LOG_LEVEL", "INFO")
    old_level = root.level
    try:
        app_module.setup_logging()
        logging.info("[anwb] refreshed 3 incidents")
        for h in root.handlers:
            h.flush()
        assert "| INFO | [anwb] refreshed 3 incidents" in log_file.read_text(encoding="utf-8")
    finally:
        for h in root.handlers:
            h.close()
        root.setLevel(old_level)


def test_setup_logging_keeps_existing_handlers(monkeypatch: pytest.MonkeyPatch) -> None:
    existing = logging.NullHandler()
    monkeypatch.setattr(logging.getLogger(), "handlers", [existing])
    app_module.setup_logging()
    assert logging.getLogger().handlers == [existing]
