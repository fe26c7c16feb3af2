import asyncio
from typing import Any, List

import pytest

from conftest import make_incident
from prompts.all_en import (
    ANSWER_FAILED_REPLY, CHAT_EMPTY_REPLY, CHAT_FAILED_REPLY,
    NO_MATCHING_INCIDENTS, REFUSAL, ROUTE_FAILED_REPLY,
)
from services import answer_service
from services.answer_service import (
    answer_from_incidents, markdown_digest, non_traffic_reply, summarize_route,
)


class FakeAsk:
    def __init__(self, reply: Any = "ok") -> None:
        self.reply = reply
        self.calls: List[Any] = []

    async def __call__(self, msgs, **kw):
        self.calls.append((msgs, kw))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def fake_ask(monkeypatch: pytest.MonkeyPatch) -> FakeAsk:
    fake = FakeAsk()
    monkeypatch.setattr(answer_service, "ask", fake)
    return fake


def test_digest_groups_in_fixed_order() -> None:
    items = [
        make_incident("A4", "congestion", delay=12),
        make_incident("A2", "accident", status="closed", closure="05 mrt 09:00 – 07 mrt 17:00"),
        make_incident("A1", "other"),
    ]
    assert markdown_digest(items) == "\n".join([
        "**Accidents**",
        "• A2 — A2 Utrecht→Amsterdam, closed, closure 05 mrt 09:00 – 07 mrt 17:00",
        "**Congestion**",
        "• A4 — A4 Utrecht→Amsterdam, delay ~12 min",
        "**Other**",
        "• A1 — A1 Utrecht→Amsterdam",
    ])


def test_empty_subset_needs_no_model(fake_ask: FakeAsk) -> None:
    assert asyncio.run(answer_from_incidents("A2?", [], [])) == NO_MATCHING_INCIDENTS
    assert fake_ask.calls == []


def test_large_subset_returns_digest_without_model(fake_ask: FakeAsk) -> None:
    items = [make_incident("A2", "congestion", id=str(n)) for n in range(20)]
    out = asyncio.run(answer_from_incidents("all jams", items, []))
    assert fake_ask.calls == []
    assert out.startswith("**Congestion**")
    assert out.count("•") == 15
    assert len(out) <= 1500


def test_answer_passes_traffic_data(fake_ask: FakeAsk) -> None:
    fake_ask.reply = "One accident on the A2."
    out = asyncio.run(answer_from_incidents("A2?", [make_incident("A2", "accident")], []))
    assert out == "One accident on the A2."
    msgs, kw = fake_ask.calls[0]
    assert msgs[-2].content.startswith("LATEST TRAFFIC DATA:\n**Accidents**")
    assert msgs[-1].content == "A2?"
    assert kw["max_tokens"] == 250


def test_answer_failure_and_empty_reply(fake_ask: FakeAsk) -> None:
    fake_ask.reply = RuntimeError("boom")
    assert asyncio.run(answer_from_incidents("A2?", [make_incident()], [])) == ANSWER_FAILED_REPLY
    fake_ask.reply = ""
    assert asyncio.run(answer_from_incidents("A2?", [make_incident()], [])) == REFUSAL


def test_route_summary(fake_ask: FakeAsk) -> None:
    out = asyncio.run(summarize_route([], "Amsterdam", "Rotterdam"))
    assert "Amsterdam" in out and "Rotterdam" in out
    assert fake_ask.calls == []

    fake_ask.reply = "Expect delays on the A4."
    assert asyncio.run(summarize_route([make_incident("A4")], "Amsterdam", "Rotterdam")) == "Expect delays on the A4."
    assert "Amsterdam to Rotterdam" in fake_ask.calls[0][0][0].content

    fake_ask.reply = RuntimeError("boom")
    assert asyncio.run(summarize_route([make_incident("A4")], "Amsterdam", "Rotterdam")) == ROUTE_FAILED_REPLY


def test_general_chat(fake_ask: FakeAsk) -> None:
    fake_ask.reply = "Hi!"
    assert asyncio.run(non_traffic_reply("tell me a joke", [])) == "Hi!"
    assert fake_ask.calls[0][1]["temperature"] == 0.7
    fake_ask.reply = ""
    assert asyncio.run(non_traffic_reply("tell me a joke", [])) == CHAT_EMPTY_REPLY
    fake_ask.reply = RuntimeError("boom")
    assert asyncio.run(non_traffic_reply("tell me a joke", [])) == CHAT_FAILED_REPLY
