# D:\github\ROADBOT_NL_BACK\services\answer_service.py
import logging
from typing import Dict, List, Sequence

from langchain_core.messages import SystemMessage, HumanMessage

from core.llm_client import ask, history_messages
from models.chat import Message
from models.incidents import Incident, CATEGORIES
from prompts.all_en import (
    REFUSAL, NO_MATCHING_INCIDENTS, NO_ROUTE_INCIDENTS,
    ANSWER_SYSTEM, ROUTE_SYSTEM, CHAT_SYSTEM, TRAFFIC_DATA_HEADER,
    ANSWER_FAILED_REPLY, ROUTE_FAILED_REPLY, CHAT_FAILED_REPLY, CHAT_EMPTY_REPLY,
)

MAX_INCIDENTS_FOR_LLM = 15
MAX_DIGEST_CHARS = 1500

LABELS = {
    "accident": "Accidents",
    "construction": "Construction",
    "congestion": "Congestion",
    "obstruction": "Obstruction",
    "weather": "Weather",
    "other": "Other",
}

# -----------------------------
# Digest
# -----------------------------
def group_by_category(items: Sequence[Incident]) -> Dict[str, List[Incident]]:
    groups: Dict[str, List[Incident]] = {c: [] for c in CATEGORIES}
    for it in items:
        groups[it.category].append(it)
    return groups

def _fmt(it: Incident) -> str:
    pieces = [f"{it.road} — {it.location}"]
    if it.status == "closed":
        pieces.append("closed")
    if it.closure:
        pieces.append(f"closure {it.closure}")
    if it.delay:
        pieces.append(f"delay ~{it.delay} min")
    return "• " + ", ".join(pieces)

def markdown_digest(items: Sequence[Incident]) -> str:
    groups = group_by_category(items)
    lines: List[str] = []
    for cat in CATEGORIES:
        if not groups[cat]:
            continue
        lines.append(f"**{LABELS[cat]}**")
        lines.extend(_fmt(x) for x in groups[cat])
    return "\n".join(lines).strip()

# -----------------------------
# Capabilities
# -----------------------------
async def answer_from_incidents(query: str, subset: Sequence[Incident],
                                history: Sequence[Message]) -> str:
    if not subset:
        return NO_MATCHING_INCIDENTS

    # too many to reason over: send the digest itself
    if len(subset) > MAX_INCIDENTS_FOR_LLM:
        return markdown_digest(subset[:MAX_INCIDENTS_FOR_LLM])[:MAX_DIGEST_CHARS]

    msgs = [
        SystemMessage(content=ANSWER_SYSTEM),
        *history_messages(history),
        SystemMessage(content=TRAFFIC_DATA_HEADER + markdown_digest(subset)),
        HumanMessage(content=query),
    ]
    try:
        reply = await ask(msgs, temperature=0.2, max_tokens=250)
    except Exception as e:
        logging.error(f"[answer] incident answer failed: {type(e).__name__}: {e}")
        return ANSWER_FAILED_REPLY
    return reply or REFUSAL

async def summarize_route(subset: Sequence[Incident], origin: str, destination: str) -> str:
    if not subset:
        return NO_ROUTE_INCIDENTS.format(origin=origin, destination=destination)

    msgs = [
        SystemMessage(content=ROUTE_SYSTEM.format(origin=origin, destination=destination)),
        SystemMessage(content=TRAFFIC_DATA_HEADER
                      + markdown_digest(subset[:MAX_INCIDENTS_FOR_LLM])[:MAX_DIGEST_CHARS]),
        HumanMessage(content=f"How is the traffic from {origin} to {destination}?"),
    ]
    try:
        reply = await ask(msgs, temperature=0.2, max_tokens=250)
    except Exception as e:
        logging.error(f"[answer] route summary failed: {type(e).__name__}: {e}")
        return ROUTE_FAILED_REPLY
    return reply or markdown_digest(subset)[:MAX_DIGEST_CHARS]

async def non_traffic_reply(query: str, history: Sequence[Message]) -> str:
    msgs = [
        SystemMessage(content=CHAT_SYSTEM),
        *history_messages(history),
        HumanMessage(content=query),
    ]
    try:
        reply = await ask(msgs, temperature=0.7, max_tokens=200)
    except Exception as e:
        logging.error(f"[answer] general chat failed: {type(e).__name__}: {e}")
        return CHAT_FAILED_REPLY
    return reply or CHAT_EMPTY_REPLY
