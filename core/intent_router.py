# D:\github\ROADBOT_NL_BACK\core\intent_router.py
import json, logging
from typing import Any, Dict, Sequence

from langchain_core.messages import SystemMessage, HumanMessage
from pydantic import ValidationError

from core.llm_client import ask, history_messages
from models.chat import Entities, Message
from prompts.all_en import ENTITY_SYSTEM

_KEYS = ("roads", "categories", "origin", "destination")

def parse_entities(raw: str) -> Entities:
    """Strict JSON first, then the first {...} block; anything else → no entities."""
    raw = (raw or "").strip()
    try:
        data = json.loads(raw)
    except ValueError:
        s, e = raw.find("{"), raw.rfind("}")
        if s == -1 or e <= s:
            logging.warning("[router] entity output is not JSON")
            return Entities()
        try:
            data = json.loads(raw[s:e+1])
        except ValueError:
            logging.warning("[router] entity output is not JSON")
            return Entities()

    if not isinstance(data, dict):
        return Entities()
    picked: Dict[str, Any] = {k: data[k] for k in _KEYS if k in data}
    try:
        return Entities.model_validate(picked)
    except ValidationError as e:
        logging.warning(f"[router] entity output rejected: {e.error_count()} error(s)")
        return Entities()

async def extract_entities(query: str, history: Sequence[Message]) -> Entities:
    """roads / categories / origin / destination; never raises."""
    msgs = [
        SystemMessage(content=ENTITY_SYSTEM),
        *history_messages(history),
        HumanMessage(content=query[:1000]),
    ]
    try:
        raw = await ask(msgs, temperature=0, json_mode=True)
    except Exception as e:
        logging.error(f"[router] entity extraction failed: {type(e).__name__}: {e}")
        return Entities()
    return parse_entities(raw)
