# D:\github\ROADBOT_NL_BACK\core\llm_client.py
import asyncio
from typing import Dict, List, Optional, Sequence, Tuple

from langchain_openai import ChatOpenAI
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from core.config import LLM_API_KEY, LLM_BASE_URL, LLM_MODEL, LLM_TIMEOUT_SEC
from models.chat import Message

_llms: Dict[Tuple[float, Optional[int], bool], object] = {}

def get_llm(temperature: float = 0.0, max_tokens: Optional[int] = None, json_mode: bool = False):
    """One client per (temperature, max_tokens, json_mode)."""
    key = (temperature, max_tokens, json_mode)
    if key in _llms:
        return _llms[key]
    if not LLM_API_KEY:
        raise RuntimeError("LLM_API_KEY / GROQ_API_KEY not set")
    llm = ChatOpenAI(
        model=LLM_MODEL,
        temperature=temperature,
        max_tokens=max_tokens,
        api_key=LLM_API_KEY,
        base_url=LLM_BASE_URL,
    )
    if json_mode:
        llm = llm.bind(response_format={"type": "json_object"})
    _llms[key] = llm
    return llm

def history_messages(history: Sequence[Message]) -> List[BaseMessage]:
    out: List[BaseMessage] = []
    for m in history or []:
        if m.role == "assistant":
            out.append(AIMessage(content=m.content))
        else:
            out.append(HumanMessage(content=m.content))
    return out

async def ask(msgs: List[BaseMessage], *, temperature: float = 0.0,
              max_tokens: Optional[int] = None, json_mode: bool = False,
              timeout: float = LLM_TIMEOUT_SEC) -> str:
    """Blocking invoke in the default executor, bounded by timeout."""
    llm = get_llm(temperature, max_tokens, json_mode)
    resp = await asyncio.wait_for(
        asyncio.get_running_loop().run_in_executor(None, lambda: llm.invoke(msgs)),
        timeout=timeout,
    )
    return (resp.content or "").strip()
