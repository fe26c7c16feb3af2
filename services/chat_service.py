# D:\github\ROADBOT_NL_BACK\services\chat_service.py
import uuid
import logging
import traceback
from typing import Awaitable, Callable, List, Optional, Sequence

from core import config as CFG
from core import textnorm
from core.intent_router import extract_entities
from core.route_heuristic import is_on_route, route_roads
from core.synonyms import rewrite_query
from models.chat import Entities, Message
from models.incidents import Incident
from prompts.all_en import (
    EMPTY_QUERY_REPLY, GREETING_REPLY, CLARIFY_REPLY,
    FEED_UNAVAILABLE_REPLY, TURN_FAILED_REPLY,
)
from services import answer_service
from services.incidents_service import IncidentCache, filter_incidents

EntityExtractor = Callable[[str, Sequence[Message]], Awaitable[Entities]]
Answerer = Callable[[str, Sequence[Incident], Sequence[Message]], Awaitable[str]]
RouteSummarizer = Callable[[Sequence[Incident], str, str], Awaitable[str]]
Chatter = Callable[[str, Sequence[Message]], Awaitable[str]]


class TrafficBot:
    """
    One user turn → one reply string.

      1. blank → fixed apology
      2. greeting → fixed greeting (no feed, no model)
      3. keyword pre-filter (optional): no traffic words → general chat
      4. incidents from cache; failure → "service unavailable", no model calls
      5. synonym rewrite + entity extraction (failure = no entities)
      6. roads/categories → filter + answer
         origin+destination on a known route → route heuristic + route summary
         traffic words only → clarifying question (optional)
         otherwise → general chat

    process_turn never raises.
    """

    def __init__(self,
                 cache: IncidentCache,
                 extract: EntityExtractor = extract_entities,
                 answer: Answerer = answer_service.answer_from_incidents,
                 summarize_route: RouteSummarizer = answer_service.summarize_route,
                 chat: Chatter = answer_service.non_traffic_reply,
                 keyword_prefilter: bool = CFG.ROUTER_KEYWORD_PREFILTER,
                 clarify_underspecified: bool = CFG.ROUTER_CLARIFY_UNDERSPECIFIED):
        self.cache = cache
        self.extract = extract
        self.answer = answer
        self.summarize_route = summarize_route
        self.chat = chat
        self.keyword_prefilter = keyword_prefilter
        self.clarify_underspecified = clarify_underspecified

    async def process_turn(self, query: str, history: Optional[Sequence[Message]] = None) -> str:
        req_id = uuid.uuid4().hex[:8]
        history = list(history or [])
        q = textnorm.normalize(query)

        if not q:
            return EMPTY_QUERY_REPLY
        if textnorm.is_greeting(q):
            logging.debug(f"[{req_id}] greeting")
            return GREETING_REPLY

        try:
            return await self._route(req_id, q, history)
        except Exception:
            logging.error(f"[{req_id}] turn failed\n{traceback.format_exc()}")
            return TURN_FAILED_REPLY

    async def _route(self, req_id: str, q: str, history: List[Message]) -> str:
        processed = rewrite_query(q)

        if self.keyword_prefilter and not textnorm.mentions_traffic(processed):
            logging.debug(f"[{req_id}] pre-filter: no traffic words → chat")
            return await self.chat(q, history)

        try:
            incidents = await self.cache.get_incidents()
        except Exception as e:
            logging.error(f"[{req_id}] incidents unavailable: {type(e).__name__}: {e}")
            return FEED_UNAVAILABLE_REPLY

        entities = await self._safe_extract(req_id, processed, history)
        logging.info(f"[{req_id}] entities={entities.model_dump(exclude_none=True)} pool={len(incidents)}")

        if entities.has_filters():
            if entities.categories_unmatched:
                subset = []
            else:
                subset = filter_incidents(incidents, entities.roads, entities.categories)
            logging.debug(f"[{req_id}] branch=filter hits={len(subset)}")
            return await self.answer(q, subset, history)

        if entities.has_route():
            if route_roads(entities.origin, entities.destination):
                subset = [i for i in incidents if is_on_route(i, entities.origin, entities.destination)]
                logging.debug(f"[{req_id}] branch=route {entities.origin}→{entities.destination} hits={len(subset)}")
                return await self.summarize_route(subset, entities.origin, entities.destination)
            # unknown pair: no highways to check, so no all-clear either
            logging.info(f"[{req_id}] no highways known for {entities.origin}→{entities.destination}")

        if self.clarify_underspecified and textnorm.mentions_traffic(processed):
            logging.debug(f"[{req_id}] branch=clarify")
            return CLARIFY_REPLY

        logging.debug(f"[{req_id}] branch=chat")
        return await self.chat(q, history)

    async def _safe_extract(self, req_id: str, processed: str, history: List[Message]) -> Entities:
        try:
            ent = await self.extract(processed, history)
        except Exception as e:
            logging.error(f"[{req_id}] extraction failed: {type(e).__name__}: {e}")
            return Entities()
        return ent if isinstance(ent, Entities) else Entities()
