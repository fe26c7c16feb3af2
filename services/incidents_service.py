# D:\github\ROADBOT_NL_BACK\services\incidents_service.py
import time
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

import requests

from core import config as CFG
from core.http_client import http_get
from models.incidents import Incident, ALL_CATEGORIES_MARKER, ALL_CATEGORIES_EXPANSION
from parsers.incidents_parser import flatten_feed


class FeedUnavailableError(RuntimeError):
    """Upstream feed down or unusable (gateway-class)."""
    status_code = 502


# -----------------------------
# Upstream fetch (no retries, no partial payload)
# -----------------------------
def fetch_raw_feed() -> Any:
    if not CFG.ANWB_API_KEY:
        raise FeedUnavailableError("ANWB_API_KEY not set")
    params = {"apikey": CFG.ANWB_API_KEY, **CFG.ANWB_INCIDENTS_PARAMS}
    try:
        r = http_get(CFG.ANWB_INCIDENTS_URL, params=params)
    except requests.RequestException as e:
        raise FeedUnavailableError(f"ANWB feed error: {type(e).__name__}") from e
    if not r.ok:
        raise FeedUnavailableError(f"ANWB feed error: HTTP {r.status_code}")
    try:
        return r.json()
    except ValueError as e:
        raise FeedUnavailableError("ANWB feed error: invalid JSON") from e


# -----------------------------
# In-memory cache: one snapshot for the whole process
# -----------------------------
@dataclass(frozen=True)
class CacheEntry:
    timestamp: float
    incidents: Tuple[Incident, ...]


class IncidentCache:
    """
    Time-boxed memo in front of fetch + flatten.

    The snapshot is replaced as a whole; readers never see a partial list.
    No lock: two callers racing on an expired entry both fetch, last one wins.
    A failed refresh raises and leaves the previous entry untouched (but it
    is not served, since it is already stale).
    """

    def __init__(self,
                 fetch_raw: Callable[[], Any] = fetch_raw_feed,
                 ttl_sec: float = CFG.INCIDENT_CACHE_TTL_SEC,
                 clock: Callable[[], float] = time.time):
        self._fetch_raw = fetch_raw
        self._ttl = ttl_sec
        self._now = clock
        self._entry: Optional[CacheEntry] = None

    @property
    def entry(self) -> Optional[CacheEntry]:
        return self._entry

    def _hit(self) -> Optional[Tuple[Incident, ...]]:
        entry = self._entry
        if entry is not None and self._now() - entry.timestamp < self._ttl:
            return entry.incidents
        return None

    async def get_incidents(self) -> List[Incident]:
        hit = self._hit()
        if hit is not None:
            return list(hit)

        raw = await asyncio.get_running_loop().run_in_executor(None, self._fetch_raw)
        incidents = tuple(flatten_feed(raw))
        self._entry = CacheEntry(timestamp=self._now(), incidents=incidents)
        logging.info(f"[anwb] refreshed cache: {len(incidents)} incident(s)")
        return list(incidents)

    def clear(self) -> None:
        self._entry = None


# -----------------------------
# Filtering (roads AND categories)
# -----------------------------
def expand_categories(categories: Iterable[str]) -> set:
    cats = set(categories)
    if ALL_CATEGORIES_MARKER in cats:
        return set(ALL_CATEGORIES_EXPANSION)
    return cats

def filter_incidents(items: Sequence[Incident],
                     roads: Optional[Sequence[str]] = None,
                     categories: Optional[Sequence[str]] = None) -> List[Incident]:
    """None or [] means no filter on that field."""
    out = list(items)
    if roads:
        road_set = {r.strip().upper() for r in roads}
        out = [i for i in out if i.road.upper() in road_set]
    if categories:
        cat_set = expand_categories(categories)
        out = [i for i in out if i.category in cat_set]
    return out
