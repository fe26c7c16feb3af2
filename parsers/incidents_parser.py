# D:\github\ROADBOT_NL_BACK\parsers\incidents_parser.py
import re
import uuid
import logging
from datetime import datetime
from zoneinfo import ZoneInfo
from typing import List, Optional, Any

from pydantic import ValidationError

from models.incidents import Incident
from models.feed import RawItem, RawRoad, RawSegment, BUCKETS

TZ_NL = ZoneInfo("Europe/Amsterdam")
NL_MONTHS = ("jan", "feb", "mrt", "apr", "mei", "jun", "jul", "aug", "sep", "okt", "nov", "dec")

# Dutch vocabulary, matched case-insensitively as substrings
ACCIDENT_PAT = re.compile(r"ongeval|botsing|crash", re.I)
WEATHER_PAT = re.compile(r"mist|gladheid|wateroverlast|storm", re.I)
OBSTRUCTION_PAT = re.compile(r"obstakel|stilgevallen|verlies van lading", re.I)
CLOSED_PAT = re.compile(r"dicht|afgesloten", re.I)


def _raw_text(raw: RawItem) -> str:
    return f"{raw.reason or ''} {raw.description or ''}".strip()


def classify(text: str, bucket: str) -> str:
    """
    bucket → category, first match wins:
      roadworks → construction (ignores text)
      crash words → accident; weather words → weather; obstacle words → obstruction
      jams → congestion; anything else (radars) → other
    """
    if bucket == "roadworks":
        return "construction"
    txt = text or ""
    if ACCIDENT_PAT.search(txt):
        return "accident"
    if WEATHER_PAT.search(txt):
        return "weather"
    if OBSTRUCTION_PAT.search(txt):
        return "obstruction"
    if bucket == "jams":
        return "congestion"
    return "other"


def _parse_ts(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    s = str(value).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=TZ_NL)
    return dt.astimezone(TZ_NL)


def fmt_nl_short(dt: datetime) -> str:
    # "05 mrt 14:30"
    return f"{dt.day:02d} {NL_MONTHS[dt.month - 1]} {dt.hour:02d}:{dt.minute:02d}"


def closure_range(start: Optional[str], stop: Optional[str]) -> Optional[str]:
    """Both ends or nothing."""
    a, b = _parse_ts(start), _parse_ts(stop)
    if a is None or b is None:
        return None
    return f"{fmt_nl_short(a)} – {fmt_nl_short(b)}"


def delay_minutes(seconds: Optional[float]) -> Optional[int]:
    # half-up rounding; 0 / negative / missing → omitted
    if seconds is None or seconds <= 0:
        return None
    minutes = int(seconds / 60 + 0.5)
    return minutes or None


def normalize(raw: Any, bucket: str, road: str) -> Optional[Incident]:
    """
    One raw feed item → Incident. Returns None when the record is unusable
    (no road, or the item itself does not match the feed schema).
    """
    road = (road or "").strip()
    if not road:
        return None
    if not isinstance(raw, RawItem):
        try:
            raw = RawItem.model_validate(raw)
        except ValidationError as e:
            logging.warning(f"[anwb] skip malformed {bucket} item on {road}: {e.error_count()} error(s)")
            return None

    text = _raw_text(raw)
    ident = raw.id if raw.id not in (None, "") else raw.msgNr
    location = (raw.location or "").strip() or f"{road} {raw.from_ or ''}→{raw.to or ''}".strip()

    return Incident(
        id=str(ident) if ident not in (None, "") else uuid.uuid4().hex,
        road=road,
        location=location,
        category=classify(text, bucket),
        status="closed" if CLOSED_PAT.search(text) else "open",
        closure=closure_range(raw.start, raw.stop),
        delay=delay_minutes(raw.delay),
        start_iso=raw.start or raw.timestamp or None,
    )


def flatten_feed(payload: Any) -> List[Incident]:
    """
    Walk roads → segments → jams/roadworks/radars and emit one Incident per
    usable item, newest first (by start_iso, missing timestamps last).
    """
    roads = payload.get("roads") if isinstance(payload, dict) else None
    if not isinstance(roads, list):
        return []

    out: List[Incident] = []
    skipped = 0
    for road_entry in roads:
        try:
            road = RawRoad.model_validate(road_entry)
        except ValidationError:
            skipped += 1
            continue
        for seg_entry in road.segments:
            try:
                seg = RawSegment.model_validate(seg_entry)
            except ValidationError:
                skipped += 1
                continue
            seg_loc = f"{road.road} {seg.start or ''}→{seg.end or ''}"
            for bucket in BUCKETS:
                for item in getattr(seg, bucket):
                    item = dict(item)
                    if not item.get("location"):
                        item["location"] = seg_loc
                    inc = normalize(item, bucket, road.road)
                    if inc is None:
                        skipped += 1
                        continue
                    out.append(inc)

    if skipped:
        logging.warning(f"[anwb] skipped {skipped} malformed record(s)")

    # stable sort: equal timestamps keep feed order
    out.sort(key=lambda i: i.start_iso or "", reverse=True)
    return out
