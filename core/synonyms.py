# D:\github\ROADBOT_NL_BACK\core\synonyms.py
import os, re, logging
from typing import Dict, Any, List, Tuple, Pattern
import yaml

DEFAULT_PATH = os.getenv("SYNONYMS_PATH",
                         os.path.join(os.getcwd(), "synonyms", "synonyms.yml"))

# Used when the YAML file is missing or empty
DEFAULT_REWRITES: List[Dict[str, str]] = [
    {"pattern": r"\bjams\b", "replace": "congestion"},
    {"pattern": r"\broad\s?works?\b|\bbuilding\b", "replace": "construction"},
    {"pattern": r"\bproblems\b|\bissues\b|\binconveniences\b|\bdisruptions\b", "replace": "all_categories"},
    {"pattern": r"\b(on\s+roads?|everywhere|general|overall)\b", "replace": "all_categories"},
]

_state: Dict[str, Any] = {"path": DEFAULT_PATH, "ts": None, "rules": []}

def _compile(entries) -> List[Tuple[Pattern, str]]:
    rules = []
    for ent in entries or []:
        if not isinstance(ent, dict) or not ent.get("pattern"):
            continue
        try:
            rules.append((re.compile(str(ent["pattern"]), re.I), str(ent.get("replace") or "")))
        except re.error as e:
            logging.warning(f"[synonyms] bad pattern {ent['pattern']!r}: {e}")
    return rules

def _load_file(path: str) -> List[Tuple[Pattern, str]]:
    if not os.path.exists(path):
        return _compile(DEFAULT_REWRITES)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    entries = data.get("rewrites") if isinstance(data, dict) else None
    return _compile(entries or DEFAULT_REWRITES)

def load(force: bool = False) -> List[Tuple[Pattern, str]]:
    """Read rewrite rules (reloads when the file mtime changes)."""
    path = _state["path"]
    ts = os.path.getmtime(path) if os.path.exists(path) else 0.0
    if force or (ts != _state["ts"]):
        _state["rules"] = _load_file(path)
        _state["ts"] = ts
    return _state["rules"]

def use_path(path: str) -> None:
    _state["path"] = path
    _state["ts"] = None

def rewrite_query(query: str) -> str:
    """
    Map user wording onto the vocabulary the entity extractor expects:
      jams → congestion, road works / building → construction,
      problems / everywhere / overall ... → all_categories
    """
    out = query or ""
    for pat, repl in load():
        out = pat.sub(repl, out)
    return out

def reload():
    load(force=True)
