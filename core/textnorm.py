# D:\github\ROADBOT_NL_BACK\core\textnorm.py
import re

GREETING = re.compile(r"^(hi|hello|hey|hallo|good\s(morning|afternoon|evening))\b", re.I)

# Traffic vocabulary (English + common Dutch), also used for the optional pre-filter
TRAFFIC_HINT = re.compile(
    r"\b(traffic|jams?|congestion|queues?|accidents?|crash(es)?|construction|road\s?works?|"
    r"closures?|closed|delays?|highways?|motorways?|roads?|route|commute|"
    r"fog|obstructions?|all_categories|verkeer|ongeval|wegwerkzaamheden|"
    r"[an]\d{1,3})\b",
    re.I,
)

def normalize(q: str) -> str:
    return (q or "").strip()

def is_blank(q: str) -> bool:
    return not normalize(q)

def is_greeting(q: str) -> bool:
    return bool(GREETING.match(normalize(q)))

def mentions_traffic(q: str) -> bool:
    return bool(TRAFFIC_HINT.search(q or ""))
