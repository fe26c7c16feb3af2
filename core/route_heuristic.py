# D:\github\ROADBOT_NL_BACK\core\route_heuristic.py
# Not a router: city pair → highways usually driven between them.
# Directional on purpose; add the reverse key when both directions are wanted.
from typing import Dict, List

from models.incidents import Incident

ROUTE_MAP: Dict[str, List[str]] = {
    "vlissingen-amsterdam": ["A58", "A4", "A2", "A10", "N57", "N59"],
    "amsterdam-rotterdam":  ["A4", "A2", "A13"],
}

def _key(origin: str, destination: str) -> str:
    return f"{(origin or '').strip().lower()}-{(destination or '').strip().lower()}"

def route_roads(origin: str, destination: str) -> List[str]:
    return ROUTE_MAP.get(_key(origin, destination), [])

def is_on_route(incident: Incident, origin: str, destination: str) -> bool:
    return incident.road.strip().upper() in route_roads(origin, destination)
