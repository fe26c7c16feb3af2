from typing import Any, Dict, List, Optional

import pytest

from models.incidents import Incident


class FakeClock:
    def __init__(self, t: float = 1_000.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


def make_incident(road: str = "A2", category: str = "congestion", **kw: Any) -> Incident:
    data: Dict[str, Any] = {
        "id": kw.pop("id", f"{road}-{category}"),
        "road": road,
        "location": kw.pop("location", f"{road} Utrecht→Amsterdam"),
        "category": category,
        "status": kw.pop("status", "open"),
    }
    data.update(kw)
    return Incident(**data)


def feed(*roads: Dict[str, Any]) -> Dict[str, Any]:
    return {"roads": list(roads)}


def road(name: Optional[str], *segments: Dict[str, Any]) -> Dict[str, Any]:
    return {"road": name, "segments": list(segments)}


def segment(start: str = "Utrecht", end: str = "Amsterdam",
            jams: Optional[List[dict]] = None,
            roadworks: Optional[List[dict]] = None,
            radars: Optional[List[dict]] = None) -> Dict[str, Any]:
    return {
        "start": start,
        "end": end,
        "jams": jams or [],
        "roadworks": roadworks or [],
        "radars": radars or [],
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_feed() -> Dict[str, Any]:
    return feed(
        road("A2",
             segment(jams=[{"id": 1, "reason": "Ongeval", "delay": 600, "start": "2024-03-05T08:00:00Z"}],
                     roadworks=[{"id": 2, "description": "Rijstrook dicht",
                                 "start": "2024-03-05T06:00:00Z", "stop": "2024-03-07T16:00:00Z"}])),
        road("A4",
             segment(start="Den Haag", end="Rotterdam",
                     jams=[{"msgNr": "m-3", "delay": 120, "start": "2024-03-05T09:00:00Z"}],
                     radars=[{"id": 4, "location": "A4 hmp 12.3"}])),
    )
