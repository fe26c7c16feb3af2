# D:\github\ROADBOT_NL_BACK\models\feed.py
# Minimal structural schema of the ANWB incidents payload:
#   roads[] -> segments[] -> {jams[], roadworks[], radars[]}
# Unknown fields are kept on RawItem (extra="allow") and ignored elsewhere.
from typing import Optional, List, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

BUCKETS = ("jams", "roadworks", "radars")


class RawItem(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: Optional[Union[str, int]] = None
    msgNr: Optional[Union[str, int]] = None
    reason: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    start: Optional[str] = None
    stop: Optional[str] = None
    timestamp: Optional[str] = None
    delay: Optional[float] = None            # seconds


class RawSegment(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    start: Optional[str] = None
    end: Optional[str] = None
    # items stay untyped here; each one is validated on its own so a single
    # malformed record does not drop the whole segment
    jams: List[dict] = Field(default_factory=list)
    roadworks: List[dict] = Field(default_factory=list)
    radars: List[dict] = Field(default_factory=list)

    @field_validator("jams", "roadworks", "radars", mode="before")
    @classmethod
    def _list_of_dicts(cls, v):
        if not isinstance(v, list):
            return []
        return [x for x in v if isinstance(x, dict)]


class RawRoad(BaseModel):
    model_config = ConfigDict(extra="ignore")

    road: str
    segments: List[dict] = Field(default_factory=list)

    @field_validator("road", mode="before")
    @classmethod
    def _road_text(cls, v):
        if v is None:
            raise ValueError("road missing")
        s = str(v).strip()
        if not s:
            raise ValueError("road empty")
        return s

    @field_validator("segments", mode="before")
    @classmethod
    def _segments_list(cls, v):
        if not isinstance(v, list):
            return []
        return [x for x in v if isinstance(x, dict)]
