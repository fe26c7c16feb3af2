# D:\github\ROADBOT_NL_BACK\models\chat.py
from typing import Optional, List, Literal, Any
from pydantic import BaseModel, Field, field_validator, model_validator

from .incidents import CATEGORIES, ALL_CATEGORIES_MARKER

_VALID_CATEGORIES = set(CATEGORIES) | {ALL_CATEGORIES_MARKER}


class Message(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    query: str
    history: List[Message] = Field(default_factory=list)

    @field_validator("history", mode="before")
    @classmethod
    def _null_history(cls, v):
        return [] if v is None else v


def _as_str_list(v: Any) -> Optional[List[str]]:
    if v is None:
        return None
    if isinstance(v, str):
        v = [v]
    if not isinstance(v, (list, tuple)):
        raise ValueError("expected a list of strings")
    return [str(x).strip() for x in v if isinstance(x, (str, int)) and str(x).strip()]


class Entities(BaseModel):
    """
    Entities extracted from one conversation turn.
    None = not mentioned; [] = mentioned but nothing usable.
    categories_unmatched: categories were asked for but none is a known one,
    so nothing can match them.
    """
    roads: Optional[List[str]] = None
    categories: Optional[List[str]] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    categories_unmatched: bool = False

    @model_validator(mode="before")
    @classmethod
    def _flag_unknown_categories(cls, data):
        if isinstance(data, dict):
            asked = _as_str_list(data.get("categories"))
            if asked and not any(c.lower() in _VALID_CATEGORIES for c in asked):
                data = {**data, "categories_unmatched": True}
        return data

    @field_validator("roads", mode="before")
    @classmethod
    def _roads(cls, v):
        out = _as_str_list(v)
        if out is None:
            return None
        return [r.replace(" ", "").upper() for r in out]

    @field_validator("categories", mode="before")
    @classmethod
    def _categories(cls, v):
        out = _as_str_list(v)
        if out is None:
            return None
        return [c.lower() for c in out if c.lower() in _VALID_CATEGORIES]

    @field_validator("origin", "destination", mode="before")
    @classmethod
    def _place(cls, v):
        if v is None:
            return None
        s = str(v).strip()
        return s or None

    def has_filters(self) -> bool:
        return self.roads is not None or self.categories is not None

    def has_route(self) -> bool:
        return bool(self.origin and self.destination)
