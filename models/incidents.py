# D:\github\ROADBOT_NL_BACK\models\incidents.py
from typing import Optional, Literal, Tuple
from pydantic import BaseModel, ConfigDict, Field

Category = Literal["accident", "construction", "congestion", "obstruction", "weather", "other"]
Status = Literal["open", "closed"]

CATEGORIES: Tuple[str, ...] = ("accident", "construction", "congestion", "obstruction", "weather", "other")
ALL_CATEGORIES_MARKER = "all_categories"
# "all_categories" expands to everything except "other"
ALL_CATEGORIES_EXPANSION: Tuple[str, ...] = tuple(c for c in CATEGORIES if c != "other")


class Incident(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    road: str = Field(min_length=1)          # e.g. "A2", "N57"
    location: str                            # free text, or "A2 Utrecht→Amsterdam"
    category: Category
    status: Status
    closure: Optional[str] = None            # "05 mrt 09:00 – 07 mrt 17:00"
    delay: Optional[int] = Field(default=None, ge=0)   # minutes
    start_iso: Optional[str] = None          # ordering only, never reformatted
