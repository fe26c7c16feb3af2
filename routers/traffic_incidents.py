# D:\github\ROADBOT_NL_BACK\routers\traffic_incidents.py
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query, Request

from services.incidents_service import FeedUnavailableError, filter_incidents

router = APIRouter(prefix="/traffic", tags=["traffic"])

@router.get("/incidents")
async def incidents(request: Request,
                    road: Optional[List[str]] = Query(None, description="e.g. A2 (repeatable)"),
                    category: Optional[List[str]] = Query(None, description="accident|construction|...|all_categories"),
                    limit: int = Query(50, ge=1, le=500)):
    cache = request.app.state.cache
    try:
        items = await cache.get_incidents()
    except FeedUnavailableError as e:
        raise HTTPException(status_code=e.status_code, detail="ANWB feed error")
    hits = filter_incidents(items, road, [c.lower() for c in category] if category else None)
    return {
        "count": len(hits),
        "items": [x.model_dump(exclude_none=True) for x in hits[:limit]],
    }
