# D:\github\ROADBOT_NL_BACK\app.py
import os
import time
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import LOG_LEVEL, LOG_FILE, PORT, LLM_API_KEY, ANWB_API_KEY
from routers.chat import router as chat_router
from routers.traffic_incidents import router as incidents_router
from services.chat_service import TrafficBot
from services.incidents_service import IncidentCache

# =============================================================================
# Logging
# =============================================================================
def setup_logging():
    # no-op when the root logger is already configured (uvicorn --log-config, pytest)
    if logging.getLogger().handlers:
        return
    handlers = [logging.StreamHandler()]
    if LOG_FILE:
        handlers.insert(0, logging.FileHandler(LOG_FILE, encoding="utf-8", delay=True))
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        handlers=handlers,
    )

setup_logging()

# =============================================================================
# FastAPI
# =============================================================================
def create_app(bot: Optional[TrafficBot] = None, cache: Optional[IncidentCache] = None) -> FastAPI:
    cache = cache or (bot.cache if bot else IncidentCache())
    bot = bot or TrafficBot(cache=cache)

    app = FastAPI(title="RoadBot NL")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )
    app.state.cache = cache
    app.state.bot = bot
    app.include_router(chat_router)
    app.include_router(incidents_router)

    @app.get("/health")
    def health():
        entry = app.state.cache.entry
        return {
            "time": time.strftime("%Y-%m-%d %H:%M:%S"),
            "llm_key_present": bool(LLM_API_KEY),
            "anwb_key_present": bool(ANWB_API_KEY),
            "cache_age_sec": round(time.time() - entry.timestamp, 1) if entry else None,
            "cached_incidents": len(entry.incidents) if entry else 0,
        }

    return app

app = create_app()

# =============================================================================
# Start
# =============================================================================
if __name__ == "__main__":
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=PORT)
