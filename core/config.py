# D:\github\ROADBOT_NL_BACK\core\config.py
import os
from dotenv import load_dotenv, find_dotenv
from .endpoints import ENDPOINTS

load_dotenv(find_dotenv(filename=".env", usecwd=True), override=False)

def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")

# Timeouts / retries (default: no automatic retry)
DEFAULT_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "6.0"))
RETRY_TOTAL = int(os.getenv("HTTP_RETRY_TOTAL", "0"))

# Cache
INCIDENT_CACHE_TTL_SEC = int(os.getenv("INCIDENT_CACHE_TTL_SEC", "60"))

# ANWB feed (URL in endpoints.py)
ANWB_API_KEY = os.getenv("ANWB_API_KEY", "").strip()
ANWB_INCIDENTS_URL = ENDPOINTS["anwb"]["incidents"]
ANWB_INCIDENTS_PARAMS = ENDPOINTS["anwb"]["params"]

# LLM (Groq's OpenAI-compatible endpoint by default)
LLM_API_KEY = (os.getenv("LLM_API_KEY", "").strip()
               or os.getenv("GROQ_API_KEY", "").strip()
               or os.getenv("OPENAI_API_KEY", "").strip())
LLM_BASE_URL = os.getenv("LLM_BASE_URL", ENDPOINTS["llm"]["groq"]).strip() or None
LLM_MODEL = os.getenv("LLM_MODEL", "llama3-8b-8192")
LLM_TIMEOUT_SEC = float(os.getenv("LLM_TIMEOUT_SEC", "10"))

# Router policy
ROUTER_KEYWORD_PREFILTER = _flag("ROUTER_KEYWORD_PREFILTER", "false")
ROUTER_CLARIFY_UNDERSPECIFIED = _flag("ROUTER_CLARIFY_UNDERSPECIFIED", "true")

# Logging / server
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "service.log").strip()
PORT = int(os.getenv("PORT", "8108"))
