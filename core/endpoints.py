# D:\github\ROADBOT_NL_BACK\core\endpoints.py

ENDPOINTS = {
    # Real-time incidents (jams / roadworks / radars), whole country in one call
    "anwb": {
        "incidents": "https://api.anwb.nl/v2/incidents",
        "params": {"polylines": "true", "polylineBounds": "true", "totals": "true"},
    },

    # OpenAI-compatible chat completions
    "llm": {
        "groq":   "https://api.groq.com/openai/v1",
        "openai": "https://api.openai.com/v1",
    },
}
