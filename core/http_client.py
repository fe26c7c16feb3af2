# D:\github\ROADBOT_NL_BACK\core\http_client.py
from typing import Optional, Dict
import requests
from urllib3.util.retry import Retry
from requests.adapters import HTTPAdapter
from .config import DEFAULT_TIMEOUT, RETRY_TOTAL

_session = None

def get_session():
    global _session
    if _session is None:
        _session = requests.Session()
        retries = Retry(
            total=RETRY_TOTAL, backoff_factor=0.5,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=frozenset(['GET']),
            raise_on_status=False,
        )
        _session.headers.update({"User-Agent": "roadbot-nl/1.0", "Accept": "application/json"})
        _session.mount("http://", HTTPAdapter(max_retries=retries))
        _session.mount("https://", HTTPAdapter(max_retries=retries))
    return _session

def http_get(url: str, params: Optional[Dict[str, str]] = None,
             timeout: float = DEFAULT_TIMEOUT) -> requests.Response:
    return get_session().get(url, params=params, timeout=timeout)
