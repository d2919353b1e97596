# calendly_cli/calendly_client.py
import logging
import requests
from typing import Optional, Dict, Any

from calendly_cli.exceptions import CalendlyAPIError

logger = logging.getLogger(__name__)

CALENDLY_API_BASE = "https://api.calendly.com"


class CalendlyClient:
    """Thin authenticated JSON wrapper around the Calendly REST API.

    Every call is a single attempt: a non-2xx status raises CalendlyAPIError
    and nothing is retried.
    """

    def __init__(self, token: str, base_url: str = CALENDLY_API_BASE,
                 session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def url_for(self, path: str) -> str:
        # next_page links from list envelopes are already absolute
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}{path}"

    def request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None,
                params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """Perform one request and return the decoded JSON body (None for 204/empty)."""
        url = self.url_for(path)
        logger.debug("%s %s params=%s body=%s", method, url, params, body)
        r = self.session.request(
            method,
            url,
            headers=self._headers(),
            json=body,
            params=params or None,
            timeout=self.timeout,
        )
        logger.debug("%s %s -> %s", method, url, r.status_code)

        if r.status_code == 204:
            return None
        if not 200 <= r.status_code < 300:
            raise CalendlyAPIError(r.status_code, r.text)
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError:
            logger.debug("Non-JSON response body from %s %s", method, url)
            raise CalendlyAPIError(r.status_code, r.text)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None):
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Dict[str, Any]):
        return self.request("POST", path, body=body)

    def patch(self, path: str, body: Dict[str, Any]):
        return self.request("PATCH", path, body=body)

    def delete(self, path: str):
        return self.request("DELETE", path)
