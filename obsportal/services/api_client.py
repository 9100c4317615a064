# obsportal/services/api_client.py
from __future__ import annotations

import threading
from typing import Any, Optional

import requests

from obsportal.core.config import CONFIG
from obsportal.core.logger import get_logger
from obsportal.models.schemas import ApiResult

logger = get_logger("api")


class ApiClient:
    """
    Thin wrapper over a requests session that never raises.

    Every call comes back as an ApiResult:
      - a reply the backend could not encode as JSON -> data=None
      - a connection-level failure -> ok=False, status=0, data={"detail": ...}
    """

    def __init__(
        self,
        base_url: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or CONFIG.API_BASE_URL).rstrip("/")
        # an injected session is used as is; otherwise each thread gets its own
        self._shared_session = session
        self._local = threading.local()
        self.timeout = timeout if timeout is not None else CONFIG.REQUEST_TIMEOUT

    @property
    def session(self):
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, body: Any = None) -> ApiResult:
        url = self.url_for(path)
        kwargs = {"headers": {"Content-Type": "application/json"}, "timeout": self.timeout}
        if body is not None:
            kwargs["json"] = body

        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return ApiResult(ok=False, status=0, data={"detail": str(e)})

        try:
            data = resp.json()
        except ValueError:
            data = None

        if not resp.ok:
            logger.warning("%s %s -> HTTP %s", method, url, resp.status_code)
        return ApiResult(ok=resp.ok, status=resp.status_code, data=data)

    def get(self, path: str) -> ApiResult:
        return self.request("GET", path)

    def post(self, path: str, body: Any = None) -> ApiResult:
        return self.request("POST", path, body)

    def put(self, path: str, body: Any = None) -> ApiResult:
        return self.request("PUT", path, body)

    def delete(self, path: str) -> ApiResult:
        return self.request("DELETE", path)

    def fetch_raw(self, path: str) -> Optional[requests.Response]:
        """Plain GET for binary payloads (PDFs). None on connection failure."""
        url = self.url_for(path)
        try:
            return self.session.request("GET", url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("GET %s failed: %s", url, e)
            return None


_client: ApiClient | None = None


def get_client() -> ApiClient:
    # FastAPI dependency; tests swap it out through app.dependency_overrides
    global _client
    if _client is None:
        _client = ApiClient()
    return _client
