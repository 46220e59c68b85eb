from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, Optional

import requests

from .const import DEFAULT_TIMEOUT, ENDPOINT_RESTART, ENDPOINT_SYSTEM_INFO
from .exceptions import HttpStatusFailure, ResponseDecodeFailure, TransportFailure

_LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass
class Client:
    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    session: Optional[requests.Session] = None

    def _s(self) -> requests.Session:
        if self.session is None:
            self.session = requests.Session()
        return self.session

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url.rstrip('/')}{path}"

    def _request(self, operation: str, method: str, path: str) -> requests.Response:
        url = self._url(path)
        _LOGGER.debug("%s %s (timeout=%ss)", method, url, self.timeout)
        try:
            r = self._s().request(method, url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportFailure(f"{operation} request to {url} failed: {e}") from e
        _LOGGER.debug("%s %s -> HTTP %s", method, url, r.status_code)
        if not 200 <= r.status_code < 300:
            raise HttpStatusFailure(operation, r.status_code)
        return r

    def get_system_info(self) -> Dict[str, Any]:
        r = self._request("status", "GET", ENDPOINT_SYSTEM_INFO)
        try:
            return r.json()
        except ValueError as e:
            raise ResponseDecodeFailure(f"Device returned invalid JSON: {e}") from e

    def restart(self) -> None:
        self._request("restart", "POST", ENDPOINT_RESTART)
