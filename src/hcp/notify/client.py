"""
HTTP client for the health check ping endpoint.

Every call is a single attempt. Failures are raised as NotificationError and
the caller decides whether they matter.
"""

import logging
from typing import Optional

import requests

from ..models.config import NotifyConfig
from ..validation import NotificationError

logger = logging.getLogger(__name__)


class HealthCheckClient:
    """
    Pings `<base_url>/<check_id>` and its `/start` and `/fail` variants.
    """

    def __init__(
        self,
        check_id: str,
        config: Optional[NotifyConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            check_id: Validated health check id
            config: Endpoint settings, defaults to NotifyConfig()
            session: Session to reuse; one is created (and owned) otherwise
        """
        self.check_id = check_id
        self.config = config or NotifyConfig()
        self._owns_session = session is None
        self.session = session or requests.Session()
        if self.config.user_agent:
            self.session.headers["User-Agent"] = self.config.user_agent

    @property
    def base_url(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/{self.check_id}"

    @property
    def start_url(self) -> str:
        return f"{self.base_url}/start"

    @property
    def success_url(self) -> str:
        return self.base_url

    @property
    def failure_url(self) -> str:
        return f"{self.base_url}/fail"

    def start(self) -> None:
        """
        Signal that the job has started.

        Raises:
            NotificationError: If the ping failed
        """
        self._request("GET", self.start_url)

    def success(self, body: str) -> None:
        """Report a successful run with body as the log text."""
        self._request("POST", self.success_url, body)

    def failure(self, body: str) -> None:
        """Report a failed run with body as the log text."""
        self._request("POST", self.failure_url, body)

    def finish(self, body: str, success: bool) -> None:
        """Send the final ping to the success or failure endpoint."""
        if success:
            self.success(body)
        else:
            self.failure(body)

    def _request(self, method: str, url: str, body: Optional[str] = None) -> None:
        kwargs = {"timeout": self.config.timeout_seconds}
        if body is not None:
            kwargs["data"] = body.encode("utf-8")
            kwargs["headers"] = {"Content-Type": "text/plain; charset=utf-8"}

        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NotificationError(f"{method} {url} failed: {e}", url=url) from e
        logger.debug(f"{method} {url} -> {response.status_code}")

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
