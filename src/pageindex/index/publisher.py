"""HTTP publishing of index documents."""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from pageindex.config import DEFAULT_INDEX_NAME
from pageindex.errors import BackendWriteError
from pageindex.index.throttle import FixedDelay, RateLimiter
from pageindex.models import IndexDocument

LOGGER = logging.getLogger(__name__)


def publish_target(index_name: str, dir_name: str, file_name: str) -> str:
    """Deterministic document address, so republishing a page overwrites it."""
    return f"{index_name}/{dir_name}/{file_name}"


class IndexPublisher:
    """Writes documents to the search backend one PUT at a time."""

    def __init__(
        self,
        base_url: str,
        *,
        index_name: str = DEFAULT_INDEX_NAME,
        limiter: RateLimiter | None = None,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.index_name = index_name
        self.limiter = limiter if limiter is not None else FixedDelay(0.1)
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def close(self) -> None:
        self.session.close()

    def url_for(self, target: str) -> str:
        return f"{self.base_url}/{quote(target)}"

    def _put(self, target: str, document: IndexDocument) -> None:
        try:
            response = self.session.put(
                self.url_for(target),
                json=document.to_payload(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise BackendWriteError(target, str(exc)) from exc

        if not response.ok:
            raise BackendWriteError(
                target,
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

    def publish(self, document: IndexDocument, dir_name: str, file_name: str) -> bool:
        """Upsert one document, then wait on the limiter.

        Write failures are logged and reported as ``False``; they never stop
        the run.
        """
        target = publish_target(self.index_name, dir_name, file_name)
        try:
            self._put(target, document)
            LOGGER.debug("Published %s", target)
            return True
        except BackendWriteError as exc:
            LOGGER.error("Index write failed for %s", exc)
            return False
        finally:
            self._throttle()

    def _throttle(self) -> None:
        try:
            self.limiter.wait()
        except KeyboardInterrupt:
            LOGGER.warning("Interrupted while throttling, continuing")
