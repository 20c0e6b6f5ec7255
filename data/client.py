"""HTTP client for the upstream workflow endpoints.

The three datasets are fetched concurrently and merged only once all of them
have resolved. A failed dataset is reported and replaced by an empty list so
the rest of the dashboard keeps working.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import requests

from config.defaults import (
    API_BASE_URL, CAPACITY_ENDPOINT, OPTIMAL_SITES_ENDPOINT, TRAVEL_TIME_ENDPOINT,
    FETCH_RETRIES, RETRY_DELAY_SECONDS, REQUEST_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


class DataFetchError(Exception):
    """An endpoint still failed after all retries. Safe to retry later."""

    def __init__(self, endpoint: str, attempts: int, cause: Exception):
        super().__init__(f"{endpoint} failed after {attempts} attempt(s): {cause}")
        self.endpoint = endpoint
        self.attempts = attempts
        self.cause = cause


@dataclass
class FetchResult:
    payloads: Dict[str, object] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


class SchoolDataClient:
    """Client for the capacity, optimal-site and travel-time workflows.

    Each request opens its own session so the fan-out threads never share one.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        retries: int = FETCH_RETRIES,
        retry_delay: float = RETRY_DELAY_SECONDS,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self.base_url = base_url.rstrip("/")
        self.retries = retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self.session_factory = session_factory

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint}"

    def post_json(self, endpoint: str, payload: Optional[dict] = None):
        """POST and decode JSON, retrying with a linearly growing delay."""
        url = self._url(endpoint)
        attempts = self.retries + 1
        last_error: Optional[Exception] = None

        session = self.session_factory()
        try:
            for attempt in range(1, attempts + 1):
                try:
                    response = session.post(url, json=payload, timeout=self.timeout)
                    response.raise_for_status()
                    return response.json()
                except (requests.RequestException, ValueError) as e:
                    last_error = e
                    if attempt < attempts:
                        logger.warning(
                            "Request to %s failed (%s); retrying, %d attempt(s) left",
                            endpoint, e, attempts - attempt,
                        )
                        time.sleep(self.retry_delay * attempt)
        finally:
            session.close()

        logger.error("Giving up on %s after %d attempt(s)", endpoint, attempts)
        raise DataFetchError(endpoint, attempts, last_error)

    def get_capacity_analysis(self):
        return self.post_json(CAPACITY_ENDPOINT)

    def get_optimal_locations(self):
        return self.post_json(OPTIMAL_SITES_ENDPOINT)

    def get_travel_time_heatmap(self):
        return self.post_json(TRAVEL_TIME_ENDPOINT)

    def fetch_all(self) -> FetchResult:
        """Fan out to all three endpoints and join once every call has resolved."""
        calls = {
            "capacity": self.get_capacity_analysis,
            "sites": self.get_optimal_locations,
            "travel": self.get_travel_time_heatmap,
        }
        result = FetchResult()
        with ThreadPoolExecutor(max_workers=len(calls)) as pool:
            futures = {name: pool.submit(call) for name, call in calls.items()}
            for name, future in futures.items():
                try:
                    result.payloads[name] = future.result()
                except DataFetchError as e:
                    result.payloads[name] = []
                    result.errors[name] = str(e)

        logger.info(
            "Fetched %d/%d datasets from %s",
            len(calls) - len(result.errors), len(calls), self.base_url,
        )
        return result
