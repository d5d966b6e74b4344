"""HTTP-backed medication store talking to the hospital catalog service."""

from __future__ import annotations

import time
from typing import Any

import httpx

from medprice.domain.medication import MedicationRecord
from medprice.runtime.logging import get_logger
from medprice.runtime.medication_store import StoredRow, StoreError, record_to_row

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF = 0.5


class HttpMedicationStore:
    """
    Store adapter for a catalog API exposing ``/medications/{item_code}``.

    Transport failures (timeouts, refused connections) are retried for the one
    record being written; HTTP error statuses are not retried.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff: float = DEFAULT_BACKOFF,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.max_attempts = max(1, max_attempts)
        self.backoff = backoff
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpMedicationStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        last_error: httpx.TransportError | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return self._client.request(method, url, **kwargs)
            except httpx.TransportError as e:
                last_error = e
                logger.warning(
                    "Catalog request %s %s failed (attempt %d/%d): %s",
                    method,
                    url,
                    attempt,
                    self.max_attempts,
                    e,
                )
                if attempt < self.max_attempts and self.backoff > 0:
                    time.sleep(self.backoff * attempt)
        raise StoreError(f"Catalog service unreachable for {method} {url}: {last_error}") from last_error

    @staticmethod
    def _check(response: httpx.Response, action: str, item_code: str) -> None:
        if response.is_success:
            return
        logger.error("Catalog %s failed for %s: %s - %s", action, item_code, response.status_code, response.text)
        raise StoreError(f"Catalog {action} failed for {item_code}: HTTP {response.status_code}")

    def get(self, item_code: str) -> StoredRow | None:
        response = self._request("GET", f"/medications/{item_code}")
        if response.status_code == 404:
            return None
        self._check(response, "lookup", item_code)
        try:
            return response.json()
        except ValueError as exc:
            raise StoreError(f"Catalog lookup for {item_code} returned invalid JSON: {exc}") from exc

    def exists(self, item_code: str) -> bool:
        return self.get(item_code) is not None

    def insert(self, record: MedicationRecord) -> None:
        response = self._request("POST", "/medications", json=record_to_row(record))
        self._check(response, "insert", record.item_code)

    def upsert_by_code(self, record: MedicationRecord) -> None:
        response = self._request("PUT", f"/medications/{record.item_code}", json=record_to_row(record))
        self._check(response, "upsert", record.item_code)
