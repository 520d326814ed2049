"""Client for the document extraction service.

The service turns a PDF or spreadsheet into an ordered list of pricing rows.
This module owns the upload limits and the retry policy around it; the
comparison engine only ever sees the resulting ContractItem sequences.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import httpx

from contract_compare.config.settings import DEFAULT_ACCEPTED_SUFFIXES
from contract_compare.contracts.models import ContractItem
from contract_compare.errors import ExtractionError, UnsupportedFileError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({408, 425, 429, 500, 502, 503, 504})

_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
}


def _error_from_response(response: httpx.Response) -> ExtractionError:
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}
    message = body.get("error") or f"Extraction request failed ({response.status_code})"
    retryable = body.get("retryable")
    if retryable is None:
        retryable = response.status_code in RETRYABLE_STATUS_CODES
    return ExtractionError(
        str(message),
        retryable=bool(retryable),
        error_type=body.get("errorType"),
        status=response.status_code,
    )


def parse_items(payload: Any) -> List[ContractItem]:
    """Accept either a bare list of rows or an object carrying them under ``items``.

    An object without ``items`` is never read as an empty contract: an error
    body is raised with its own retry hint, anything else as a bad payload.
    """
    if isinstance(payload, dict):
        if "items" not in payload:
            if "error" in payload:
                raise ExtractionError(
                    str(payload["error"]),
                    retryable=bool(payload.get("retryable", False)),
                    error_type=payload.get("errorType"),
                )
            raise ExtractionError("Extraction response has no 'items' field", error_type="bad_payload")
        rows = payload["items"]
    else:
        rows = payload
    if not isinstance(rows, list):
        raise ExtractionError("Extraction response does not contain a list of items", error_type="bad_payload")
    items: List[ContractItem] = []
    for position, row in enumerate(rows):
        if not isinstance(row, dict):
            raise ExtractionError(
                f"Extraction item {position} is not an object", error_type="bad_payload"
            )
        items.append(ContractItem.from_dict(row))
    return items


class ExtractionClient(AbstractAsyncContextManager["ExtractionClient"]):
    """Thin async wrapper around the extraction endpoint with bounded retries."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 120.0,
        max_retries: int = 3,
        backoff_base: float = 1.0,
        backoff_max: float = 30.0,
        max_file_size: int = 10 * 1024 * 1024,
        accepted_suffixes: Iterable[str] = DEFAULT_ACCEPTED_SUFFIXES,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        default_headers = {
            "Accept": "application/json",
            "User-Agent": "contract-compare/0.1.0",
        }
        if headers:
            default_headers.update(headers)
        self._client = httpx.AsyncClient(timeout=timeout, headers=default_headers)
        self._endpoint = f"{base_url.rstrip('/')}/extract"
        self._max_retries = max_retries
        self._backoff_base = backoff_base
        self._backoff_max = backoff_max
        self._max_file_size = max_file_size
        self._accepted_suffixes = tuple(suffix.lower() for suffix in accepted_suffixes)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aexit__(self, exc_type, exc, exc_tb) -> None:
        await self.aclose()

    def retry_delay(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (0-based): exponential, capped."""
        return min(self._backoff_base * (2**attempt), self._backoff_max)

    def validate_file(self, path: Path) -> None:
        if not path.is_file():
            raise UnsupportedFileError(f"File not found: {path}")
        suffix = path.suffix.lower()
        if suffix not in self._accepted_suffixes:
            accepted = ", ".join(self._accepted_suffixes)
            raise UnsupportedFileError(f"Unsupported file type '{suffix}' for {path.name}; accepted: {accepted}")
        size = path.stat().st_size
        if size > self._max_file_size:
            limit_mb = self._max_file_size / (1024 * 1024)
            raise UnsupportedFileError(f"{path.name} is {size} bytes; the limit is {limit_mb:g}MB")

    async def extract(self, path: Path) -> List[ContractItem]:
        """Upload ``path`` and return its rows, retrying transient failures."""
        self.validate_file(path)
        content = path.read_bytes()
        content_type = _CONTENT_TYPES.get(path.suffix.lower(), "application/octet-stream")

        attempt = 0
        while True:
            try:
                items = await self._post(path.name, content, content_type)
            except ExtractionError as exc:
                if not exc.retryable or attempt >= self._max_retries:
                    logger.error("Extraction of %s failed after %s attempt(s): %s", path.name, attempt + 1, exc)
                    raise
                delay = self.retry_delay(attempt)
                attempt += 1
                logger.warning(
                    "Extraction of %s failed (%s); retry %s/%s in %.1fs",
                    path.name,
                    exc,
                    attempt,
                    self._max_retries,
                    delay,
                )
                await asyncio.sleep(delay)
                continue
            logger.info("Extracted %s item(s) from %s", len(items), path.name)
            return items

    async def _post(self, filename: str, content: bytes, content_type: str) -> List[ContractItem]:
        logger.debug("Uploading %s (%s bytes) to %s", filename, len(content), self._endpoint)
        try:
            response = await self._client.post(
                self._endpoint,
                files={"file": (filename, content, content_type)},
            )
        except httpx.TimeoutException as exc:
            raise ExtractionError(
                f"Extraction request timed out: {exc}", retryable=True, error_type="timeout"
            ) from exc
        except httpx.TransportError as exc:
            raise ExtractionError(
                f"Extraction service unreachable: {exc}", retryable=True, error_type="transport"
            ) from exc

        if response.status_code >= 400:
            raise _error_from_response(response)
        try:
            payload = response.json()
        except ValueError as exc:
            raise ExtractionError("Extraction service returned invalid JSON", error_type="bad_payload") from exc
        return parse_items(payload)
