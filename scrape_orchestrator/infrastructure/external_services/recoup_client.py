"""Shared HTTP plumbing for the Recoup API adapters."""
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from scrape_orchestrator.config import settings
from scrape_orchestrator.domain.results import FetchResult

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RecoupApiClient:
    """
    Thin httpx wrapper. Every call returns a FetchResult: transport errors and
    non-2xx responses become ABSENT, schema mismatches become INVALID.
    """

    def __init__(
        self,
        base_url: str = settings.recoup_api_url,
        api_key: str | None = settings.recoup_api_key,
        timeout: float = settings.http_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._headers = {"Content-Type": "application/json"}
        if api_key:
            self._headers["x-api-key"] = api_key

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def _request(
        self,
        method: str,
        url: str,
        schema: TypeAdapter[T],
        *,
        operation: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        **log_context: Any,
    ) -> FetchResult[T]:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.request(
                    method, url, params=params, json=json, headers=self._headers
                )
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPStatusError as exc:
                logger.error(
                    f"{operation}_request_failed",
                    status_code=exc.response.status_code,
                    response=exc.response.text[:500],
                    **log_context,
                )
                return FetchResult.absent(f"HTTP {exc.response.status_code}")
            except httpx.RequestError as exc:
                logger.error(f"{operation}_connection_failed", error=str(exc), **log_context)
                return FetchResult.absent(f"request failed: {exc}")
            except ValueError as exc:
                logger.error(f"{operation}_invalid_json", error=str(exc), **log_context)
                return FetchResult.invalid([{"type": "json_invalid", "msg": str(exc)}])

        try:
            return FetchResult.ok(schema.validate_python(payload))
        except ValidationError as exc:
            errors = exc.errors(include_url=False)
            logger.error(f"{operation}_invalid_response", errors=errors, **log_context)
            return FetchResult.invalid(errors)
