"""HTTP adapter that hands scrape summaries to the Recoup Chat API."""
import time
from typing import Any

import httpx
import structlog

from scrape_orchestrator.application.interfaces.scrape_collaborators import SummaryNotifier
from scrape_orchestrator.config import settings
from scrape_orchestrator.domain.entities.job import ChatConfig
from scrape_orchestrator.infrastructure.external_services.recoup_schemas import ChatResponseSchema

logger = structlog.get_logger(__name__)


def build_chat_body(config: ChatConfig, *, now_ms: int | None = None) -> dict[str, Any]:
    message_id = f"msg-{now_ms if now_ms is not None else int(time.time() * 1000)}"
    body: dict[str, Any] = {
        "messages": [
            {
                "id": message_id,
                "role": "user",
                "parts": [{"type": "text", "text": config.prompt or ""}],
            }
        ],
        "accountId": config.account_id,
    }
    if config.room_id:
        body["roomId"] = config.room_id
    if config.artist_id:
        body["artistId"] = config.artist_id
    if config.model:
        body["model"] = config.model
    return body


class ChatClient(SummaryNotifier):
    """Fire-and-forget: failures are logged, never raised."""

    def __init__(
        self,
        api_url: str = settings.recoup_chat_api_url,
        timeout: float = settings.http_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url
        self._timeout = timeout
        self._transport = transport

    async def send_summary(self, config: ChatConfig) -> None:
        if not config.account_id:
            logger.error("chat_summary_missing_account_id")
            return

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self._api_url,
                    json=build_chat_body(config),
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                parsed = ChatResponseSchema.model_validate(response.json())
            except httpx.HTTPStatusError as exc:
                logger.error(
                    "chat_api_error",
                    status_code=exc.response.status_code,
                    response=exc.response.text[:500],
                )
                return
            except Exception as exc:
                logger.error("chat_api_call_failed", error=str(exc))
                return

        logger.info(
            "chat_api_response",
            account_id=config.account_id,
            finish_reason=parsed.finish_reason,
            usage=parsed.usage,
            reasoning_text=parsed.reasoning_text,
            text_preview=parsed.combined_text()[:500],
        )
