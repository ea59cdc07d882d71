"""
RabbitMQ event publisher.

Uses pika in a thread-pool executor so blocking I/O doesn't stall the
asyncio event loop. A new connection is opened per publish call.
"""
import asyncio
import json
from functools import partial

import pika
import structlog

from scrape_orchestrator.application.interfaces.event_publisher import EventPublisher
from scrape_orchestrator.domain.events.domain_events import (
    DomainEvent,
    ScrapeOutcomeRecordedEvent,
    ScrapeRunFinishedEvent,
    ScrapeRunStartedEvent,
)

logger = structlog.get_logger(__name__)

EXCHANGE_NAME = "scrape-orchestrator.events"


def _event_to_routing_key(event: DomainEvent) -> str:
    if isinstance(event, ScrapeRunStartedEvent):
        return "scrape.run.started"
    if isinstance(event, ScrapeRunFinishedEvent):
        return f"scrape.run.{event.status.value.lower()}"
    if isinstance(event, ScrapeOutcomeRecordedEvent):
        return "scrape.outcome.recorded"
    return "event.unknown"


def _serialise_event(event: DomainEvent) -> str:
    payload: dict = {  # type: ignore[type-arg]
        "event_type": _event_to_routing_key(event),
        "event_id": str(event.event_id),
        "occurred_at": event.occurred_at.isoformat(),
    }

    if isinstance(event, ScrapeRunStartedEvent):
        payload.update(
            {
                "run_id": event.run_id,
                "dataset_id": event.dataset_id,
                "artist_id": event.artist_id,
                "social_id": event.social_id,
            }
        )
    elif isinstance(event, ScrapeRunFinishedEvent):
        payload.update(
            {
                "run_id": event.run_id,
                "dataset_id": event.dataset_id,
                "status": event.status.value,
                "record_count": event.record_count,
            }
        )
    elif isinstance(event, ScrapeOutcomeRecordedEvent):
        payload.update(
            {
                "target": event.target,
                "total_artists": event.total_artists,
                "total_runs": event.total_runs,
                "succeeded": event.succeeded,
                "failed": event.failed,
                "start_failures": event.start_failures,
            }
        )

    return json.dumps(payload, default=str)


def _blocking_publish(rabbitmq_url: str, routing_key: str, body: str) -> None:
    connection = pika.BlockingConnection(pika.URLParameters(rabbitmq_url))
    try:
        channel = connection.channel()
        channel.exchange_declare(
            exchange=EXCHANGE_NAME, exchange_type="topic", durable=True
        )
        channel.basic_publish(
            exchange=EXCHANGE_NAME,
            routing_key=routing_key,
            body=body.encode(),
            properties=pika.BasicProperties(
                delivery_mode=pika.DeliveryMode.Persistent,
                content_type="application/json",
            ),
        )
    finally:
        connection.close()


class RabbitMQPublisher(EventPublisher):
    """Publishes scrape events to a RabbitMQ topic exchange."""

    def __init__(self, rabbitmq_url: str) -> None:
        self._url = rabbitmq_url

    async def publish(self, event: DomainEvent) -> None:
        routing_key = _event_to_routing_key(event)
        body = _serialise_event(event)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(_blocking_publish, self._url, routing_key, body),
            )
            logger.debug("event_published", routing_key=routing_key, event_id=str(event.event_id))
        except Exception as exc:
            # A lost event must not fail the scrape that produced it
            logger.error(
                "failed_to_publish_event",
                routing_key=routing_key,
                error=str(exc),
            )
