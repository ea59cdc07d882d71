"""
No-op event publisher, used in tests and when no broker is configured.
"""
import structlog

from scrape_orchestrator.application.interfaces.event_publisher import EventPublisher
from scrape_orchestrator.domain.events.domain_events import DomainEvent

logger = structlog.get_logger(__name__)


class NoOpEventPublisher(EventPublisher):
    """Discards all events, logging them at debug level."""

    async def publish(self, event: DomainEvent) -> None:
        logger.debug("noop_event_discarded", event_type=type(event).__name__)
