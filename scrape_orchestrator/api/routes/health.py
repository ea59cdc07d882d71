from fastapi import APIRouter

from scrape_orchestrator.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:  # type: ignore[type-arg]
    """Liveness + broker health check."""
    rabbitmq_status = "disabled"
    if settings.rabbitmq_url:
        # RabbitMQ: a lightweight connection attempt
        try:
            import pika

            connection = pika.BlockingConnection(pika.URLParameters(settings.rabbitmq_url))
            connection.close()
            rabbitmq_status = "connected"
        except Exception as exc:
            rabbitmq_status = f"error: {exc}"

    overall = "degraded" if rabbitmq_status.startswith("error") else "healthy"

    return {
        "status": overall,
        "rabbitmq": rabbitmq_status,
        "recoup_api_url": settings.recoup_api_url,
    }
