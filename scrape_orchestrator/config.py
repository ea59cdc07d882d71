from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Recoup API (artists, socials, scraper runs)
    recoup_api_url: str = "https://api.recoupable.com"
    recoup_api_key: str | None = None
    recoup_jobs_api_url: str = "https://api.recoupable.com/api/jobs"

    # Chat summary hand-off; account/room/artist/model/prompt are fallbacks
    # used when a scheduled job cannot be resolved
    recoup_chat_api_url: str = "https://chat.recoupable.com/api/chat/generate"
    recoup_account_id: str | None = None
    recoup_room_id: str | None = None
    recoup_artist_id: str | None = None
    recoup_model: str | None = None
    recoup_prompt: str = "Draft a friendly check-in message for our customers."

    http_timeout_seconds: float = 30.0

    # Batching against the shared API
    socials_batch_size: int = 10
    socials_batch_delay_seconds: float = 1.0
    scrape_batch_size: int = 3
    scrape_batch_delay_seconds: float = 1.0
    pro_artist_limit: int = 10

    # Polling
    poll_interval_seconds: float = 10.0
    poll_concurrently: bool = True
    settle_delay_seconds: float = 10.0
    scrape_max_duration_seconds: float | None = 22 * 60

    # Events are dropped when no broker is configured
    rabbitmq_url: str | None = None

    log_level: str = "INFO"
    log_json: bool = True


settings = Settings()
