from dataclasses import dataclass


@dataclass(frozen=True)
class ScheduledJob:
    """A customer job as stored by the Job Source."""

    id: str
    title: str
    prompt: str
    schedule: str
    account_id: str
    artist_account_id: str
    enabled: bool | None = None

    @property
    def is_disabled(self) -> bool:
        # enabled=None means "not set" and counts as enabled
        return self.enabled is False


@dataclass(frozen=True)
class ChatConfig:
    """Who to notify about a finished scrape and what to ask for."""

    prompt: str | None = None
    account_id: str | None = None
    room_id: str | None = None
    artist_id: str | None = None
    model: str | None = None

    @classmethod
    def from_job(cls, job: ScheduledJob) -> "ChatConfig":
        return cls(prompt=job.prompt, account_id=job.account_id, artist_id=job.artist_account_id)

    def merged_with(self, fallback: "ChatConfig") -> "ChatConfig":
        """Fill unset fields from ``fallback``."""
        return ChatConfig(
            prompt=self.prompt or fallback.prompt,
            account_id=self.account_id or fallback.account_id,
            room_id=self.room_id or fallback.room_id,
            artist_id=self.artist_id or fallback.artist_id,
            model=self.model or fallback.model,
        )
