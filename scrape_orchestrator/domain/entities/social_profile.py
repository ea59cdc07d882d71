from dataclasses import dataclass

from scrape_orchestrator.domain.enums.platform import Platform


@dataclass(frozen=True)
class SocialProfile:
    """Snapshot of one social profile linked to an artist, as read from the store."""

    social_id: str
    platform: Platform
    username: str
    profile_url: str

    @classmethod
    def from_store(
        cls,
        *,
        social_id: str,
        username: str,
        profile_url: str,
        platform: str | None = None,
    ) -> "SocialProfile":
        resolved = Platform.parse(platform)
        if resolved is Platform.UNKNOWN:
            resolved = Platform.from_url(profile_url)
        return cls(
            social_id=social_id,
            platform=resolved,
            username=username,
            profile_url=profile_url,
        )


@dataclass(frozen=True)
class WorkItem:
    """A single social profile queued for scraping on behalf of an artist."""

    artist_id: str
    social_id: str
    username: str
    profile_url: str

    @property
    def target_id(self) -> str:
        return self.social_id

    @classmethod
    def for_profile(cls, artist_id: str, profile: SocialProfile) -> "WorkItem":
        return cls(
            artist_id=artist_id,
            social_id=profile.social_id,
            username=profile.username,
            profile_url=profile.profile_url,
        )
