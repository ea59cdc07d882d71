from enum import Enum
from urllib.parse import urlparse


# Host (without www./m./open. prefixes) -> platform
_HOST_PLATFORMS: dict[str, str] = {
    "instagram.com": "INSTAGRAM",
    "tiktok.com": "TIKTOK",
    "twitter.com": "TWITTER",
    "x.com": "TWITTER",
    "youtube.com": "YOUTUBE",
    "youtu.be": "YOUTUBE",
    "facebook.com": "FACEBOOK",
    "threads.net": "THREADS",
    "spotify.com": "SPOTIFY",
}

_HOST_PREFIXES = ("www.", "m.", "open.", "mobile.")


class Platform(str, Enum):
    """Social platforms an artist profile can live on."""

    INSTAGRAM = "INSTAGRAM"
    TIKTOK = "TIKTOK"
    TWITTER = "TWITTER"
    YOUTUBE = "YOUTUBE"
    FACEBOOK = "FACEBOOK"
    THREADS = "THREADS"
    SPOTIFY = "SPOTIFY"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_url(cls, url: str | None) -> "Platform":
        """Classify a profile URL by host. Never raises."""
        if not url:
            return cls.UNKNOWN
        parsed = urlparse(url if "://" in url else f"https://{url}")
        host = (parsed.hostname or "").lower()
        for prefix in _HOST_PREFIXES:
            if host.startswith(prefix):
                host = host[len(prefix):]
                break
        name = _HOST_PLATFORMS.get(host)
        return cls(name) if name else cls.UNKNOWN

    @classmethod
    def parse(cls, value: str | None) -> "Platform":
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.upper())
        except ValueError:
            return cls.UNKNOWN
