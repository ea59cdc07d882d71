from scrape_orchestrator.domain.entities.social_profile import SocialProfile
from scrape_orchestrator.domain.enums.platform import Platform

# Platforms the scraper cannot extract data from
NON_SCRAPABLE_PLATFORMS: frozenset[Platform] = frozenset({Platform.SPOTIFY})


def is_scrapable(profile: SocialProfile) -> bool:
    """True unless the profile lives on a platform the scraper rejects."""
    return profile.platform not in NON_SCRAPABLE_PLATFORMS
