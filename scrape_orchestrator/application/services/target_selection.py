from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import structlog

from scrape_orchestrator.domain.entities.social_profile import SocialProfile, WorkItem
from scrape_orchestrator.domain.policies.scrapability import is_scrapable

logger = structlog.get_logger(__name__)


@dataclass
class TargetSelection:
    eligible: list[WorkItem] = field(default_factory=list)
    skipped: list[WorkItem] = field(default_factory=list)
    artists_without_socials: list[str] = field(default_factory=list)


def select_scrapable_targets(
    artist_ids: Sequence[str],
    socials_by_artist: Mapping[str, Sequence[SocialProfile] | None],
) -> TargetSelection:
    """Collect scrapable profiles in artist order. Non-scrapable ones are dropped for good."""
    selection = TargetSelection()

    for artist_id in artist_ids:
        socials = socials_by_artist.get(artist_id)
        if not socials:
            logger.warning("no_socials_for_artist", artist_id=artist_id)
            selection.artists_without_socials.append(artist_id)
            continue

        for social in socials:
            item = WorkItem.for_profile(artist_id, social)
            if not is_scrapable(social):
                logger.info(
                    "skipping_non_scrapable_social",
                    artist_id=artist_id,
                    social_id=social.social_id,
                    username=social.username,
                    profile_url=social.profile_url,
                    platform=social.platform.value,
                )
                selection.skipped.append(item)
                continue
            selection.eligible.append(item)

    logger.info(
        "scrape_targets_selected",
        total_artists=len(artist_ids),
        eligible=len(selection.eligible),
        skipped=len(selection.skipped),
    )
    return selection
