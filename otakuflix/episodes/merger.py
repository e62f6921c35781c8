"""Merge raw provider records into canonical per-episode entries."""
import logging
from typing import Dict, Iterable, List

from otakuflix.episodes.models import CanonicalEpisode, ServerInfo
from otakuflix.providers.models import RawEpisodeRecord

logger = logging.getLogger(__name__)


def merge_episodes(records: Iterable[RawEpisodeRecord]) -> List[CanonicalEpisode]:
    """
    Group raw records by episode number, combining their servers.

    The first record seen for a number provides id, title and the primary
    server. Later records add a server when the (provider, file_code) pair
    is new, and only fill thumbnail/synopsis if still unset.

    Args:
        records: Raw records in provider processing order

    Returns:
        Canonical episodes sorted by number
    """
    by_number: Dict[int, CanonicalEpisode] = {}

    for record in records:
        existing = by_number.get(record.episode_number)

        if existing is None:
            by_number[record.episode_number] = CanonicalEpisode(
                id=record.source_id,
                number=record.episode_number,
                title=record.raw_title,
                file_code=record.file_code,
                provider=record.provider_name,
                synopsis=record.synopsis,
                thumbnail=record.thumbnail_url,
                duration=record.duration_minutes,
                servers=[ServerInfo(provider=record.provider_name, file_code=record.file_code)],
            )
            continue

        if not existing.has_server(record.provider_name, record.file_code):
            existing.servers.append(ServerInfo(provider=record.provider_name, file_code=record.file_code))

        if record.thumbnail_url and not existing.thumbnail:
            existing.thumbnail = record.thumbnail_url

        if record.synopsis and not existing.synopsis:
            existing.synopsis = record.synopsis

    merged = sorted(by_number.values(), key=lambda ep: ep.number)
    logger.info(f"✅ After grouping, found {len(merged)} unique episodes")
    return merged
