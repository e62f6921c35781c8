"""Resolve the playable episode list of an anime across file hosts."""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

from otakuflix.config.settings import settings
from otakuflix.episodes.catalog import AnimeCatalog
from otakuflix.episodes.fallback import FallbackTable
from otakuflix.episodes.merger import merge_episodes
from otakuflix.episodes.models import CanonicalEpisode
from otakuflix.metadata.tvdb_client import TVDBClient
from otakuflix.providers.filehost import fetch_episodes
from otakuflix.providers.models import RawEpisodeRecord

logger = logging.getLogger(__name__)

UNKNOWN_ANIME_NAME = "Unknown Anime"


class InvalidRequestError(ValueError):
    """The caller's input cannot be resolved (e.g. missing anime id)."""


def pair_providers(provider_names: Sequence[str], folder_ids: Sequence[str]) -> List[Tuple[str, str]]:
    """
    Pair provider names with folder ids positionally, skipping blank ids.

    Args:
        provider_names: Provider names
        folder_ids: Folder ids, parallel to provider_names

    Returns:
        List of (provider name, folder id) in input order
    """
    pairs = []
    for index, provider in enumerate(provider_names or []):
        folder_id = folder_ids[index] if index < len(folder_ids or []) else ''
        folder_id = (folder_id or '').strip()
        if not folder_id:
            logger.info(f"⚠️ Skipping provider {provider} because its folder id is empty")
            continue
        pairs.append((provider, folder_id))
    return pairs


class EpisodeResolver:
    """Fetches, merges, enriches and falls back for one anime at a time."""

    def __init__(self, tvdb_client: Optional[TVDBClient] = None, fallback: Optional[FallbackTable] = None,
                 session: Optional[requests.Session] = None, catalog: Optional[AnimeCatalog] = None,
                 max_workers: Optional[int] = None):
        """
        Initialize the resolver.

        Args:
            tvdb_client: Enrichment client; a disabled one is fine
            fallback: Static episode table
            session: Requests session shared by the file host workers. When
                omitted every request opens its own connection
            catalog: Anime catalog used when no provider info is given
            max_workers: Parallel file host requests
        """
        self.session = session
        self.tvdb_client = tvdb_client if tvdb_client is not None else TVDBClient()
        self.fallback = fallback or FallbackTable()
        self.catalog = catalog or AnimeCatalog(session=self.session)
        self.max_workers = max(1, max_workers or settings.provider_max_workers)

    def resolve_episodes(self, anime_id: str, anime_name: Optional[str],
                         provider_names: Sequence[str], folder_ids: Sequence[str]) -> List[CanonicalEpisode]:
        """
        Build the canonical episode list for an anime.

        Args:
            anime_id: Anime id, required
            anime_name: Display name used for TheTVDB lookups
            provider_names: Provider names
            folder_ids: Folder ids, parallel to provider_names

        Returns:
            Episodes sorted by number; the fallback table entry (or an empty
            list) when no provider returns anything

        Raises:
            InvalidRequestError: anime_id is missing
        """
        anime_id = self._require_anime_id(anime_id)
        anime_name = anime_name or UNKNOWN_ANIME_NAME

        try:
            logger.info(f"🔄 Fetching episodes for anime ID {anime_id} ({anime_name})")
            records = self._fetch_all(pair_providers(provider_names, folder_ids))
            episodes = merge_episodes(records)

            if not episodes:
                logger.info(f"⚠️ No episodes found from providers for anime ID {anime_id}, using fallback data")
                return self._use_fallback(anime_id)

            return self.tvdb_client.enrich_episodes(anime_name, episodes)
        except Exception as e:
            logger.error(f"❌ Error resolving episodes for anime {anime_id}: {e}", exc_info=True)
            return self._use_fallback(anime_id)

    def get_episodes(self, anime_id: str, anime_name: Optional[str] = None,
                     provider_ids: Optional[Sequence[str]] = None,
                     providers: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
        """
        Procedure exposed to the app: episodes as plain dicts.

        When provider info is omitted it is looked up in the anime catalog.

        Args:
            anime_id: Anime id, required
            anime_name: Optional display name
            provider_ids: Optional folder ids
            providers: Optional provider names, parallel to provider_ids

        Returns:
            List of episode dicts

        Raises:
            InvalidRequestError: anime_id is missing
        """
        anime_id = self._require_anime_id(anime_id)
        logger.info(f"🚀 get_episodes called for anime {anime_id}")

        if providers and provider_ids:
            logger.info(f"📋 Using provided provider info: {list(providers)} {list(provider_ids)}")
            episodes = self.resolve_episodes(anime_id, anime_name, providers, provider_ids)
        else:
            entry = self.catalog.find(anime_id)
            if entry is None:
                logger.info(f"⚠️ No catalog info for anime {anime_id}, using fallback data")
                episodes = self._use_fallback(anime_id)
            else:
                episodes = self.resolve_episodes(
                    anime_id,
                    entry.name or anime_name,
                    entry.providers,
                    entry.provider_ids
                )

        logger.info(f"✅ Found {len(episodes)} episodes for anime {anime_id}")
        return [episode.to_dict() for episode in episodes]

    def _fetch_all(self, pairs: List[Tuple[str, str]]) -> List[RawEpisodeRecord]:
        """Fetch every provider concurrently, concatenating results in input order."""
        if not pairs:
            return []

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(pairs))) as executor:
            results = list(executor.map(
                lambda pair: fetch_episodes(pair[0], pair[1], session=self.session),
                pairs
            ))

        records: List[RawEpisodeRecord] = []
        for (provider, _), episodes in zip(pairs, results):
            if episodes:
                logger.info(f"✅ Found {len(episodes)} episodes from {provider}")
                records.extend(episodes)
        return records

    def _use_fallback(self, anime_id: str) -> List[CanonicalEpisode]:
        if anime_id not in self.fallback:
            logger.info(f"⚠️ No fallback data for anime {anime_id}")
            return []
        episodes = self.fallback.get(anime_id)
        logger.info(f"📦 Serving {len(episodes)} fallback episodes for anime {anime_id}")
        return episodes

    @staticmethod
    def _require_anime_id(anime_id: Any) -> str:
        if anime_id is None or not str(anime_id).strip():
            raise InvalidRequestError("animeId is required")
        return str(anime_id).strip()
