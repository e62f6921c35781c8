"""TheTVDB v4 client for enriching episodes with titles, synopses and thumbnails."""
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Dict, Any, List

import requests
from pydantic import BaseModel, Field

from otakuflix.config.settings import settings
from otakuflix.episodes.models import CanonicalEpisode
from otakuflix.metadata.cache import TVDBState
from otakuflix.metadata.title_parser import split_season
from otakuflix.metadata.translator import translate_text

logger = logging.getLogger(__name__)

_SOURCE_ATTRIBUTION = re.compile(r'\(Source:.*?\)')


class EpisodeDetails(BaseModel):
    """Episode metadata found on TheTVDB."""
    title: str = Field(..., description="Episode name")
    synopsis: str = Field("", description="Overview without source attribution")
    thumbnail: Optional[str] = Field(None, description="Episode image URL")


class TVDBUnauthorized(Exception):
    """The bearer token was rejected."""


def clean_synopsis(overview: Optional[str]) -> str:
    """Strip "(Source: ...)" attributions from an overview."""
    return _SOURCE_ATTRIBUTION.sub('', overview or '').strip()


class TVDBClient:
    """Client for fetching episode metadata from TheTVDB API v4."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 state: Optional[TVDBState] = None, session: Optional[requests.Session] = None,
                 max_workers: Optional[int] = None, max_pages: Optional[int] = None,
                 translate: Optional[bool] = None, timeout: Optional[float] = None):
        """
        Initialize TVDB client.

        Args:
            api_key: TheTVDB v4 API key. If None, uses settings.tvdb_api_key
            base_url: API base URL. If None, uses settings.tvdb_base_url
            state: Token and show cache shared across calls
            session: Optional requests session, shared by the lookup workers.
                When omitted every request opens its own connection
            max_workers: Concurrent episode lookups
            max_pages: Upper bound on listing pages per lookup
            translate: Translate Japanese titles/synopses after enrichment
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key if api_key is not None else settings.tvdb_api_key
        self.base_url = (base_url or settings.tvdb_base_url).rstrip('/')
        self.state = state or TVDBState()
        self.session = session or requests
        self.max_workers = max(1, max_workers or settings.tvdb_max_workers)
        self.max_pages = max_pages or settings.tvdb_max_pages
        self.translate = settings.translate_titles if translate is None else translate
        self.timeout = timeout if timeout is not None else settings.http_timeout

        self.enabled = bool(self.api_key)
        if not self.enabled:
            logger.warning("TVDB API key not configured. Episode enrichment will be disabled.")
        else:
            logger.info("TVDB client initialized")

    def authenticate(self) -> Optional[str]:
        """
        Return a bearer token, logging in if none is stored yet.

        Returns:
            Token string or None if authentication failed
        """
        if not self.enabled:
            return None

        token = self.state.token
        if token:
            return token

        try:
            logger.info("🔑 Authenticating with TVDB API")
            response = self.session.post(
                f"{self.base_url}/login",
                json={"apikey": self.api_key},
                timeout=self.timeout
            )
            if not response.ok:
                logger.error(f"❌ TVDB authentication failed: HTTP {response.status_code}")
                return None

            data = response.json() or {}
            token = (data.get('data') or {}).get('token')
            if not token:
                logger.error("❌ TVDB authentication returned no token")
                return None

            self.state.set_token(token)
            logger.info("✅ TVDB authentication successful")
            return token
        except requests.RequestException as e:
            logger.error(f"❌ TVDB authentication request failed: {e}")
            return None
        except (ValueError, AttributeError) as e:
            logger.error(f"❌ TVDB authentication returned an unexpected body: {e}")
            return None

    def resolve_show(self, display_name: str, token: str) -> Optional[str]:
        """
        Resolve an anime display name to a TheTVDB series id.

        A trailing "Season N" is stripped before searching. The
        case-insensitive exact name match wins, otherwise the first result.

        Args:
            display_name: Anime name, possibly with a season suffix
            token: Bearer token

        Returns:
            Series id or None if not found
        """
        base_name, season = split_season(display_name)
        if not base_name:
            return None

        cached = self.state.cache.get(base_name, season)
        if cached:
            logger.info(f"✅ Found cached TVDB id for {base_name}: {cached}")
            return cached

        try:
            logger.info(f"🔍 Searching TVDB for anime: '{base_name}' (Season {season})")
            data = self._get("/search", token, params={"query": base_name, "type": "series"})
        except TVDBUnauthorized:
            return None
        except requests.RequestException as e:
            logger.error(f"❌ TVDB search failed for '{base_name}': {e}")
            return None
        except ValueError as e:
            logger.error(f"❌ TVDB search returned invalid JSON for '{base_name}': {e}")
            return None

        results = data.get('data') if isinstance(data, dict) else None
        if not isinstance(results, list) or not results:
            logger.info(f"⚠️ No TVDB results found for '{base_name}'")
            return None

        results = [r for r in results if isinstance(r, dict)]
        best_match = next(
            (r for r in results if str(r.get('name', '')).lower() == base_name.lower()),
            results[0] if results else None
        )
        show_id = best_match.get('tvdb_id') if best_match else None
        if not show_id:
            logger.info(f"⚠️ No suitable TVDB match found for '{base_name}'")
            return None

        show_id = str(show_id)
        logger.info(f"✅ Found TVDB match for '{base_name}': {best_match.get('name')} (ID: {show_id})")
        self.state.cache.set(base_name, season, show_id)
        return show_id

    def get_episode_details(self, show_id: str, season: int, number: int, token: str) -> Optional[EpisodeDetails]:
        """
        Page through a series' episodes looking for one season/episode pair.

        Args:
            show_id: TheTVDB series id
            season: Season number
            number: Episode number within the season
            token: Bearer token

        Returns:
            EpisodeDetails or None if not found or on error
        """
        page = 0
        while page < self.max_pages:
            try:
                data = self._get(f"/series/{show_id}/episodes/default", token, params={"page": page})
            except TVDBUnauthorized:
                return None
            except (requests.RequestException, ValueError) as e:
                logger.error(f"❌ TVDB episode fetch failed for {show_id} page {page}: {e}")
                return None

            episodes = self._page_episodes(data)
            if not episodes:
                logger.debug(f"⚠️ No episodes on page {page} for show ID {show_id}")
                break

            found = next(
                (ep for ep in episodes if ep.get('seasonNumber') == season and ep.get('number') == number),
                None
            )
            if found:
                logger.debug(f"✅ Found S{season}E{number} on page {page}: '{found.get('name')}'")
                return EpisodeDetails(
                    title=found.get('name') or f"Episode {number}",
                    synopsis=clean_synopsis(found.get('overview')),
                    thumbnail=found.get('image') or None,
                )

            links = data.get('links') if isinstance(data, dict) else None
            if not isinstance(links, dict) or not links.get('next'):
                break
            page += 1

        logger.debug(f"⚠️ Episode S{season}E{number} not found for show ID {show_id}")
        return None

    def enrich_episodes(self, anime_name: str, episodes: List[CanonicalEpisode]) -> List[CanonicalEpisode]:
        """
        Overwrite titles, synopses and thumbnails with TheTVDB data where found.

        Episodes without a match keep their values. Any failure returns the
        input unchanged.

        Args:
            anime_name: Anime display name, possibly with a season suffix
            episodes: Merged episodes

        Returns:
            The same episode list, enriched in place where possible
        """
        if not self.enabled or not episodes:
            return episodes

        try:
            logger.info(f"🔍 Attempting to fetch TVDB data for anime '{anime_name}'")
            token = self.authenticate()
            if not token:
                logger.info("⚠️ Failed to authenticate with TVDB, keeping provider data")
                return episodes

            show_id = self.resolve_show(anime_name, token)
            if not show_id:
                logger.info("⚠️ Failed to find anime on TVDB, keeping provider data")
                return episodes

            _, season = split_season(anime_name)
            details = self._lookup_all(show_id, season, episodes, token)

            for episode in episodes:
                found = details.get(episode.number)
                if not found:
                    continue
                episode.title = found.title or episode.title
                episode.synopsis = found.synopsis or episode.synopsis
                episode.thumbnail = found.thumbnail or episode.thumbnail
                logger.info(f"✅ Enhanced episode {episode.number} with TVDB data: '{episode.title}'")

            return episodes
        except Exception as e:
            logger.error(f"❌ Error fetching TVDB data: {e}", exc_info=True)
            return episodes

    def _lookup_all(self, show_id: str, season: int, episodes: List[CanonicalEpisode], token: str) -> Dict[int, EpisodeDetails]:
        numbers = sorted({ep.number for ep in episodes if ep.number > 0})
        if not numbers:
            return {}

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(numbers))) as executor:
            results = executor.map(lambda n: self._lookup_one(show_id, season, n, token), numbers)
            details = {n: d for n, d in zip(numbers, results) if d}

        logger.info(f"📋 TVDB matched {len(details)}/{len(numbers)} episodes")
        return details

    def _lookup_one(self, show_id: str, season: int, number: int, token: str) -> Optional[EpisodeDetails]:
        try:
            details = self.get_episode_details(show_id, season, number, token)
        except Exception as e:
            logger.error(f"❌ Error fetching details for episode {number}: {e}")
            return None
        if details and self.translate:
            details = EpisodeDetails(
                title=translate_text(details.title, session=self.session),
                synopsis=translate_text(details.synopsis, session=self.session),
                thumbnail=details.thumbnail,
            )
        return details

    def _get(self, path: str, token: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Authenticated GET returning decoded JSON.

        Raises:
            TVDBUnauthorized: token rejected (it is cleared from state)
            requests.RequestException: network error or non-2xx status
            ValueError: invalid JSON
        """
        response = self.session.get(
            f"{self.base_url}{path}",
            headers={"Authorization": f"Bearer {token}"},
            params=params,
            timeout=self.timeout
        )
        if response.status_code == 401:
            logger.warning("⚠️ TVDB token rejected, it will be renewed on the next call")
            self.state.invalidate_token(token)
            raise TVDBUnauthorized(path)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _page_episodes(data: Any) -> List[Dict[str, Any]]:
        if not isinstance(data, dict):
            return []
        body = data.get('data')
        if not isinstance(body, dict):
            return []
        episodes = body.get('episodes')
        if not isinstance(episodes, list):
            return []
        return [ep for ep in episodes if isinstance(ep, dict)]
