"""Folder listing clients for the RpmShare and Filemoon file hosts."""
import logging
import math
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel, Field, ValidationError

from otakuflix.config.settings import settings
from otakuflix.metadata.title_parser import episode_title, extract_episode_number
from otakuflix.providers.models import FileListResponse, RawEpisodeRecord, extract_files_manually

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 24


def duration_minutes(length: Any) -> int:
    """Whole minutes from a length in seconds, or the default when it is missing or unusable."""
    if isinstance(length, bool) or not isinstance(length, (int, float)):
        return DEFAULT_DURATION_MINUTES
    if not math.isfinite(length) or length <= 0:
        return DEFAULT_DURATION_MINUTES
    return int(length // 60)


class ProviderSpec(BaseModel):
    """Static description of one file host."""
    name: str = Field(..., description="Provider name as used in the anime catalog")
    id_prefix: str = Field(..., description="Prefix for RawEpisodeRecord.source_id")
    list_url: str = Field(..., description="Folder listing endpoint")
    embed_template: str = Field(..., description="Player URL with a {file_code} placeholder")
    api_key: str = Field("", description="API key sent as the 'key' query parameter")

    def embed_url(self, file_code: str) -> str:
        """Build the embeddable player URL for a file."""
        return self.embed_template.format(file_code=file_code)


KNOWN_PROVIDERS: Dict[str, ProviderSpec] = {
    "RpmShare": ProviderSpec(
        name="RpmShare",
        id_prefix="rpm",
        list_url=settings.rpmshare_api_url,
        embed_template="https://aniflix.rpmvip.com/#{file_code}",
        api_key=settings.rpmshare_api_key,
    ),
    "Filemoon": ProviderSpec(
        name="Filemoon",
        id_prefix="filemoon",
        list_url=settings.filemoon_api_url,
        embed_template="https://filemoon.in/e/{file_code}",
        api_key=settings.filemoon_api_key,
    ),
}


def get_provider(name: str) -> Optional[ProviderSpec]:
    """Look up a known provider by name (case-insensitive)."""
    if name in KNOWN_PROVIDERS:
        return KNOWN_PROVIDERS[name]
    for provider_name, spec in KNOWN_PROVIDERS.items():
        if provider_name.lower() == (name or '').strip().lower():
            return spec
    return None


def build_embed_url(provider_name: str, file_code: str) -> Optional[str]:
    """Embeddable player URL for a server, None for unknown providers or empty codes."""
    spec = get_provider(provider_name)
    if not spec or not file_code:
        return None
    return spec.embed_url(file_code)


class FileHostClient:
    """Client for one file host's folder listing API."""

    def __init__(self, spec: ProviderSpec, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        """
        Initialize the client.

        Args:
            spec: Provider description (endpoint, key, naming)
            session: Optional shared requests session
            timeout: Per-request timeout in seconds, defaults to settings.http_timeout
        """
        self.spec = spec
        self.session = session or requests
        self.timeout = timeout if timeout is not None else settings.http_timeout

    def fetch_episodes(self, folder_id: str) -> List[RawEpisodeRecord]:
        """
        Fetch and normalize every file in a folder.

        Args:
            folder_id: Provider folder id (fld_id)

        Returns:
            Raw episode records sorted by episode number; empty on any failure
        """
        name = self.spec.name
        if not self.spec.api_key:
            logger.warning(f"⚠️ No API key configured for {name}, requesting anyway")

        try:
            logger.info(f"🔍 Fetching {name} episodes for folder {folder_id}")
            response = self.session.get(
                self.spec.list_url,
                params={"key": self.spec.api_key, "fld_id": folder_id},
                timeout=self.timeout
            )
            if not response.ok:
                logger.error(f"❌ {name} API error: HTTP {response.status_code}")
                return []
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"❌ {name} request failed: {e}")
            return []
        except ValueError as e:
            logger.error(f"❌ {name} returned invalid JSON: {e}")
            return []

        if not isinstance(payload, dict):
            logger.error(f"❌ {name} returned an unexpected payload: {type(payload).__name__}")
            return []

        if payload.get('status') == "error" or payload.get('msg') != "OK":
            logger.error(f"❌ {name} API error: {payload.get('message') or payload.get('msg')}")
            return []

        files = self._parse_files(payload)
        if not files:
            logger.info(f"⚠️ No files found in {name} folder {folder_id}")
            return []

        episodes = []
        for entry in files:
            try:
                episodes.append(self._to_record(entry))
            except (TypeError, ValueError) as e:
                logger.warning(f"⚠️ Skipping {name} file {entry.get('title')!r}: {e}")
        episodes.sort(key=lambda ep: ep.episode_number)
        logger.info(f"✅ Found {len(episodes)} episodes from {name}")
        return episodes

    def _parse_files(self, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Validate the envelope strictly, falling back to manual extraction.

        Returns:
            List of dicts with keys: title, file_code, thumbnail, length
        """
        try:
            data = FileListResponse.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"⚠️ {self.spec.name} response failed validation, attempting manual extraction: {e.error_count()} errors")
            return extract_files_manually(payload)

        if not data.result or not data.result.files:
            return []

        return [
            {
                'title': f.title,
                'file_code': f.file_code,
                'thumbnail': f.thumbnail or None,
                'length': f.length,
            }
            for f in data.result.files
        ]

    def _to_record(self, entry: Dict[str, Any]) -> RawEpisodeRecord:
        raw_title = entry.get('title') or ''
        file_code = entry.get('file_code') or ''
        if not file_code:
            logger.warning(f"⚠️ {self.spec.name} file '{raw_title}' has no file code, keeping it with an empty code")

        number = extract_episode_number(raw_title)
        duration = duration_minutes(entry.get('length'))

        record = RawEpisodeRecord(
            source_id=f"{self.spec.id_prefix}-{file_code or 'unknown'}",
            raw_title=episode_title(raw_title, number),
            file_code=file_code,
            provider_name=self.spec.name,
            episode_number=number,
            thumbnail_url=entry.get('thumbnail'),
            duration_minutes=duration,
        )
        logger.debug(f"📺 {record}")
        return record


def fetch_episodes(provider_name: str, folder_id: str, session: Optional[requests.Session] = None) -> List[RawEpisodeRecord]:
    """
    Fetch raw episode records from a provider by name.

    Args:
        provider_name: One of KNOWN_PROVIDERS
        folder_id: Provider folder id
        session: Optional shared requests session

    Returns:
        Raw episode records, empty for unknown providers or failures
    """
    spec = get_provider(provider_name)
    if not spec:
        logger.warning(f"⚠️ Unknown provider '{provider_name}', skipping")
        return []
    return FileHostClient(spec, session=session).fetch_episodes(folder_id)
