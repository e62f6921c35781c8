"""Anime catalog lookup for provider names and folder ids."""
import logging
from typing import List, Optional

import requests
from pydantic import BaseModel, Field, ValidationError

from otakuflix.config.settings import settings

logger = logging.getLogger(__name__)


class CatalogEntry(BaseModel):
    """One anime from the catalog feed."""
    aid: int = Field(..., description="Anime id")
    name: str = Field("", description="Display name")
    cname: str = Field("", description="Comma-separated provider names")
    cid: str = Field("", description="Comma-separated folder ids, parallel to cname")

    @property
    def providers(self) -> List[str]:
        return [p.strip() for p in self.cname.split(",")] if self.cname else []

    @property
    def provider_ids(self) -> List[str]:
        return [c.strip() for c in self.cid.split(",")] if self.cid else []


class AnimeCatalog:
    """Reads the anime catalog feed to find where an anime is hosted."""

    def __init__(self, url: Optional[str] = None, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.url = url or settings.catalog_url
        self.session = session or requests
        self.timeout = timeout if timeout is not None else settings.http_timeout

    def find(self, anime_id: str) -> Optional[CatalogEntry]:
        """
        Find an anime in the catalog.

        Args:
            anime_id: Anime id as a string

        Returns:
            CatalogEntry or None if the catalog is unavailable or has no such anime
        """
        try:
            logger.info("🔍 Fetching anime catalog to get provider info")
            response = self.session.get(self.url, timeout=self.timeout)
            if not response.ok:
                logger.error(f"❌ Failed to fetch anime catalog: HTTP {response.status_code}")
                return None
            items = response.json()
        except requests.RequestException as e:
            logger.error(f"❌ Anime catalog request failed: {e}")
            return None
        except ValueError as e:
            logger.error(f"❌ Anime catalog is not valid JSON: {e}")
            return None

        if not isinstance(items, list):
            logger.error("❌ Anime catalog is not a list")
            return None

        for item in items:
            if not isinstance(item, dict) or str(item.get('aid')) != str(anime_id):
                continue
            try:
                entry = CatalogEntry.model_validate(item)
            except ValidationError as e:
                logger.error(f"❌ Catalog entry for anime {anime_id} is malformed: {e.error_count()} errors")
                return None
            logger.info(f"📋 Providers for anime {anime_id}: {entry.providers} -> {entry.provider_ids}")
            return entry

        logger.warning(f"⚠️ Anime with ID {anime_id} not found in catalog")
        return None
