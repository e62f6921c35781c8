"""File host wire schemas and raw episode records."""
import logging
import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class HostedFile(BaseModel):
    """A single file entry from a file host folder listing."""
    title: str = Field(..., description="File title as uploaded")
    file_code: str = Field(..., description="Provider playback handle")
    id: Optional[Any] = Field(None, description="Provider internal id")
    thumbnail: Optional[str] = Field(None, description="Thumbnail URL")
    length: Optional[float] = Field(None, description="Duration in seconds")
    canplay: Optional[int] = None
    views: Optional[int] = None
    uploaded: Optional[str] = None
    link: Optional[str] = None
    public: Optional[int] = None
    fld_id: Optional[int] = None


class FileListResult(BaseModel):
    """Nested ``result`` object of a folder listing."""
    results_total: Optional[int] = None
    pages: Optional[int] = None
    files: Optional[List[HostedFile]] = None


class FileListResponse(BaseModel):
    """Envelope returned by ``/api/file/list``."""
    msg: Optional[str] = None
    status: Optional[Any] = None
    message: Optional[str] = None
    result: Optional[FileListResult] = None


class RawEpisodeRecord(BaseModel):
    """One file from one provider, normalized into an episode candidate."""
    model_config = ConfigDict(frozen=True)

    source_id: str = Field(..., description="Provider prefix + file code, e.g. 'rpm-abc123'")
    raw_title: str = Field(..., description="Cleaned title, or 'Episode N'")
    file_code: str = Field(..., description="Provider playback handle, may be empty")
    provider_name: str = Field(..., description="Known provider name")
    episode_number: int = Field(0, description="Episode number, 0 when unknown")
    thumbnail_url: Optional[str] = Field(None, description="Thumbnail URL")
    duration_minutes: Optional[int] = Field(None, description="Duration in minutes")
    synopsis: Optional[str] = Field(None, description="Synopsis, file hosts rarely provide one")

    def __str__(self) -> str:
        return f"{self.provider_name} #{self.episode_number}: {self.raw_title} [{self.file_code}]"


def _as_seconds(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        try:
            seconds = float(value)
        except ValueError:
            return None
    else:
        return None
    return seconds if math.isfinite(seconds) else None


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


def extract_files_manually(payload: Any) -> List[Dict[str, Any]]:
    """
    Best-effort extraction of file entries when strict validation fails.

    Only ``result.files`` is inspected. Each entry is coerced into the
    fields the episode mapping needs; entries that are not objects are
    skipped.

    Args:
        payload: Decoded JSON body

    Returns:
        List of dicts with keys: title, file_code, thumbnail, length
    """
    if not isinstance(payload, dict):
        return []
    result = payload.get('result')
    if not isinstance(result, dict):
        return []
    files = result.get('files')
    if not isinstance(files, list):
        return []

    extracted = []
    for entry in files:
        if not isinstance(entry, dict):
            logger.debug(f"Skipping non-object file entry: {entry!r}")
            continue
        title = entry.get('title')
        file_code = entry.get('file_code')
        extracted.append({
            'title': str(title) if title is not None else '',
            'file_code': str(file_code) if file_code is not None else '',
            'thumbnail': _as_optional_str(entry.get('thumbnail')),
            'length': _as_seconds(entry.get('length')),
        })
    return extracted
