"""Canonical episode data models."""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ServerInfo(BaseModel):
    """One playable source for an episode."""
    provider: str = Field(..., description="Provider name")
    file_code: str = Field(..., description="Provider playback handle")

    def key(self) -> tuple:
        return (self.provider, self.file_code)


class CanonicalEpisode(BaseModel):
    """An episode merged across providers, keyed by its number."""
    id: str = Field(..., description="Source id of the first contributing file")
    number: int = Field(..., description="Episode number, the merge key")
    title: str = Field(..., description="Display title")
    file_code: str = Field("", description="File code of the first contributing server")
    provider: str = Field("", description="Provider of the first contributing server")
    synopsis: Optional[str] = Field(None, description="Episode synopsis")
    thumbnail: Optional[str] = Field(None, description="Thumbnail URL")
    duration: Optional[int] = Field(None, description="Duration in minutes")
    servers: List[ServerInfo] = Field(default_factory=list, description="Alternate servers in provider order")

    def has_server(self, provider: str, file_code: str) -> bool:
        return any(s.key() == (provider, file_code) for s in self.servers)

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape consumed by the app: optional fields are omitted when unset."""
        return self.model_dump(exclude_none=True)
