"""Pydantic models for requests, tickets and subtitle segments."""

import mimetypes
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class PipelineStatus(str, Enum):
    """States of the client orchestration driver."""

    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


class MediaAsset(BaseModel):
    """A user-selected media file."""

    model_config = ConfigDict(frozen=True)

    name: str
    size: int
    mime_type: str
    path: Path | None = None

    @classmethod
    def from_path(cls, path: Path) -> "MediaAsset":
        """Build an asset from a local file, guessing its MIME type."""
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            size=path.stat().st_size,
            mime_type=mime_type or "application/octet-stream",
            path=path,
        )

    @property
    def stem(self) -> str:
        """Return filename without extension."""
        return Path(self.name).stem


class UploadTicket(BaseModel):
    """Pre-signed write URL plus the object path it writes to."""

    model_config = ConfigDict(populate_by_name=True)

    signed_url: str = Field(alias="signedUrl")
    file_path: str = Field(alias="filePath")


class UploadTicketRequest(BaseModel):
    """Body of an upload ticket request."""

    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(default="", alias="fileName")


class TranscriptionRequest(BaseModel):
    """Body of a transcription request."""

    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(default="", alias="filePath")
    mime_type: str = Field(default="", alias="mimeType")


class SubtitleSegment(BaseModel):
    """One timed subtitle cue; timestamps are HH:MM:SS,mmm strings."""

    start: str
    end: str
    text: str


class ErrorResponse(BaseModel):
    """Error body returned by the pipeline endpoints."""

    error: str
    details: str | None = None
