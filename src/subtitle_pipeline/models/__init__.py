"""Models package for the subtitle pipeline."""

from subtitle_pipeline.models.schemas import (
    ErrorResponse,
    MediaAsset,
    PipelineStatus,
    SubtitleSegment,
    TranscriptionRequest,
    UploadTicket,
    UploadTicketRequest,
)

__all__ = [
    "ErrorResponse",
    "MediaAsset",
    "PipelineStatus",
    "SubtitleSegment",
    "TranscriptionRequest",
    "UploadTicket",
    "UploadTicketRequest",
]
