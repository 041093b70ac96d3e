"""Handlers package for the subtitle pipeline."""

from subtitle_pipeline.handlers.transcription import transcribe_upload
from subtitle_pipeline.handlers.upload import create_upload_ticket

__all__ = [
    "create_upload_ticket",
    "transcribe_upload",
]
