"""Services package for the subtitle pipeline."""

from subtitle_pipeline.services.media_retrieval import (
    InlineBytesStrategy,
    MediaRetrievalStrategy,
    PresignedUriStrategy,
)
from subtitle_pipeline.services.object_lifecycle import TemporaryObjectManager
from subtitle_pipeline.services.transcriber import TranscriptionService
from subtitle_pipeline.services.upload_broker import UploadBroker

__all__ = [
    "InlineBytesStrategy",
    "MediaRetrievalStrategy",
    "PresignedUriStrategy",
    "TemporaryObjectManager",
    "TranscriptionService",
    "UploadBroker",
]
