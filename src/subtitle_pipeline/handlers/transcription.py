"""Handler for transcription requests."""

import logging

from pydantic import ValidationError

from subtitle_pipeline.exceptions import InvalidInputError
from subtitle_pipeline.models.schemas import TranscriptionRequest
from subtitle_pipeline.services.transcriber import TranscriptionService

logger = logging.getLogger(__name__)


def transcribe_upload(body: dict, transcription_service: TranscriptionService) -> list[dict]:
    """
    Transcribe the uploaded object named in the request body.

    Args:
        body: Parsed request body, {"filePath": ..., "mimeType": ...}.
        transcription_service: Service that runs the model and cleans up.

    Returns:
        Response body, a list of {"start", "end", "text"} dicts.
    """
    try:
        request = TranscriptionRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidInputError(
            "filePath and mimeType must be strings.", details=str(e)
        ) from e

    try:
        segments = transcription_service.transcribe(request.file_path, request.mime_type)
    except Exception:
        logger.error("Failed: %s", request.file_path)
        raise

    return [segment.model_dump() for segment in segments]
