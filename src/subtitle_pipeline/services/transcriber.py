"""Transcription submission: retrieve stored media, call the model, clean up."""

import logging

from pydantic import TypeAdapter, ValidationError

from subtitle_pipeline.exceptions import InvalidInputError, ModelInvocationError
from subtitle_pipeline.infrastructure.gemini_client import GeminiClient
from subtitle_pipeline.models.schemas import SubtitleSegment
from subtitle_pipeline.services.media_retrieval import MediaRetrievalStrategy
from subtitle_pipeline.services.object_lifecycle import TemporaryObjectManager

logger = logging.getLogger(__name__)

TRANSCRIPTION_PROMPT = """You are an expert audio transcriptionist creating subtitles.
Transcribe the speech in the attached media file.

Return a JSON array of objects. Each object has exactly three string fields:
- "start": when the segment starts, formatted HH:MM:SS,mmm
- "end": when the segment ends, formatted HH:MM:SS,mmm
- "text": the words spoken in the segment

Subtitle style rules:
- Keep lines short and easy to read.
- Put one or two phrases in each segment.
- Prefer breaking before conjunctions and prepositions, or at the end of a clause.
- Segments must follow the order in which they are spoken.
"""

_SEGMENTS = TypeAdapter(list[SubtitleSegment])


def parse_segments(response_text: str) -> list[SubtitleSegment]:
    """Parse the model response as a JSON array of {start, end, text}.

    Raises:
        ModelInvocationError: If the text is not such an array.
    """
    try:
        return _SEGMENTS.validate_json(response_text)
    except ValidationError as e:
        raise ModelInvocationError(
            "Model returned malformed transcription output.", details=str(e)
        ) from e


class TranscriptionService:
    """Transcribes a stored media object, deleting it on every exit path."""

    def __init__(
        self,
        retrieval: MediaRetrievalStrategy,
        gemini_client: GeminiClient,
        lifecycle: TemporaryObjectManager,
        prompt: str = TRANSCRIPTION_PROMPT,
    ):
        self._retrieval = retrieval
        self._gemini_client = gemini_client
        self._lifecycle = lifecycle
        self._prompt = prompt

    def transcribe(self, object_path: str, mime_type: str) -> list[SubtitleSegment]:
        """
        Transcribe a stored media object into subtitle segments.

        The object is deleted once the model response has been obtained and
        parsed, or as soon as any step fails.

        Args:
            object_path: Key of the uploaded object.
            mime_type: Declared MIME type of the media.

        Returns:
            Segments in the order the model returned them.

        Raises:
            InvalidInputError: If object_path or mime_type is empty.
            RetrievalError: If the object is missing, unreadable or empty.
            ModelInvocationError: If the model call fails or its output is malformed.
        """
        if not object_path or not mime_type:
            raise InvalidInputError("Missing filePath or mimeType in request body.")

        logger.info("Started transcription: %s (%s)", object_path, mime_type)

        with self._lifecycle.temporary(object_path):
            media_part = self._retrieval.retrieve(object_path, mime_type)
            logger.info("Retrieved: %s", object_path)

            try:
                response_text = self._gemini_client.generate_json(self._prompt, media_part)
            except Exception as e:
                logger.error("Model call failed for %s: %s", object_path, e)
                raise ModelInvocationError(
                    "Transcription model request failed.", details=str(e)
                ) from e
            logger.info("Submitted: %s", object_path)

            segments = parse_segments(response_text)
            logger.info("Parsed %d segments for %s", len(segments), object_path)

        logger.info("Done: %s", object_path)
        return segments
