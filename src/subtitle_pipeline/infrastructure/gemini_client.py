"""Gemini client wrapper for structured transcription requests."""

import logging

from google import genai
from google.genai import types

logger = logging.getLogger(__name__)

# Array of {start, end, text}, all strings
SEGMENT_LIST_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "start": types.Schema(
                type=types.Type.STRING,
                description="Start time in HH:MM:SS,mmm format",
            ),
            "end": types.Schema(
                type=types.Type.STRING,
                description="End time in HH:MM:SS,mmm format",
            ),
            "text": types.Schema(
                type=types.Type.STRING,
                description="Transcribed text for this segment",
            ),
        },
        required=["start", "end", "text"],
        property_ordering=["start", "end", "text"],
    ),
)


class GeminiClient:
    """Handles Gemini generate_content calls with JSON output."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        temperature: float = 0.2,
        client: genai.Client | None = None,
    ):
        self._client = client or genai.Client(api_key=api_key)
        self._model_name = model_name
        self._temperature = temperature

    @property
    def model_name(self) -> str:
        return self._model_name

    def generate_json(
        self,
        prompt: str,
        media_part: types.Part,
        response_schema: types.Schema = SEGMENT_LIST_SCHEMA,
    ) -> str:
        """
        Send the prompt and one media part, asking for JSON conforming to a schema.

        Args:
            prompt: Instruction text.
            media_part: Inline bytes or URI part carrying the media.
            response_schema: Schema the response must follow.

        Returns:
            Raw response text.
        """
        config = types.GenerateContentConfig(
            temperature=self._temperature,
            response_mime_type="application/json",
            response_schema=response_schema,
        )

        logger.info("Calling %s", self._model_name)
        response = self._client.models.generate_content(
            model=self._model_name,
            contents=[
                types.Content(
                    role="user",
                    parts=[types.Part.from_text(text=prompt), media_part],
                )
            ],
            config=config,
        )

        text = response.text or ""
        logger.info("Received %d characters from %s", len(text), self._model_name)
        return text.strip()
