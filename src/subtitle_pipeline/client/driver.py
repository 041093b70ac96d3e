"""Client-side orchestration: upload ticket, direct transfer, transcription, SRT."""

import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from subtitle_pipeline.config import DriverSettings
from subtitle_pipeline.exceptions import (
    InvalidStateError,
    SubtitlePipelineError,
    TransferError,
)
from subtitle_pipeline.models.schemas import (
    MediaAsset,
    PipelineStatus,
    SubtitleSegment,
    UploadTicket,
)
from subtitle_pipeline.utils.srt_converter import segments_to_srt

logger = logging.getLogger(__name__)

_SEGMENTS = TypeAdapter(list[SubtitleSegment])


class SubtitleDriver:
    """State machine driving one file through the pipeline.

    Idle -> FileSelected -> Processing -> Success | Error, and back to Idle
    on reset(). Network calls only happen inside generate().
    """

    def __init__(
        self,
        settings: DriverSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._settings = settings or DriverSettings()
        self._client = client or httpx.AsyncClient(timeout=self._settings.timeout)
        self._owns_client = client is None
        self._status = PipelineStatus.IDLE
        self._file: MediaAsset | None = None
        self._segments: list[SubtitleSegment] = []
        self._document = ""
        self._error_message = ""

    async def __aenter__(self) -> "SubtitleDriver":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @property
    def status(self) -> PipelineStatus:
        return self._status

    @property
    def file(self) -> MediaAsset | None:
        return self._file

    @property
    def segments(self) -> list[SubtitleSegment]:
        return list(self._segments)

    @property
    def document(self) -> str:
        return self._document

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def download_name(self) -> str:
        """Name for the downloaded subtitle file: <media stem>.srt."""
        stem = self._file.stem if self._file else ""
        return f"{stem or 'subtitles'}.srt"

    def select_file(self, asset: MediaAsset) -> PipelineStatus:
        """
        Select the media file to transcribe.

        Oversized files move straight to Error without any network call.
        """
        self._require(PipelineStatus.IDLE)

        limit = self._settings.max_file_size_bytes
        if asset.size > limit:
            logger.warning("Rejected %s: %d bytes exceeds %d", asset.name, asset.size, limit)
            self._file = None
            self._fail(f"File is too large. Files cannot be larger than {_format_size(limit)}.")
            return self._status

        self._file = asset
        self._error_message = ""
        self._status = PipelineStatus.FILE_SELECTED
        return self._status

    async def generate(self) -> PipelineStatus:
        """Run ticket -> transfer -> transcription -> SRT for the selected file."""
        self._require(PipelineStatus.FILE_SELECTED)
        asset = self._file

        self._status = PipelineStatus.PROCESSING
        self._error_message = ""

        try:
            ticket = await self._request_ticket(asset)
            await self._transfer(asset, ticket)
            segments = await self._request_transcription(asset, ticket)

            if not segments:
                raise SubtitlePipelineError("Transcription failed or returned no content.")

            self._segments = segments
            self._document = segments_to_srt(segments)
            self._status = PipelineStatus.SUCCESS
            logger.info("Generated %d subtitles for %s", len(segments), asset.name)

        except SubtitlePipelineError as e:
            logger.error("Generation failed for %s: %s", asset.name, e.message)
            self._fail(e.message)

        except Exception as e:
            logger.exception("Generation failed for %s", asset.name)
            self._fail(str(e) or "An unknown error occurred.")

        return self._status

    def update_segments(self, segments: list[SubtitleSegment]) -> str:
        """Replace the segment list after user edits and regenerate the document."""
        self._require(PipelineStatus.SUCCESS)
        self._segments = list(segments)
        self._document = segments_to_srt(self._segments)
        return self._document

    def save(self, directory: Path) -> Path:
        """Write the subtitle document to directory/<download_name>."""
        self._require(PipelineStatus.SUCCESS)
        output_path = directory / self.download_name
        output_path.write_text(self._document, encoding="utf-8")
        logger.info("Saved subtitles: %s", output_path)
        return output_path

    def reset(self) -> PipelineStatus:
        """Discard the file, segments, document and error message."""
        self._file = None
        self._segments = []
        self._document = ""
        self._error_message = ""
        self._status = PipelineStatus.IDLE
        return self._status

    def _require(self, expected: PipelineStatus) -> None:
        if self._status != expected:
            raise InvalidStateError(
                f"Operation requires state {expected.value}, current state is {self._status.value}"
            )

    def _fail(self, message: str) -> None:
        self._error_message = message
        self._status = PipelineStatus.ERROR

    def _url(self, path: str) -> str:
        return self._settings.api_base_url.rstrip("/") + path

    async def _post_json(self, path: str, payload: dict, fallback: str) -> Any:
        """POST JSON to a pipeline endpoint; non-2xx raises with the server's error."""
        try:
            response = await self._client.post(self._url(path), json=payload)
        except httpx.HTTPError as e:
            raise SubtitlePipelineError(fallback, details=str(e)) from e

        if not response.is_success:
            raise SubtitlePipelineError(_error_from(response) or fallback)

        try:
            return response.json()
        except ValueError as e:
            raise SubtitlePipelineError(fallback, details=str(e)) from e

    async def _request_ticket(self, asset: MediaAsset) -> UploadTicket:
        fallback = "Could not get upload URL."
        data = await self._post_json(
            self._settings.upload_url_path, {"fileName": asset.name}, fallback
        )
        try:
            return UploadTicket.model_validate(data)
        except ValidationError as e:
            raise SubtitlePipelineError(fallback, details=str(e)) from e

    async def _transfer(self, asset: MediaAsset, ticket: UploadTicket) -> None:
        message = "File upload to storage failed."
        if asset.path is None:
            raise TransferError(message, details="No local file to upload")

        try:
            response = await self._client.put(
                ticket.signed_url,
                content=asset.path.read_bytes(),
                headers={"Content-Type": asset.mime_type},
            )
        except (httpx.HTTPError, OSError) as e:
            raise TransferError(message, details=str(e)) from e

        if not response.is_success:
            raise TransferError(message, details=f"HTTP {response.status_code}")
        logger.info("Uploaded %s to %s", asset.name, ticket.file_path)

    async def _request_transcription(
        self, asset: MediaAsset, ticket: UploadTicket
    ) -> list[SubtitleSegment]:
        fallback = "The transcription request failed."
        data = await self._post_json(
            self._settings.transcribe_path,
            {"filePath": ticket.file_path, "mimeType": asset.mime_type},
            fallback,
        )
        try:
            return _SEGMENTS.validate_python(data)
        except ValidationError as e:
            raise SubtitlePipelineError(fallback, details=str(e)) from e


def _format_size(size_bytes: int) -> str:
    """Format a size limit as MB (MiB) with up to two decimals, or bytes when tiny."""
    megabytes = f"{size_bytes / (1024 * 1024):.2f}".rstrip("0").rstrip(".")
    if megabytes == "0":
        return f"{size_bytes} bytes"
    return f"{megabytes} MB"


def _error_from(response: httpx.Response) -> str | None:
    """Extract the "error" field from an error response, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None
