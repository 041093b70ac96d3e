"""Tests for the client orchestration driver."""

import asyncio
import json

import httpx
import pytest

from subtitle_pipeline.client.driver import SubtitleDriver
from subtitle_pipeline.config import DriverSettings
from subtitle_pipeline.exceptions import InvalidStateError
from subtitle_pipeline.models.schemas import MediaAsset, PipelineStatus, SubtitleSegment

API = "http://pipeline.test"
SIGNED_URL = "https://storage.test/upload/1-abc-talk.mp3?sig=1"
SEGMENTS = [
    {"start": "00:00:00,000", "end": "00:00:02,500", "text": "Hello there."},
    {"start": "00:00:02,500", "end": "00:00:05,000", "text": "How are you?"},
]


class FakePipeline:
    """Records requests and answers like the pipeline endpoints and storage."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.ticket_response = (200, {"json": {"signedUrl": SIGNED_URL, "filePath": "1-abc-talk.mp3"}})
        self.put_response = (200, {})
        self.transcribe_response = (200, {"json": SEGMENTS})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST" and request.url.path == "/upload-url":
            return self._respond(self.ticket_response)
        if request.method == "PUT" and str(request.url) == SIGNED_URL:
            return self._respond(self.put_response)
        if request.method == "POST" and request.url.path == "/transcribe":
            return self._respond(self.transcribe_response)
        return httpx.Response(404)

    @staticmethod
    def _respond(spec) -> httpx.Response:
        status_code, kwargs = spec
        return httpx.Response(status_code, **kwargs)

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.host}{r.url.path}" for r in self.requests]


@pytest.fixture
def pipeline():
    return FakePipeline()


@pytest.fixture
def driver(pipeline):
    client = httpx.AsyncClient(transport=httpx.MockTransport(pipeline))
    return SubtitleDriver(DriverSettings(api_base_url=API), client=client)


@pytest.fixture
def media(tmp_path):
    path = tmp_path / "talk.mp3"
    path.write_bytes(b"ID3-audio-bytes")
    return MediaAsset.from_path(path)


class TestSelectFile:
    """Tests for file selection."""

    def test_select_file(self, driver, media):
        """Test a file within the limit moves to FileSelected."""
        assert driver.select_file(media) == PipelineStatus.FILE_SELECTED
        assert driver.file == media
        assert driver.error_message == ""

    def test_oversize_file_rejected_without_network(self, driver, pipeline):
        """Test an oversized file goes straight to Error with no requests."""
        big = MediaAsset(name="huge.mp4", size=50 * 1024 * 1024 + 1, mime_type="video/mp4")

        assert driver.select_file(big) == PipelineStatus.ERROR
        assert driver.error_message == "File is too large. Files cannot be larger than 50 MB."
        assert driver.file is None
        assert pipeline.requests == []

    @pytest.mark.parametrize(
        "limit,expected",
        [
            (512 * 1024, "0.5 MB"),
            (1280 * 1024, "1.25 MB"),
            (100, "100 bytes"),
        ],
    )
    def test_size_message_for_small_or_fractional_limits(self, pipeline, limit, expected):
        """Test the size limit in the message is not rounded down to whole MB."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(pipeline))
        driver = SubtitleDriver(
            DriverSettings(api_base_url=API, max_file_size_bytes=limit), client=client
        )
        big = MediaAsset(name="clip.mp4", size=limit + 1, mime_type="video/mp4")

        assert driver.select_file(big) == PipelineStatus.ERROR
        assert driver.error_message == (
            f"File is too large. Files cannot be larger than {expected}."
        )

    def test_file_at_limit_accepted(self, driver):
        """Test a file exactly at the limit is accepted."""
        edge = MediaAsset(name="edge.mp4", size=50 * 1024 * 1024, mime_type="video/mp4")

        assert driver.select_file(edge) == PipelineStatus.FILE_SELECTED

    def test_select_requires_idle(self, driver, media):
        """Test selecting twice without reset is rejected."""
        driver.select_file(media)

        with pytest.raises(InvalidStateError):
            driver.select_file(media)


class TestGenerate:
    """Tests for generate."""

    def test_success(self, driver, pipeline, media):
        """Test the full sequence produces an SRT document."""
        driver.select_file(media)

        status = asyncio.run(driver.generate())

        assert status == PipelineStatus.SUCCESS
        assert pipeline.paths() == [
            "POST pipeline.test/upload-url",
            "PUT storage.test/upload/1-abc-talk.mp3",
            "POST pipeline.test/transcribe",
        ]
        assert json.loads(pipeline.requests[0].content) == {"fileName": "talk.mp3"}

        put = pipeline.requests[1]
        assert put.content == b"ID3-audio-bytes"
        assert put.headers["Content-Type"] == "audio/mpeg"

        assert json.loads(pipeline.requests[2].content) == {
            "filePath": "1-abc-talk.mp3",
            "mimeType": "audio/mpeg",
        }

        assert driver.document == (
            "1\n00:00:00,000 --> 00:00:02,500\nHello there.\n\n"
            "2\n00:00:02,500 --> 00:00:05,000\nHow are you?\n\n"
        )
        assert [s.text for s in driver.segments] == ["Hello there.", "How are you?"]

    def test_generate_requires_file(self, driver):
        """Test generate from Idle is rejected."""
        with pytest.raises(InvalidStateError):
            asyncio.run(driver.generate())

    def test_ticket_failure_uses_server_error(self, driver, pipeline, media):
        """Test a failing ticket request surfaces the server's error message."""
        pipeline.ticket_response = (
            500, {"json": {"error": "Missing environment variables: STORAGE_ENDPOINT"}}
        )
        driver.select_file(media)

        status = asyncio.run(driver.generate())

        assert status == PipelineStatus.ERROR
        assert driver.error_message == "Missing environment variables: STORAGE_ENDPOINT"
        assert len(pipeline.requests) == 1

    def test_ticket_failure_without_body(self, driver, pipeline, media):
        """Test a ticket failure without JSON body uses the default message."""
        pipeline.ticket_response = (502, {"text": "Bad Gateway"})
        driver.select_file(media)

        asyncio.run(driver.generate())

        assert driver.error_message == "Could not get upload URL."

    def test_transfer_failure(self, driver, pipeline, media):
        """Test a failed PUT stops before transcription."""
        pipeline.put_response = (403, {})
        driver.select_file(media)

        status = asyncio.run(driver.generate())

        assert status == PipelineStatus.ERROR
        assert driver.error_message == "File upload to storage failed."
        assert len(pipeline.requests) == 2

    def test_transcription_failure(self, driver, pipeline, media):
        """Test the transcription error message is surfaced verbatim."""
        pipeline.transcribe_response = (
            502,
            {"json": {"error": "Transcription model request failed.", "details": "quota"}},
        )
        driver.select_file(media)

        status = asyncio.run(driver.generate())

        assert status == PipelineStatus.ERROR
        assert driver.error_message == "Transcription model request failed."
        assert driver.document == ""

    def test_empty_transcription(self, driver, pipeline, media):
        """Test an empty segment list is treated as a failure."""
        pipeline.transcribe_response = (200, {"json": []})
        driver.select_file(media)

        status = asyncio.run(driver.generate())

        assert status == PipelineStatus.ERROR
        assert driver.error_message == "Transcription failed or returned no content."

    def test_malformed_transcription(self, driver, pipeline, media):
        """Test a non-conforming transcription body is a failure."""
        pipeline.transcribe_response = (200, {"json": {"segments": []}})
        driver.select_file(media)

        asyncio.run(driver.generate())

        assert driver.status == PipelineStatus.ERROR
        assert driver.error_message == "The transcription request failed."

    def test_network_error(self, media):
        """Test transport errors move to Error instead of raising."""

        def _offline(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_offline))
        driver = SubtitleDriver(DriverSettings(api_base_url=API), client=client)
        driver.select_file(media)

        status = asyncio.run(driver.generate())

        assert status == PipelineStatus.ERROR
        assert driver.error_message == "Could not get upload URL."


class TestAfterGenerate:
    """Tests for reset, edits and saving."""

    def _generated(self, driver, media):
        driver.select_file(media)
        asyncio.run(driver.generate())
        return driver

    def test_reset_clears_state(self, driver, media):
        """Test reset returns to Idle and drops all held state."""
        self._generated(driver, media)

        assert driver.reset() == PipelineStatus.IDLE
        assert driver.file is None
        assert driver.segments == []
        assert driver.document == ""
        assert driver.error_message == ""

    def test_reset_from_error_allows_retry(self, driver, pipeline, media):
        """Test a failed run can be retried after reset."""
        pipeline.put_response = (500, {})

        async def _attempts():
            driver.select_file(media)
            first = await driver.generate()

            pipeline.put_response = (200, {})
            driver.reset()
            driver.select_file(media)
            return first, await driver.generate()

        first, second = asyncio.run(_attempts())

        assert first == PipelineStatus.ERROR
        assert second == PipelineStatus.SUCCESS

    def test_update_segments_regenerates_document(self, driver, media):
        """Test edited segments produce a fresh document."""
        self._generated(driver, media)
        edited = driver.segments
        edited[1] = SubtitleSegment(start="00:00:02,500", end="00:00:05,000", text="How are you doing?")

        document = driver.update_segments(edited)

        assert "How are you doing?" in document
        assert driver.document == document
        assert document.startswith("1\n00:00:00,000 --> 00:00:02,500\nHello there.\n")

    def test_save(self, driver, media, tmp_path):
        """Test the document is written as <stem>.srt."""
        self._generated(driver, media)
        out_dir = tmp_path / "out"
        out_dir.mkdir()

        path = driver.save(out_dir)

        assert path == out_dir / "talk.srt"
        assert path.read_text(encoding="utf-8") == driver.document

    def test_download_name_default(self, driver):
        """Test the download name without a file."""
        assert driver.download_name == "subtitles.srt"
