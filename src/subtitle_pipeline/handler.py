"""AWS Lambda handlers for the subtitle pipeline endpoints.

Both handlers take API Gateway proxy events:
- upload_url_handler: POST {"fileName"} -> {"signedUrl", "filePath"}
- transcribe_handler: POST {"filePath", "mimeType"} -> [{"start", "end", "text"}]
"""

import base64
import json
import logging
from typing import Any, Callable

from subtitle_pipeline.exceptions import InvalidInputError, SubtitlePipelineError
from subtitle_pipeline.handlers.transcription import transcribe_upload
from subtitle_pipeline.handlers.upload import create_upload_ticket
from subtitle_pipeline.infrastructure.dependency_injection import (
    DependenciesContainer,
)

# Configure root logger for Lambda (all modules will inherit this)
logging.getLogger().setLevel(logging.INFO)
logger = logging.getLogger(__name__)


def _response(status_code: int, body: Any) -> dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _error_response(error: SubtitlePipelineError) -> dict:
    body = {"error": error.message}
    if error.details:
        body["details"] = error.details
    return _response(error.status_code, body)


def _parse_body(event: dict) -> dict:
    """Decode the JSON object in an API Gateway event body."""
    raw = event.get("body") or ""

    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw, validate=True).decode("utf-8")
        body = json.loads(raw)
    except ValueError as e:
        # binascii.Error, UnicodeDecodeError and JSONDecodeError
        raise InvalidInputError("Request body must be valid JSON.", details=str(e)) from e

    if not isinstance(body, dict):
        raise InvalidInputError("Request body must be a JSON object.")
    return body


def _method(event: dict) -> str:
    method = event.get("httpMethod")
    if method is None:
        # HTTP API (payload format 2.0)
        method = event.get("requestContext", {}).get("http", {}).get("method", "")
    return method.upper()


def _handle(event: dict, action: Callable[[dict, DependenciesContainer], Any]) -> dict:
    if _method(event) != "POST":
        return _response(405, {"error": "Method Not Allowed"})

    try:
        container = DependenciesContainer()
        body = _parse_body(event)
        return _response(200, action(body, container))

    except SubtitlePipelineError as e:
        logger.error("Request failed (%d): %s", e.status_code, e.message)
        return _error_response(e)

    except Exception as e:
        logger.exception("Function failed: %s", e)
        return _response(500, {"error": "Failed to process request.", "details": str(e)})


def _upload_url(body: dict, container: DependenciesContainer) -> dict:
    container.config().validate_storage()
    return create_upload_ticket(body, container.upload_broker())


def _transcribe(body: dict, container: DependenciesContainer) -> list[dict]:
    container.config().validate()
    return transcribe_upload(body, container.transcription_service())


def upload_url_handler(event: dict, context) -> dict:
    """
    Lambda handler issuing pre-signed upload URLs.

    Args:
        event: API Gateway proxy event.
        context: Lambda context object.

    Returns:
        Response dict with statusCode, headers and body.
    """
    logger.info("Received upload URL request")
    return _handle(event, _upload_url)


def transcribe_handler(event: dict, context) -> dict:
    """
    Lambda handler transcribing an uploaded file and deleting it afterwards.

    Args:
        event: API Gateway proxy event.
        context: Lambda context object.

    Returns:
        Response dict with statusCode, headers and body.
    """
    logger.info("Received transcription request")
    return _handle(event, _transcribe)
