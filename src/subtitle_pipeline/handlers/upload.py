"""Handler for upload ticket requests."""

import logging

from pydantic import ValidationError

from subtitle_pipeline.exceptions import InvalidInputError
from subtitle_pipeline.models.schemas import UploadTicketRequest
from subtitle_pipeline.services.upload_broker import UploadBroker

logger = logging.getLogger(__name__)


def create_upload_ticket(body: dict, upload_broker: UploadBroker) -> dict:
    """
    Issue an upload ticket for the file named in the request body.

    Args:
        body: Parsed request body, {"fileName": ...}.
        upload_broker: Broker that signs the upload URL.

    Returns:
        Response body, {"signedUrl": ..., "filePath": ...}.
    """
    try:
        request = UploadTicketRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidInputError("fileName must be a string.", details=str(e)) from e

    ticket = upload_broker.request_upload_ticket(request.file_name)
    logger.info("Upload ticket issued: %s", ticket.file_path)
    return ticket.model_dump(by_alias=True)
