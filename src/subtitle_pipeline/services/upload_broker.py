"""Issues pre-signed upload tickets for direct-to-storage transfers."""

import logging
import re
import time
import uuid

from botocore.exceptions import BotoCoreError, ClientError

from subtitle_pipeline.exceptions import CapabilityError, InvalidInputError
from subtitle_pipeline.infrastructure.s3_client import S3Client
from subtitle_pipeline.models.schemas import UploadTicket

logger = logging.getLogger(__name__)

UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_file_name(file_name: str) -> str:
    """Replace whitespace runs and non path-safe characters with underscores."""
    name = re.sub(r"\s+", "_", file_name.strip())
    return UNSAFE_CHARS.sub("_", name)


def build_object_path(file_name: str) -> str:
    """Build a unique object path: <epoch ms>-<random hex>-<sanitized name>."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}-{sanitize_file_name(file_name)}"


class UploadBroker:
    """Mints single-use, time-bounded write URLs. Never transfers bytes itself."""

    def __init__(self, s3_client: S3Client, bucket: str, expires_seconds: int = 600):
        self._s3_client = s3_client
        self._bucket = bucket
        self._expires_seconds = expires_seconds

    def request_upload_ticket(self, file_name: str) -> UploadTicket:
        """
        Create an upload ticket for a file.

        Args:
            file_name: Original name of the file the client will upload.

        Returns:
            UploadTicket with the pre-signed URL and the assigned object path.

        Raises:
            InvalidInputError: If file_name is empty.
            CapabilityError: If the storage backend cannot sign the URL.
        """
        if not file_name or not file_name.strip():
            raise InvalidInputError("fileName is required.")

        object_path = build_object_path(file_name)
        try:
            signed_url = self._s3_client.presigned_put_url(
                self._bucket, object_path, self._expires_seconds
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Failed to create signed URL for %s: %s", object_path, e)
            raise CapabilityError("Failed to create signed URL.", details=str(e)) from e

        logger.info("Issued upload ticket for s3://%s/%s", self._bucket, object_path)
        return UploadTicket(signed_url=signed_url, file_path=object_path)
