"""Strategies for handing a stored media object to the model."""

import logging
from abc import ABC, abstractmethod

from botocore.exceptions import BotoCoreError, ClientError
from google.genai import types

from subtitle_pipeline.exceptions import RetrievalError
from subtitle_pipeline.infrastructure.s3_client import S3Client

logger = logging.getLogger(__name__)


class MediaRetrievalStrategy(ABC):
    """Turns an object path into a model input part."""

    def __init__(self, s3_client: S3Client, bucket: str):
        self._s3_client = s3_client
        self._bucket = bucket

    @abstractmethod
    def retrieve(self, object_path: str, mime_type: str) -> types.Part:
        """
        Build the media part for an object.

        Args:
            object_path: Key of the stored object.
            mime_type: Declared MIME type of the media.

        Returns:
            Part to send to the model.

        Raises:
            RetrievalError: If the object is missing, unreadable or empty.
        """
        pass


class InlineBytesStrategy(MediaRetrievalStrategy):
    """Downloads the object and sends its bytes inline."""

    def retrieve(self, object_path: str, mime_type: str) -> types.Part:
        try:
            data = self._s3_client.get_object_bytes(self._bucket, object_path)
        except (BotoCoreError, ClientError) as e:
            raise RetrievalError(
                f"Could not read uploaded file: {object_path}", details=str(e)
            ) from e

        if not data:
            raise RetrievalError(f"Uploaded file is empty: {object_path}")

        return types.Part.from_bytes(data=data, mime_type=mime_type)


class PresignedUriStrategy(MediaRetrievalStrategy):
    """Sends a short-lived pre-signed GET URL instead of the bytes."""

    def __init__(self, s3_client: S3Client, bucket: str, expires_seconds: int = 900):
        super().__init__(s3_client, bucket)
        self._expires_seconds = expires_seconds

    def retrieve(self, object_path: str, mime_type: str) -> types.Part:
        try:
            size = self._s3_client.get_object_size(self._bucket, object_path)
            if size is None:
                raise RetrievalError(f"Uploaded file not found: {object_path}")
            if size == 0:
                raise RetrievalError(f"Uploaded file is empty: {object_path}")

            url = self._s3_client.presigned_get_url(
                self._bucket, object_path, self._expires_seconds
            )
        except (BotoCoreError, ClientError) as e:
            raise RetrievalError(
                f"Could not read uploaded file: {object_path}", details=str(e)
            ) from e

        logger.info("Handing %s to the model by URL (%d bytes)", object_path, size)
        return types.Part.from_uri(file_uri=url, mime_type=mime_type)
