"""Deletion of temporary media objects."""

import logging
from contextlib import contextmanager
from typing import Iterator

from subtitle_pipeline.infrastructure.s3_client import S3Client

logger = logging.getLogger(__name__)


class TemporaryObjectManager:
    """Removes temporary upload objects; never raises to its caller."""

    def __init__(self, s3_client: S3Client, bucket: str):
        """
        Initialize the lifecycle manager.

        Args:
            s3_client: S3Client instance.
            bucket: Bucket holding temporary uploads.
        """
        self._s3_client = s3_client
        self._bucket = bucket

    def delete(self, object_path: str) -> None:
        """
        Delete a temporary object. Deleting a missing key is a no-op.

        Failures are logged and left for the bucket's expiry policy.
        """
        try:
            if not self._s3_client.delete_object(self._bucket, object_path):
                logger.warning("Temporary object not removed: %s", object_path)
        except Exception as e:
            logger.error("Failed to delete temporary object %s: %s", object_path, e)

    @contextmanager
    def temporary(self, object_path: str) -> Iterator[str]:
        """Yield the object path and delete the object exactly once on exit."""
        try:
            yield object_path
        finally:
            logger.info("Cleaning up temporary object: %s", object_path)
            self.delete(object_path)
