"""S3 client wrapper for temporary media storage."""

import logging
from typing import Any

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class S3Client:
    """Handles S3 operations."""

    def __init__(self, client: Any):
        """
        Initialize S3 client wrapper.

        Args:
            client: boto3 S3 client instance.
        """
        self._client = client

    def get_object_bytes(self, bucket: str, key: str) -> bytes:
        """
        Get object content as bytes.

        Args:
            bucket: S3 bucket name.
            key: S3 object key.

        Returns:
            Object content as bytes.

        Raises:
            ClientError: If the object is missing or unreadable.
        """
        response = self._client.get_object(Bucket=bucket, Key=key)
        content = response["Body"].read()
        logger.info("Read %d bytes from s3://%s/%s", len(content), bucket, key)
        return content

    def get_object_size(self, bucket: str, key: str) -> int | None:
        """
        Get the size of an object.

        Args:
            bucket: S3 bucket name.
            key: S3 object key.

        Returns:
            Size in bytes, or None if the object does not exist.
        """
        try:
            response = self._client.head_object(Bucket=bucket, Key=key)
            return response["ContentLength"]
        except ClientError as e:
            if e.response["Error"]["Code"] in ("404", "NoSuchKey", "NotFound"):
                return None
            raise

    def delete_object(self, bucket: str, key: str) -> bool:
        """
        Delete a single object from S3.

        Args:
            bucket: S3 bucket name.
            key: S3 object key.

        Returns:
            True if successful, False otherwise.
        """
        try:
            self._client.delete_object(Bucket=bucket, Key=key)
            logger.info("Deleted s3://%s/%s", bucket, key)
            return True
        except ClientError as e:
            logger.error("Failed to delete s3://%s/%s: %s", bucket, key, e)
            return False

    def presigned_put_url(self, bucket: str, key: str, expires_seconds: int) -> str:
        """Generate a pre-signed URL that allows one PUT to the given key."""
        return self._client.generate_presigned_url(
            "put_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_seconds,
        )

    def presigned_get_url(self, bucket: str, key: str, expires_seconds: int) -> str:
        """Generate a pre-signed URL that allows reading the given key."""
        return self._client.generate_presigned_url(
            "get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_seconds,
        )
