"""Infrastructure package for storage and model client wrappers."""

from subtitle_pipeline.infrastructure.s3_client import S3Client
from subtitle_pipeline.infrastructure.gemini_client import GeminiClient
from subtitle_pipeline.infrastructure.dependency_injection import (
    DependenciesContainer,
)

__all__ = [
    "S3Client",
    "GeminiClient",
    "DependenciesContainer",
]
