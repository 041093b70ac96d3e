"""Dependency injection container for the application."""

import boto3
from botocore.config import Config as BotoConfig
from dependency_injector import providers
from dependency_injector.containers import DeclarativeContainer

from subtitle_pipeline.config import Config
from subtitle_pipeline.infrastructure.gemini_client import GeminiClient
from subtitle_pipeline.infrastructure.s3_client import S3Client


def _create_s3_boto_client(config: Config):
    """Create a boto3 S3 client for the configured S3-compatible endpoint."""
    session = boto3.Session(
        aws_access_key_id=config.storage_access_key_id,
        aws_secret_access_key=config.storage_secret_access_key,
        region_name=config.storage_region,
    )
    return session.client(
        "s3",
        endpoint_url=config.storage_endpoint,
        config=BotoConfig(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


def _create_gemini_client(config: Config) -> GeminiClient:
    return GeminiClient(
        api_key=config.google_api_key,
        model_name=config.gemini_model,
        temperature=config.gemini_temperature,
    )


def _create_lifecycle(s3_client: S3Client, config: Config):
    """Factory for TemporaryObjectManager to avoid circular import."""
    from subtitle_pipeline.services.object_lifecycle import TemporaryObjectManager

    return TemporaryObjectManager(s3_client, bucket=config.storage_bucket)


def _create_upload_broker(s3_client: S3Client, config: Config):
    """Factory for UploadBroker to avoid circular import."""
    from subtitle_pipeline.services.upload_broker import UploadBroker

    return UploadBroker(
        s3_client,
        bucket=config.storage_bucket,
        expires_seconds=config.upload_url_expires_seconds,
    )


def _create_inline_strategy(s3_client: S3Client, config: Config):
    from subtitle_pipeline.services.media_retrieval import InlineBytesStrategy

    return InlineBytesStrategy(s3_client, bucket=config.storage_bucket)


def _create_uri_strategy(s3_client: S3Client, config: Config):
    from subtitle_pipeline.services.media_retrieval import PresignedUriStrategy

    return PresignedUriStrategy(
        s3_client,
        bucket=config.storage_bucket,
        expires_seconds=config.download_url_expires_seconds,
    )


def _create_transcription_service(retrieval, gemini_client: GeminiClient, lifecycle):
    """Factory for TranscriptionService to avoid circular import."""
    from subtitle_pipeline.services.transcriber import TranscriptionService

    return TranscriptionService(
        retrieval=retrieval,
        gemini_client=gemini_client,
        lifecycle=lifecycle,
    )


class DependenciesContainer(DeclarativeContainer):
    """DI container for the application."""

    config = providers.Singleton(Config)

    # S3 dependency chain
    s3_boto_client = providers.Singleton(_create_s3_boto_client, config=config)

    s3_client = providers.Singleton(
        S3Client,
        client=s3_boto_client,
    )

    lifecycle = providers.Singleton(
        _create_lifecycle,
        s3_client=s3_client,
        config=config,
    )

    upload_broker = providers.Singleton(
        _create_upload_broker,
        s3_client=s3_client,
        config=config,
    )

    # Media hand-off selected by MEDIA_HANDOFF
    media_retrieval = providers.Selector(
        providers.Callable(lambda config: config.media_handoff, config=config),
        inline=providers.Singleton(_create_inline_strategy, s3_client=s3_client, config=config),
        uri=providers.Singleton(_create_uri_strategy, s3_client=s3_client, config=config),
    )

    # Gemini
    gemini_client = providers.Singleton(_create_gemini_client, config=config)

    transcription_service = providers.Singleton(
        _create_transcription_service,
        retrieval=media_retrieval,
        gemini_client=gemini_client,
        lifecycle=lifecycle,
    )
