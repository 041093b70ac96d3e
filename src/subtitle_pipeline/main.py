"""Command-line entry point: generate an SRT file for a local media file."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from subtitle_pipeline.client.driver import SubtitleDriver
from subtitle_pipeline.config import DriverSettings
from subtitle_pipeline.models.schemas import MediaAsset, PipelineStatus

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)
logger = logging.getLogger(__name__)


async def generate_subtitles(
    media_path: Path, output_dir: Path, settings: DriverSettings
) -> Path | None:
    """
    Run one media file through the pipeline and save the SRT.

    Args:
        media_path: Local media file.
        output_dir: Directory for the .srt file.
        settings: Endpoint and size-limit settings.

    Returns:
        Path of the saved SRT, or None if generation failed.
    """
    async with SubtitleDriver(settings) as driver:
        status = driver.select_file(MediaAsset.from_path(media_path))
        if status == PipelineStatus.FILE_SELECTED:
            status = await driver.generate()

        if status != PipelineStatus.SUCCESS:
            logger.error("Generation failed: %s", driver.error_message)
            return None

        return driver.save(output_dir)


def main():
    """Entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Generate SRT subtitles for a media file"
    )
    parser.add_argument("file", type=Path, help="Audio or video file to transcribe")
    parser.add_argument(
        "--api-url",
        default=DriverSettings.api_base_url,
        help="Base URL of the pipeline endpoints",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory to write the .srt file to",
    )
    parser.add_argument(
        "--max-size-mb",
        type=int,
        default=DriverSettings.max_file_size_bytes // (1024 * 1024),
        help="Reject files larger than this many MiB",
    )

    args = parser.parse_args()

    if not args.file.is_file():
        logger.error("File not found: %s", args.file)
        sys.exit(1)

    settings = DriverSettings(
        api_base_url=args.api_url,
        max_file_size_bytes=args.max_size_mb * 1024 * 1024,
    )

    try:
        output_path = asyncio.run(generate_subtitles(args.file, args.output_dir, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)

    if output_path is None:
        sys.exit(1)
    logger.info("Subtitles written to %s", output_path)


if __name__ == "__main__":
    main()
