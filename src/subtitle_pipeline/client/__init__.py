"""Client package: drives a file through the pipeline endpoints."""

from subtitle_pipeline.client.driver import SubtitleDriver

__all__ = ["SubtitleDriver"]
