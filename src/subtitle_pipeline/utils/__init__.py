"""Utility functions."""

from subtitle_pipeline.utils.srt_converter import segments_to_srt

__all__ = ["segments_to_srt"]
