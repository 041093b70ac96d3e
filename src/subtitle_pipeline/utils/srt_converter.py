"""SRT format converter for subtitle segments."""

from typing import Iterable

from subtitle_pipeline.models.schemas import SubtitleSegment


def segments_to_srt(segments: Iterable[SubtitleSegment]) -> str:
    """Convert subtitle segments to SRT format.

    Indices are assigned by position starting at 1. Timestamps and text are
    written verbatim; no ordering or format validation is done here.

    Output format:
        1
        00:00:00,000 --> 00:00:02,500
        Hello there.

    Returns:
        SRT document, or an empty string for no segments.
    """
    blocks = []
    for index, segment in enumerate(segments, start=1):
        blocks.append(f"{index}\n{segment.start} --> {segment.end}\n{segment.text}\n")
    return "\n".join(blocks) + ("\n" if blocks else "")
