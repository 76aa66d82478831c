"""Join synthesized segments into one stream and estimate its length."""

from typing import Iterable

from episode_producer.constants import WORDS_PER_MINUTE
from episode_producer.models import AudioSegment


def concatenate(segments: Iterable[AudioSegment]) -> bytes:
    """Concatenate segment bytes in the order given.

    Segments must already share one directly concatenable encoding (MP3
    frames from a single backend); nothing is re-encoded, padded with
    silence or level-matched. No segments gives an empty stream.
    """
    return b"".join(seg.data for seg in segments)


def estimate_duration(script: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Estimated spoken length of the full script, in whole seconds.

    Word count over a fixed speaking rate. This is an approximation,
    independent of the audio actually produced.
    """
    word_count = len(script.split())
    return round(word_count / words_per_minute * 60)


def format_duration(seconds: int) -> str:
    """125 → "2:05"."""
    return f"{seconds // 60}:{seconds % 60:02d}"
