"""Turn stage-direction markup into speakable text."""

import re
from typing import Iterable, Iterator

from episode_producer.models import STAGE_DIRECTION_RE, DialogueTurn


def _marker(word: str) -> re.Pattern:
    # *laughing* or [laughing]
    return re.compile(rf"\*{word}\*|\[{word}\]", re.IGNORECASE)


# Laughter becomes something the voice can actually say
LAUGHTER_MARKERS = [
    (_marker("laughing"), "ha ha!"),
    (_marker("laughs"), "ha ha!"),
    (_marker("snorts"), "pfft!"),
]

# Reactions with no spoken equivalent
SILENT_MARKERS = [
    _marker("gasps"),
    _marker("sighs"),
]

_SPACES_RE = re.compile(r"[ \t]{2,}")


def _sanitize_once(text: str) -> str:
    for pattern, replacement in LAUGHTER_MARKERS:
        text = pattern.sub(replacement, text)
    for pattern in SILENT_MARKERS:
        text = pattern.sub("", text)
    text = STAGE_DIRECTION_RE.sub("", text)
    return _SPACES_RE.sub(" ", text).strip()


def sanitize_text(text: str) -> str:
    """Convert a turn's text into speakable text.

    Laughter markers become vocal tokens, other reactions and stage
    directions are removed. Repeated until stable so that sanitizing
    already-clean text is a no-op. An empty result means the line has
    nothing to say.
    """
    while True:
        cleaned = _sanitize_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def sanitize_turns(turns: Iterable[DialogueTurn]) -> Iterator[tuple[DialogueTurn, str]]:
    """Yield (turn, speakable text) pairs, dropping turns that sanitize to nothing."""
    for turn in turns:
        text = sanitize_text(turn.text)
        if text:
            yield turn, text
