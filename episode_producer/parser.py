"""Parse generated script text into speaker-tagged dialogue turns."""

import re
from typing import Iterator

from episode_producer.models import DialogueTurn, Speaker

_SPEAKER_PATTERN = "|".join(re.escape(s.value) for s in Speaker)

# MESCHELLE: text / KIM: text, label at column 0, body (possibly empty) on the same line
_TURN_RE = re.compile(rf"^({_SPEAKER_PATTERN}):[ \t]*(.*)$", re.MULTILINE)


class TurnSequence:
    """Lazy, restartable view over the dialogue turns of a script.

    Each iteration re-scans the text, so the sequence can be walked any
    number of times and always yields the same turns in document order.
    Lines that don't start with a recognized speaker label are skipped;
    continuation lines are not merged into the previous turn.
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[DialogueTurn]:
        for ordinal, match in enumerate(_TURN_RE.finditer(self.text)):
            yield DialogueTurn(
                speaker=Speaker(match.group(1)),
                text=match.group(2).strip(),
                ordinal=ordinal,
            )

    def __len__(self) -> int:
        return sum(1 for _ in _TURN_RE.finditer(self.text))

    def __repr__(self) -> str:
        return f"TurnSequence({len(self)} turns)"


def parse_script(text: str) -> TurnSequence:
    """Return the dialogue turns found in a raw script."""
    return TurnSequence(text)
