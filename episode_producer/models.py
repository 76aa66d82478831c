"""Data models for episode production."""

import re
from dataclasses import dataclass, field
from enum import Enum

# *leans in*, [pause] and other bracketed or starred directions
STAGE_DIRECTION_RE = re.compile(r"\*[^*]+\*|\[[^\]]+\]")


class Speaker(str, Enum):
    MESCHELLE = "MESCHELLE"
    KIM = "KIM"


class EpisodeStatus(str, Enum):
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class DialogueTurn:
    speaker: Speaker
    text: str          # raw text, may still hold stage directions
    ordinal: int       # 0-based position in the script

    @property
    def has_reaction(self) -> bool:
        return bool(STAGE_DIRECTION_RE.search(self.text))


@dataclass(frozen=True)
class SanitizedLine:
    speaker: Speaker
    text: str
    ordinal: int
    voice: str


@dataclass(frozen=True)
class AudioSegment:
    ordinal: int
    data: bytes


@dataclass
class EpisodeAudio:
    audio: bytes
    duration: int      # estimated seconds, not measured
    line_count: int    # lines sent to synthesis
    turn_count: int    # turns found by the parser


@dataclass
class WeatherData:
    temp: int
    condition: str
    high: int
    low: int
    humidity: int
    description: str


@dataclass
class NewsItem:
    title: str
    source: str
    url: str = ""


@dataclass
class LocalData:
    weather: WeatherData | None
    news: list[NewsItem]
    generated_at: str


@dataclass
class Episode:
    id: str
    title: str
    location: str
    date: str
    topics: list[str] = field(default_factory=list)
    script: str = ""
    audio_url: str | None = None
    duration: int | None = None
    status: str = EpisodeStatus.GENERATING.value
    local_data: dict | None = None
