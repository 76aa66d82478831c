"""Speaker to voice mapping."""

from episode_producer.constants import VOICE_DEMO_PANGRAM
from episode_producer.models import SanitizedLine, Speaker

# The one canonical host → voice table (OpenAI voice ids)
HOST_VOICES = {
    Speaker.MESCHELLE: "nova",     # friendly, upbeat
    Speaker.KIM: "shimmer",        # soft, warm
}

# Canonical voice id → edge-tts neural voice for the free backend
EDGE_VOICES = {
    "nova": "en-US-AriaNeural",
    "shimmer": "en-US-JennyNeural",
}


def resolve_voice(speaker: Speaker) -> str:
    return HOST_VOICES[speaker]


def voice_demo_lines() -> list[SanitizedLine]:
    """One pangram line per host, for auditioning the voice table."""
    return [
        SanitizedLine(speaker=speaker, text=VOICE_DEMO_PANGRAM, ordinal=i, voice=voice)
        for i, (speaker, voice) in enumerate(HOST_VOICES.items())
    ]
