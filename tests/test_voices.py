"""Tests for voice resolution."""

from episode_producer.constants import VOICE_DEMO_PANGRAM
from episode_producer.models import Speaker
from episode_producer.voices import EDGE_VOICES, HOST_VOICES, resolve_voice, voice_demo_lines


def test_resolve_voice():
    assert resolve_voice(Speaker.MESCHELLE) == "nova"
    assert resolve_voice(Speaker.KIM) == "shimmer"


def test_mapping_is_total():
    """Every speaker has a voice, and every voice has an edge equivalent."""
    for speaker in Speaker:
        assert resolve_voice(speaker)
        assert resolve_voice(speaker) in EDGE_VOICES


def test_hosts_have_distinct_voices():
    assert len(set(HOST_VOICES.values())) == len(HOST_VOICES)


def test_voice_demo_lines():
    """One pangram per host, ordinals 0..n-1."""
    lines = voice_demo_lines()
    assert [l.speaker for l in lines] == list(HOST_VOICES)
    assert all(l.text == VOICE_DEMO_PANGRAM for l in lines)
    assert [l.ordinal for l in lines] == [0, 1]
