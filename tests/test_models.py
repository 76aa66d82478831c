"""Tests for constants and models."""

from episode_producer import constants
from episode_producer.models import DialogueTurn, Episode, EpisodeStatus, SanitizedLine, Speaker


def test_speaker_is_closed_pair():
    """Exactly two hosts exist."""
    assert {s.value for s in Speaker} == {"MESCHELLE", "KIM"}


def test_turn_has_reaction():
    """Asterisk and bracket stage directions are detected."""
    assert DialogueTurn(Speaker.KIM, "*laughing* No.", 0).has_reaction
    assert DialogueTurn(Speaker.KIM, "[sighs] Fine.", 1).has_reaction
    assert not DialogueTurn(Speaker.KIM, "Plain words.", 2).has_reaction


def test_sanitized_line_fields():
    line = SanitizedLine(speaker=Speaker.MESCHELLE, text="Hi!", ordinal=0, voice="nova")
    assert line.voice == "nova"
    assert line.ordinal == 0


def test_episode_defaults():
    """New episodes start out generating with no audio."""
    ep = Episode(id="abc", title="The Block - Oct 18", location="Austin, TX", date="2026-10-18")
    assert ep.status == EpisodeStatus.GENERATING.value
    assert ep.audio_url is None
    assert ep.topics == []


def test_constants_exist():
    """All module-level constants are defined."""
    expected = [
        "SHOW_NAME",
        "BATCH_SIZE",
        "WORDS_PER_MINUTE",
        "TTS_MODEL",
        "AUDIO_FORMAT",
        "AUDIO_CONTENT_TYPE",
        "SCRIPT_MODEL",
        "SCRIPT_MAX_TOKENS",
        "MAX_NEWS_ITEMS",
        "HTTP_TIMEOUT",
        "EPISODE_LIST_LIMIT",
        "OUTPUT_DIR",
        "VERSION",
    ]
    for name in expected:
        assert hasattr(constants, name), f"Missing constant: {name}"
    assert constants.BATCH_SIZE == 5
    assert constants.WORDS_PER_MINUTE == 150
