"""Episode synthesis pipeline and the end-to-end generation flow."""

import asyncio
import logging
from dataclasses import asdict

import anthropic

from episode_producer.assembly import concatenate, estimate_duration
from episode_producer.constants import AUDIO_CONTENT_TYPE, BATCH_SIZE, DEFAULT_NEIGHBORHOOD
from episode_producer.exporter import LocalAudioSink, episode_audio_key
from episode_producer.local_data import get_local_data
from episode_producer.models import EpisodeAudio, EpisodeStatus, SanitizedLine
from episode_producer.parser import parse_script
from episode_producer.sanitizer import sanitize_turns
from episode_producer.script_generator import generate_episode_title, generate_script
from episode_producer.store import EpisodeStore
from episode_producer.tts import SpeechBackend, dispatch
from episode_producer.voices import resolve_voice

logger = logging.getLogger(__name__)


def prepare_lines(script: str) -> list[SanitizedLine]:
    """Parse, sanitize and voice a script. Dropped turns keep their ordinals unused."""
    return [
        SanitizedLine(
            speaker=turn.speaker,
            text=text,
            ordinal=turn.ordinal,
            voice=resolve_voice(turn.speaker),
        )
        for turn, text in sanitize_turns(parse_script(script))
    ]


async def render_episode_async(
    script: str,
    backend: SpeechBackend,
    concurrency: int = BATCH_SIZE,
    strategy: str = "batch",
) -> EpisodeAudio:
    """Script in, one audio stream plus a duration estimate out.

    A script with no dialogue yields an empty stream; the duration is still
    estimated from the word count. Synthesis failures propagate unchanged.
    """
    turn_count = len(parse_script(script))
    lines = prepare_lines(script)
    if turn_count == 0:
        logger.warning("Script has no dialogue turns; check script generation")
    elif len(lines) < turn_count:
        logger.info("Dropped %d turns with nothing to say", turn_count - len(lines))

    segments = await dispatch(lines, backend, concurrency=concurrency, strategy=strategy)
    return EpisodeAudio(
        audio=concatenate(segments),
        duration=estimate_duration(script),
        line_count=len(lines),
        turn_count=turn_count,
    )


def render_episode(
    script: str,
    backend: SpeechBackend,
    concurrency: int = BATCH_SIZE,
    strategy: str = "batch",
) -> EpisodeAudio:
    """Sync wrapper around render_episode_async()."""
    return asyncio.run(render_episode_async(script, backend, concurrency, strategy))


def generate_episode(
    location: str,
    topics: list[str],
    *,
    backend: SpeechBackend,
    store: EpisodeStore,
    sink: LocalAudioSink,
    neighborhood_name: str = DEFAULT_NEIGHBORHOOD,
    script_client: anthropic.Anthropic | None = None,
    concurrency: int = BATCH_SIZE,
    strategy: str = "batch",
):
    """Run the whole flow for one episode and return the completed record.

    The record is created as "generating" and ends as "completed", or as
    "failed" if any step raises (the exception is re-raised). No partial
    audio is ever published.
    """
    episode = store.create(generate_episode_title(), location, topics)
    print(f"Episode ID: {episode.id}")

    try:
        print("[1/4] Fetching local data...")
        local_data = get_local_data(location)
        if local_data.weather:
            print(f"  Weather: {local_data.weather.temp}°F, {local_data.weather.condition}")
        print(f"  News items: {len(local_data.news)}")

        print("[2/4] Generating script...")
        script = generate_script(local_data, location, topics, neighborhood_name, client=script_client)
        store.update(episode.id, script=script)

        print("[3/4] Generating audio...")
        rendered = render_episode(script, backend, concurrency=concurrency, strategy=strategy)
        print(f"  {rendered.line_count} lines, {len(rendered.audio) / 1024 / 1024:.2f} MB")

        print("[4/4] Saving audio...")
        audio_url = sink.put(episode_audio_key(episode.id), rendered.audio, AUDIO_CONTENT_TYPE)
    except Exception:
        store.update(episode.id, status=EpisodeStatus.FAILED)
        raise

    return store.update(
        episode.id,
        audio_url=audio_url,
        duration=rendered.duration,
        local_data=asdict(local_data),
        status=EpisodeStatus.COMPLETED,
    )
