"""Concurrent TTS dispatch over a pluggable speech backend."""

import asyncio
import logging
from typing import Protocol, Sequence

import edge_tts
import openai

from episode_producer.constants import AUDIO_FORMAT, BATCH_SIZE, EDGE_TTS_RATE, TTS_MODEL
from episode_producer.models import AudioSegment, SanitizedLine
from episode_producer.voices import EDGE_VOICES

logger = logging.getLogger(__name__)

STRATEGIES = ("batch", "pool")
BACKENDS = ("openai", "edge")


class SynthesisError(Exception):
    """A single line failed to synthesize, failing the whole dispatch."""

    def __init__(self, ordinal: int, voice: str, message: str):
        super().__init__(f"line {ordinal} ({voice}): {message}")
        self.ordinal = ordinal
        self.voice = voice


class SpeechBackend(Protocol):
    async def synthesize(self, text: str, voice: str) -> bytes:
        ...


class OpenAISpeechBackend:
    """OpenAI speech endpoint. Pass a client to share one or to inject a fake."""

    def __init__(
        self,
        client: openai.AsyncOpenAI | None = None,
        model: str = TTS_MODEL,
        response_format: str = AUDIO_FORMAT,
    ):
        self.client = client if client is not None else openai.AsyncOpenAI()
        self.model = model
        self.response_format = response_format

    async def synthesize(self, text: str, voice: str) -> bytes:
        response = await self.client.audio.speech.create(
            model=self.model,
            voice=voice,
            input=text,
            response_format=self.response_format,
        )
        return response.content


class EdgeSpeechBackend:
    """Free Microsoft Edge voices via edge-tts. Always returns MP3."""

    def __init__(self, rate: str = EDGE_TTS_RATE):
        self.rate = rate

    async def synthesize(self, text: str, voice: str) -> bytes:
        communicate = edge_tts.Communicate(text, EDGE_VOICES.get(voice, voice), rate=self.rate)
        chunks = []
        async for chunk in communicate.stream():
            if chunk["type"] == "audio":
                chunks.append(chunk["data"])
        return b"".join(chunks)


def create_backend(name: str) -> SpeechBackend:
    if name == "openai":
        return OpenAISpeechBackend()
    if name == "edge":
        return EdgeSpeechBackend()
    raise ValueError(f"Unknown TTS backend: {name!r} (expected one of {', '.join(BACKENDS)})")


async def _synthesize_line(line: SanitizedLine, backend: SpeechBackend) -> AudioSegment:
    try:
        data = await backend.synthesize(line.text, line.voice)
    except Exception as e:
        raise SynthesisError(line.ordinal, line.voice, str(e) or type(e).__name__) from e
    if not data:
        raise SynthesisError(line.ordinal, line.voice, "backend returned no audio")
    return AudioSegment(ordinal=line.ordinal, data=data)


async def _dispatch_batches(
    lines: Sequence[SanitizedLine],
    backend: SpeechBackend,
    batch_size: int,
) -> list[AudioSegment]:
    results = []
    total = (len(lines) + batch_size - 1) // batch_size

    for start in range(0, len(lines), batch_size):
        batch = lines[start:start + batch_size]
        print(f"  Processing batch {start // batch_size + 1}/{total}...")

        # Wait for every member before judging the batch
        outcomes = await asyncio.gather(
            *(_synthesize_line(line, backend) for line in batch),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        results.extend(outcomes)

    return results


async def _dispatch_pool(
    lines: Sequence[SanitizedLine],
    backend: SpeechBackend,
    concurrency: int,
) -> list[AudioSegment]:
    semaphore = asyncio.Semaphore(concurrency)

    async def worker(line: SanitizedLine) -> AudioSegment:
        async with semaphore:
            return await _synthesize_line(line, backend)

    tasks = [asyncio.ensure_future(worker(line)) for line in lines]
    try:
        return list(await asyncio.gather(*tasks))
    finally:
        # A failure already decided the outcome; don't leave requests queued
        for task in tasks:
            task.cancel()


async def dispatch(
    lines: Sequence[SanitizedLine],
    backend: SpeechBackend,
    concurrency: int = BATCH_SIZE,
    strategy: str = "batch",
) -> list[AudioSegment]:
    """Synthesize every line and return the segments in ordinal order.

    Strategies:
      batch: groups of `concurrency` requests, each group awaited as a unit
             before the next one starts.
      pool:  all lines queued, at most `concurrency` requests in flight.
             The first failing line cancels every request still pending.

    Any failing line raises SynthesisError; no partial result is returned.
    Each line is synthesized exactly once (no caching, no retry).
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown dispatch strategy: {strategy!r}")

    lines = list(lines)
    if not lines:
        return []

    logger.info("Synthesizing %d lines (%s, concurrency=%d)", len(lines), strategy, concurrency)
    if strategy == "batch":
        segments = await _dispatch_batches(lines, backend, concurrency)
    else:
        segments = await _dispatch_pool(lines, backend, concurrency)

    segments.sort(key=lambda seg: seg.ordinal)
    return segments


def synthesize_lines(
    lines: Sequence[SanitizedLine],
    backend: SpeechBackend,
    concurrency: int = BATCH_SIZE,
    strategy: str = "batch",
) -> list[AudioSegment]:
    """Sync wrapper around dispatch()."""
    return asyncio.run(dispatch(lines, backend, concurrency=concurrency, strategy=strategy))
