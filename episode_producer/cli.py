"""CLI interface with subcommand routing."""

import argparse
import logging
import os
import shutil
import sys

from episode_producer.assembly import estimate_duration, format_duration
from episode_producer.constants import (
    AUDIO_CONTENT_TYPE,
    BATCH_SIZE,
    DEFAULT_LOCATION,
    DEFAULT_NEIGHBORHOOD,
    OUTPUT_DIR,
    SHOW_NAME,
    VERSION,
)
from episode_producer.exporter import LocalAudioSink, episode_audio_key, measure_duration
from episode_producer.parser import parse_script
from episode_producer.pipeline import generate_episode, prepare_lines, render_episode
from episode_producer.store import EpisodeStore
from episode_producer.tts import BACKENDS, STRATEGIES, SynthesisError, create_backend, synthesize_lines
from episode_producer.voices import EDGE_VOICES, HOST_VOICES, voice_demo_lines


def _fail(message: str):
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(1)


def _read_script(path: str) -> str:
    if not os.path.exists(path):
        _fail(f"File not found: {path}")
    with open(path) as f:
        return f.read()


def _backend(name: str):
    try:
        return create_backend(name)
    except Exception as e:
        _fail(f"Could not set up the {name} TTS backend: {e}")


def cmd_generate(args):
    """Generate, voice and save a full episode."""
    print(f"{SHOW_NAME} - Episode Generator")
    print(f"Location: {args.location}")
    print(f"Topics: {', '.join(args.topics) if args.topics else '(none)'}")

    backend = _backend(args.backend)
    try:
        episode = generate_episode(
            args.location,
            args.topics,
            backend=backend,
            store=EpisodeStore(args.output_dir),
            sink=LocalAudioSink(args.output_dir),
            neighborhood_name=args.neighborhood,
            concurrency=args.concurrency,
            strategy=args.strategy,
        )
    except Exception as e:
        _fail(f"Episode generation failed: {e}")

    print(f"Estimated duration: {format_duration(episode.duration)}")
    print(f"Done: {episode.audio_url}")


def cmd_render(args):
    """Voice an existing script file."""
    script = _read_script(args.script)
    backend = _backend(args.backend)
    episode_id = args.episode_id or os.path.splitext(os.path.basename(args.script))[0]

    print(f"Generating TTS for {len(prepare_lines(script))} lines...")
    try:
        rendered = render_episode(script, backend, concurrency=args.concurrency, strategy=args.strategy)
    except SynthesisError as e:
        _fail(f"Synthesis failed, no audio written: {e}")

    if not rendered.audio:
        print("Warning: no dialogue lines found; nothing to save.", file=sys.stderr)
        return

    url = LocalAudioSink(args.output_dir).put(episode_audio_key(episode_id), rendered.audio, AUDIO_CONTENT_TYPE)
    print(f"Audio size: {len(rendered.audio) / 1024 / 1024:.2f} MB")
    print(f"Estimated duration: {format_duration(rendered.duration)}")
    if args.measure:
        if not shutil.which("ffmpeg"):
            _fail("ffmpeg is required for --measure but was not found.")
        print(f"Measured duration: {measure_duration(rendered.audio)}s")
    print(f"Done: {url}")


def cmd_parse(args):
    """Show how a script will be voiced, without calling any backend."""
    script = _read_script(args.script)
    turns = list(parse_script(script))
    lines = {line.ordinal: line for line in prepare_lines(script)}

    for turn in turns:
        line = lines.get(turn.ordinal)
        if line is None:
            print(f"  {turn.ordinal:03d} {turn.speaker.value:<10} [dropped] {turn.text}")
        elif turn.has_reaction:
            print(f"  {turn.ordinal:03d} {turn.speaker.value:<10} ({line.voice}) {line.text}  <- {turn.text}")
        else:
            print(f"  {turn.ordinal:03d} {turn.speaker.value:<10} ({line.voice}) {line.text}")

    print(f"Parsed {len(turns)} turns, {len(lines)} to synthesize")
    print(f"Estimated duration: {format_duration(estimate_duration(script))}")


def cmd_list(args):
    """List completed episodes."""
    episodes = EpisodeStore(args.output_dir).list_completed()
    if not episodes:
        print("No episodes found.")
        return
    print("Episodes:")
    for ep in episodes:
        duration = format_duration(ep.duration) if ep.duration is not None else "?:??"
        print(f"  {ep.date[:10]}  {ep.title:<20} {duration:>6}  {ep.location}  {ep.audio_url}")


def cmd_voices(args):
    """Show the host voice table, optionally rendering demo clips."""
    print("Host voices:")
    for speaker, voice in HOST_VOICES.items():
        print(f"  {speaker.value:<10} → {voice} (edge: {EDGE_VOICES.get(voice, voice)})")

    if not args.demo:
        return

    backend = _backend(args.backend)
    lines = voice_demo_lines()
    try:
        segments = synthesize_lines(lines, backend)
    except SynthesisError as e:
        _fail(f"Voice demo failed: {e}")

    sink = LocalAudioSink(args.demo)
    for line, seg in zip(lines, segments):
        url = sink.put(f"{line.speaker.value.lower()}_pangram.mp3", seg.data, AUDIO_CONTENT_TYPE)
        print(f"  {url}")


def _add_synthesis_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--backend", choices=BACKENDS, default="openai", help="TTS backend")
    parser.add_argument("--concurrency", type=int, default=BATCH_SIZE,
                        help="Max TTS requests in flight (batch size)")
    parser.add_argument("--strategy", choices=STRATEGIES, default="batch",
                        help="batch: wait for each batch; pool: keep the pipe full")
    parser.add_argument("--output-dir", default=OUTPUT_DIR, help="Where audio and records go")


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="episode-producer",
        description=f"{SHOW_NAME} - two-host neighborhood podcast generator",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # generate
    gen_parser = subparsers.add_parser("generate", help="Generate a full episode")
    gen_parser.add_argument("location", nargs="?", default=DEFAULT_LOCATION, help="City or neighborhood")
    gen_parser.add_argument("topics", nargs="*", help="Topics from residents")
    gen_parser.add_argument("--neighborhood", default=DEFAULT_NEIGHBORHOOD, help="Neighborhood name")
    _add_synthesis_options(gen_parser)
    gen_parser.set_defaults(func=cmd_generate)

    # render
    render_parser = subparsers.add_parser("render", help="Voice an existing script file")
    render_parser.add_argument("script", help="Path to the script text file")
    render_parser.add_argument("--episode-id", help="Key for the audio file (default: script filename)")
    render_parser.add_argument("--measure", action="store_true", help="Decode the result and report its real length")
    _add_synthesis_options(render_parser)
    render_parser.set_defaults(func=cmd_render)

    # parse
    parse_parser = subparsers.add_parser("parse", help="Dry run: show turns, drops and voices")
    parse_parser.add_argument("script", help="Path to the script text file")
    parse_parser.set_defaults(func=cmd_parse)

    # list
    list_parser = subparsers.add_parser("list", help="List completed episodes")
    list_parser.add_argument("--output-dir", default=OUTPUT_DIR, help="Where records are kept")
    list_parser.set_defaults(func=cmd_list)

    # voices
    voices_parser = subparsers.add_parser("voices", help="Show host voices")
    voices_parser.add_argument("--demo", metavar="DIR", help="Render a pangram per host into DIR")
    voices_parser.add_argument("--backend", choices=BACKENDS, default="openai", help="TTS backend for demos")
    voices_parser.set_defaults(func=cmd_voices)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return

    if getattr(args, "concurrency", 1) < 1:
        _fail("--concurrency must be at least 1")

    args.func(args)
