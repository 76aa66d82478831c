"""Write the assembled episode somewhere a player can fetch it."""

import io
import json
import os
from datetime import datetime, timezone

from pydub import AudioSegment

from episode_producer.constants import AUDIO_CONTENT_TYPE, AUDIO_FORMAT, OUTPUT_DIR, VERSION


def episode_audio_key(episode_id: str) -> str:
    return f"episodes/{episode_id}.{AUDIO_FORMAT}"


class LocalAudioSink:
    """Blob-style storage on the local filesystem.

    put() writes the bytes under <base_dir>/<key> with a <key>.json sidecar
    recording content type and size, and returns a file:// URL.
    """

    def __init__(self, base_dir: str = OUTPUT_DIR):
        self.base_dir = base_dir

    def path_for(self, key: str) -> str:
        return os.path.join(self.base_dir, *key.split("/"))

    def put(self, key: str, data: bytes, content_type: str = AUDIO_CONTENT_TYPE) -> str:
        path = self.path_for(key)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)

        sidecar = {
            "key": key,
            "content_type": content_type,
            "size": len(data),
            "written_at": datetime.now(timezone.utc).isoformat(),
            "producer_version": VERSION,
        }
        with open(path + ".json", "w") as f:
            json.dump(sidecar, f, indent=2)

        return "file://" + os.path.abspath(path)


def measure_duration(data: bytes, fmt: str = AUDIO_FORMAT) -> float:
    """Decode a rendered stream and return its real length in seconds.

    Informational only; needs ffmpeg for compressed formats.
    """
    if not data:
        return 0.0
    audio = AudioSegment.from_file(io.BytesIO(data), format=fmt)
    return round(len(audio) / 1000, 1)
