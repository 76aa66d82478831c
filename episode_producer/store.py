"""JSON-file episode records and their lifecycle status."""

import json
import os
import uuid
from dataclasses import asdict, fields
from datetime import datetime, timezone

from episode_producer.constants import EPISODE_LIST_LIMIT, OUTPUT_DIR
from episode_producer.models import Episode, EpisodeStatus

_EPISODE_FIELDS = {f.name for f in fields(Episode)}


class EpisodeNotFound(KeyError):
    pass


class EpisodeStore:
    """One <id>.json record per episode under <root>/records/."""

    def __init__(self, root: str = OUTPUT_DIR):
        self.records_dir = os.path.join(root, "records")

    def _path(self, episode_id: str) -> str:
        return os.path.join(self.records_dir, f"{episode_id}.json")

    def _write(self, episode: Episode) -> None:
        os.makedirs(self.records_dir, exist_ok=True)
        with open(self._path(episode.id), "w") as f:
            json.dump(asdict(episode), f, indent=2)

    def create(self, title: str, location: str, topics: list[str] | None = None) -> Episode:
        episode = Episode(
            id=uuid.uuid4().hex,
            title=title,
            location=location,
            date=datetime.now(timezone.utc).isoformat(),
            topics=list(topics or []),
            status=EpisodeStatus.GENERATING.value,
        )
        self._write(episode)
        return episode

    def get(self, episode_id: str) -> Episode:
        path = self._path(episode_id)
        if not os.path.exists(path):
            raise EpisodeNotFound(episode_id)
        with open(path) as f:
            return Episode(**json.load(f))

    def update(self, episode_id: str, **changes) -> Episode:
        unknown = set(changes) - _EPISODE_FIELDS
        if unknown:
            raise ValueError(f"Unknown episode fields: {', '.join(sorted(unknown))}")
        episode = self.get(episode_id)
        for name, value in changes.items():
            if isinstance(value, EpisodeStatus):
                value = value.value
            setattr(episode, name, value)
        self._write(episode)
        return episode

    def list_completed(self, limit: int = EPISODE_LIST_LIMIT) -> list[Episode]:
        """Completed episodes, newest first."""
        if not os.path.isdir(self.records_dir):
            return []
        episodes = []
        for name in os.listdir(self.records_dir):
            if not name.endswith(".json"):
                continue
            episode = self.get(name[:-len(".json")])
            if episode.status == EpisodeStatus.COMPLETED.value:
                episodes.append(episode)
        episodes.sort(key=lambda e: e.date, reverse=True)
        return episodes[:limit]
