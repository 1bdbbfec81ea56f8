"""Topic data provider backed by a directory tree."""
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Protocol, Tuple, Union

from topic_stats.errors import TopicDataError
from topic_stats.history import HISTORY_FOLDER_NAME, resolve_latest_run
from topic_stats.models import TopicParts, TopicStats
from topic_stats.offsets import CSV_DATAFILE_NAME, parse_offsets
from topic_stats.stats import compute_stats
from topic_stats.timestamps import format_timestamp


class TopicDataProvider(Protocol):
    """Read-only queries over topics and their last runs."""

    def list_topics(self) -> List[str]:
        ...

    def get_last_timestamp(self, topic_id: str) -> datetime:
        ...

    def get_stats(self, topic_id: str) -> TopicStats:
        ...

    def get_parts(self, topic_id: str) -> TopicParts:
        ...


class FileSystemTopicDataProvider:
    """
    Topic data provider reading the layout

        <root>/<topic>/history/<YYYY-MM-DD-HH-mm-ss>/offsets.csv

    Every call scans the filesystem again; nothing is cached.
    """

    def __init__(self, root_path: Union[str, Path]):
        root = Path(root_path)
        try:
            is_dir = root.is_dir()
        except OSError as exc:
            raise TopicDataError(f"Root folder '{root_path}' cannot be accessed.") from exc
        if not is_dir:
            raise TopicDataError(f"Root folder '{root_path}' is not a directory.")
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def list_topics(self) -> List[str]:
        """Return topic ids in filesystem enumeration order."""
        try:
            with os.scandir(self._root) as entries:
                return [
                    entry.name
                    for entry in entries
                    if entry.is_dir(follow_symlinks=False)
                ]
        except OSError as exc:
            raise TopicDataError("Failed to list topics.") from exc

    def get_last_timestamp(self, topic_id: str) -> datetime:
        """Timestamp of the topic's most recent run."""
        return resolve_latest_run(self._root, topic_id)

    def get_stats(self, topic_id: str) -> TopicStats:
        """
        Min/max/avg message counts of the topic's most recent run.

        Raises:
            NoSuchTopicError: if the topic does not exist
            MissingTopicDataError: if there are no runs or the offsets file
                has no valid records
        """
        ts, parts = self._read_last_run(topic_id)
        if not parts:
            raise TopicDataError.missing_topic_data(topic_id)
        min_count, max_count, avg_count = compute_stats(parts)
        return TopicStats(
            id=topic_id,
            timestamp=ts,
            min=min_count,
            max=max_count,
            avg=avg_count,
        )

    def get_parts(self, topic_id: str) -> TopicParts:
        """
        Message counts per partition of the topic's most recent run.

        An offsets file without valid records gives an empty mapping.
        """
        ts, parts = self._read_last_run(topic_id)
        return TopicParts(id=topic_id, timestamp=ts, partitions=parts)

    def offsets_path(self, topic_id: str, ts: datetime) -> Path:
        """Path of the offsets file of a given run."""
        return (
            self._root / topic_id / HISTORY_FOLDER_NAME
            / format_timestamp(ts) / CSV_DATAFILE_NAME
        )

    def _read_last_run(self, topic_id: str) -> Tuple[datetime, Dict[int, int]]:
        ts = resolve_latest_run(self._root, topic_id)
        path = self.offsets_path(topic_id, ts)
        try:
            return ts, parse_offsets(path)
        except OSError as exc:
            raise TopicDataError(
                f"Failed to read offsets of topic '{topic_id}' run {format_timestamp(ts)}."
            ) from exc
