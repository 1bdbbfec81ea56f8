"""Resolution of a topic's run history on the filesystem."""
import errno
import os
import stat
from datetime import datetime
from pathlib import Path
from typing import List, Union

from topic_stats.errors import TopicDataError
from topic_stats.timestamps import is_candidate, parse_timestamp

HISTORY_FOLDER_NAME = "history"

# stat() errors meaning "there is no such directory"
ABSENT_ERRNOS = (errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG, errno.ELOOP)


def _is_dir(path: Path, topic_id: str) -> bool:
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except OSError as exc:
        if exc.errno in ABSENT_ERRNOS:
            return False
        raise TopicDataError(
            f"Failed to access '{path.name}' of topic '{topic_id}'."
        ) from exc
    except ValueError:
        # Embedded null byte
        return False


def topic_dir(root: Union[str, Path], topic_id: str) -> Path:
    """
    Locate the directory of a topic.

    Raises:
        NoSuchTopicError: if the topic id does not name a directory under root
        TopicDataError: if the topic directory cannot be accessed
    """
    # Only immediate subdirectories of root are topics
    if topic_id in ("", ".", "..") or "/" in topic_id or os.sep in topic_id:
        raise TopicDataError.no_such_topic(topic_id)
    path = Path(root) / topic_id
    if not _is_dir(path, topic_id):
        raise TopicDataError.no_such_topic(topic_id)
    return path


def history_dir(root: Union[str, Path], topic_id: str) -> Path:
    """
    Locate the history folder of a topic.

    Raises:
        NoSuchTopicError: if the topic does not exist
        MissingTopicDataError: if the history folder is absent or empty
        TopicDataError: if the history folder cannot be listed
    """
    path = topic_dir(root, topic_id) / HISTORY_FOLDER_NAME
    if not _is_dir(path, topic_id):
        raise TopicDataError.missing_topic_data(topic_id)
    try:
        with os.scandir(path) as entries:
            empty = next(entries, None) is None
    except OSError as exc:
        raise TopicDataError(
            f"Failed to read history of topic '{topic_id}'."
        ) from exc
    if empty:
        raise TopicDataError.missing_topic_data(topic_id)
    return path


def list_run_timestamps(root: Union[str, Path], topic_id: str) -> List[datetime]:
    """
    List the timestamps of all runs recorded for a topic, in no particular order.

    Entries that are not directories, or whose names are not valid
    timestamps, are skipped.
    """
    path = history_dir(root, topic_id)
    timestamps = []
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                if not is_candidate(entry.name) or not entry.is_dir():
                    continue
                ts = parse_timestamp(entry.name)
                if ts is not None:
                    timestamps.append(ts)
    except OSError as exc:
        raise TopicDataError(
            f"Failed to get last run timestamp of topic '{topic_id}'."
        ) from exc
    return timestamps


def resolve_latest_run(root: Union[str, Path], topic_id: str) -> datetime:
    """
    Find the timestamp of the most recent run of a topic.

    Raises:
        NoSuchTopicError: if the topic does not exist
        MissingTopicDataError: if the topic has no valid runs
        TopicDataError: on filesystem errors
    """
    timestamps = list_run_timestamps(root, topic_id)
    if not timestamps:
        raise TopicDataError.missing_topic_data(topic_id)
    return max(timestamps)
