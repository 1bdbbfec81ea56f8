"""Shared FastAPI dependencies."""
from functools import lru_cache

from topic_stats.config import settings
from topic_stats.provider import FileSystemTopicDataProvider, TopicDataProvider


@lru_cache
def get_provider() -> TopicDataProvider:
    """
    Build the topic data provider for the configured root folder.

    Raises TopicDataError if TOPICS_ROOT is not an existing directory.
    """
    return FileSystemTopicDataProvider(settings.topics_root or "")
