"""Topic listing and last-run statistics endpoints."""
from contextlib import contextmanager
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends
from topic_stats.dependencies import get_provider
from topic_stats.errors import MissingTopicDataError, NoSuchTopicError
from topic_stats.models import TopicParts, TopicStats
from topic_stats.provider import TopicDataProvider
from topic_stats.routes.metrics import topic_queries_total

router = APIRouter()


@contextmanager
def track_query(operation: str):
    """Count the outcome of a provider query."""
    try:
        yield
    except NoSuchTopicError:
        topic_queries_total.labels(operation=operation, result="no_such_topic").inc()
        raise
    except MissingTopicDataError:
        topic_queries_total.labels(operation=operation, result="missing_data").inc()
        raise
    except Exception:
        topic_queries_total.labels(operation=operation, result="error").inc()
        raise
    topic_queries_total.labels(operation=operation, result="ok").inc()


@router.get("/topics", response_model=List[str])
def list_topics(provider: TopicDataProvider = Depends(get_provider)):
    """List topic ids (one per directory under the root folder)."""
    with track_query("list_topics"):
        return provider.list_topics()


@router.get("/topics/{topic_id}/last", response_model=datetime)
def last_timestamp(topic_id: str, provider: TopicDataProvider = Depends(get_provider)):
    """Timestamp of the topic's most recent run."""
    with track_query("last"):
        return provider.get_last_timestamp(topic_id)


@router.get("/topics/{topic_id}/stats", response_model=TopicStats)
def topic_stats(topic_id: str, provider: TopicDataProvider = Depends(get_provider)):
    """
    Message count statistics of the topic's most recent run.

    Returns:
    - id: Topic id
    - timestamp: Run timestamp
    - min / max: Smallest and largest per-partition message count
    - avg: Total message count divided by the number of partitions
    """
    with track_query("stats"):
        return provider.get_stats(topic_id)


@router.get("/topics/{topic_id}/parts", response_model=TopicParts)
def topic_parts(topic_id: str, provider: TopicDataProvider = Depends(get_provider)):
    """Message count per partition of the topic's most recent run."""
    with track_query("parts"):
        return provider.get_parts(topic_id)
