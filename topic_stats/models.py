"""Read-only views returned by topic queries."""
from datetime import datetime
from typing import Dict
from pydantic import BaseModel, ConfigDict


class TopicStats(BaseModel):
    """Message count statistics of a topic's last run."""
    id: str
    timestamp: datetime
    min: int
    max: int
    avg: int

    model_config = ConfigDict(frozen=True)


class TopicParts(BaseModel):
    """Message counts per partition of a topic's last run."""
    id: str
    timestamp: datetime
    partitions: Dict[int, int]

    model_config = ConfigDict(frozen=True)


class ErrorView(BaseModel):
    """Error payload returned to API clients."""
    errorMessage: str
