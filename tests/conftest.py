"""Pytest configuration and fixtures."""
import pytest
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional
from fastapi.testclient import TestClient
from topic_stats.config import settings
from topic_stats.dependencies import get_provider
from topic_stats.history import HISTORY_FOLDER_NAME
from topic_stats.offsets import CSV_DATAFILE_NAME
from topic_stats.timestamps import format_timestamp


@pytest.fixture(scope="function")
def topics_root(tmp_path, monkeypatch):
    """Create an empty topics root folder and point the service at it."""
    root = tmp_path / "topics"
    root.mkdir()

    monkeypatch.setenv("TOPICS_ROOT", str(root))
    settings.topics_root = str(root)
    get_provider.cache_clear()

    yield root

    # Cleanup
    settings.topics_root = None
    get_provider.cache_clear()


@pytest.fixture
def make_run(topics_root):
    """Factory creating <root>/<topic>/history/<ts>/offsets.csv."""

    def _make_run(topic_id: str, ts: datetime, lines: Optional[Iterable[str]] = None) -> Path:
        run_dir = topics_root / topic_id / HISTORY_FOLDER_NAME / format_timestamp(ts)
        run_dir.mkdir(parents=True, exist_ok=True)
        csv_path = run_dir / CSV_DATAFILE_NAME
        csv_path.write_text("".join(f"{line}\n" for line in (lines or [])))
        return csv_path

    return _make_run


@pytest.fixture
def client(topics_root):
    from topic_stats.main import app
    return TestClient(app)
