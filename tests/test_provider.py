"""Tests for the filesystem topic data provider."""
import pytest
from pydantic import ValidationError
from datetime import datetime, timedelta
from topic_stats.errors import MissingTopicDataError, NoSuchTopicError, TopicDataError
from topic_stats.history import HISTORY_FOLDER_NAME
from topic_stats.offsets import CSV_DATAFILE_NAME
from topic_stats.provider import FileSystemTopicDataProvider
from topic_stats.timestamps import format_timestamp

TS = datetime(2014, 5, 1, 5, 43)
NORMAL_CSV = ["1,100", "2,200", "3,300", "4,400", "5,500"]
DUPLICATE_CSV = ["5,100", "5,200", "5,200"]


@pytest.fixture
def provider(topics_root):
    return FileSystemTopicDataProvider(topics_root)


def test_file_as_root_rejected(tmp_path):
    root_file = tmp_path / "topics.tmp"
    root_file.write_text("")
    with pytest.raises(TopicDataError):
        FileSystemTopicDataProvider(root_file)


def test_missing_root_rejected(tmp_path):
    with pytest.raises(TopicDataError):
        FileSystemTopicDataProvider(str(tmp_path / "missing"))


def test_list_topics(topics_root, provider):
    for topic_id in ("a", "b", "c"):
        (topics_root / topic_id).mkdir()
    (topics_root / "readme.txt").write_text("")

    topics = provider.list_topics()
    assert sorted(topics) == ["a", "b", "c"]


def test_list_topics_empty_root(provider):
    assert provider.list_topics() == []


def test_list_topics_excludes_symlinks(topics_root, provider, tmp_path):
    (topics_root / "a").mkdir()
    outside = tmp_path / "outside"
    outside.mkdir()
    (topics_root / "linked").symlink_to(outside, target_is_directory=True)
    assert provider.list_topics() == ["a"]


def test_list_topics_root_removed(topics_root, provider):
    topics_root.rmdir()
    with pytest.raises(TopicDataError):
        provider.list_topics()


def test_last_timestamp(make_run, provider):
    make_run("a", TS)
    assert provider.get_last_timestamp("a") == TS


def test_last_timestamp_of_several_runs(make_run, provider):
    for days in range(3):
        make_run("a", TS - timedelta(days=days))
    assert provider.get_last_timestamp("a") == TS


def test_parts_without_duplicates(make_run, provider):
    make_run("a", TS, NORMAL_CSV)

    parts = provider.get_parts("a")
    assert parts.id == "a"
    assert parts.timestamp == TS
    assert parts.partitions == {1: 100, 2: 200, 3: 300, 4: 400, 5: 500}


def test_parts_with_duplicates(make_run, provider):
    make_run("a", TS, DUPLICATE_CSV)

    parts = provider.get_parts("a")
    assert parts.id == "a"
    assert parts.timestamp == TS
    assert parts.partitions == {5: 500}


def test_stats_without_duplicates(make_run, provider):
    make_run("a", TS, NORMAL_CSV)

    stats = provider.get_stats("a")
    assert stats.id == "a"
    assert stats.timestamp == TS
    assert (stats.min, stats.max, stats.avg) == (100, 500, 300)


def test_stats_with_duplicates(make_run, provider):
    make_run("a", TS, DUPLICATE_CSV)

    stats = provider.get_stats("a")
    assert (stats.min, stats.max, stats.avg) == (500, 500, 500)


def test_only_latest_run_is_read(make_run, provider):
    make_run("a", TS - timedelta(days=1), ["1,1"])
    make_run("a", TS, ["1,7", "2,9"])

    assert provider.get_parts("a").partitions == {1: 7, 2: 9}
    assert provider.get_stats("a").timestamp == TS


def test_malformed_only_file(make_run, provider):
    """Empty data is an error for stats but not for parts."""
    make_run("a", TS, ["notanumber,5", "1,2,3"])

    with pytest.raises(MissingTopicDataError):
        provider.get_stats("a")

    parts = provider.get_parts("a")
    assert parts.partitions == {}
    assert parts.timestamp == TS


def test_unknown_topic(provider):
    with pytest.raises(NoSuchTopicError):
        provider.get_last_timestamp("missing")
    with pytest.raises(NoSuchTopicError):
        provider.get_stats("missing")
    with pytest.raises(NoSuchTopicError):
        provider.get_parts("missing")


def test_overlong_topic_id(provider):
    topic_id = "x" * 300
    with pytest.raises(NoSuchTopicError):
        provider.get_last_timestamp(topic_id)
    with pytest.raises(NoSuchTopicError):
        provider.get_stats(topic_id)
    with pytest.raises(NoSuchTopicError):
        provider.get_parts(topic_id)


def test_empty_history(topics_root, provider):
    (topics_root / "a" / HISTORY_FOLDER_NAME).mkdir(parents=True)
    with pytest.raises(MissingTopicDataError):
        provider.get_stats("a")
    with pytest.raises(MissingTopicDataError):
        provider.get_parts("a")


def test_missing_offsets_file(make_run, provider):
    csv_path = make_run("a", TS, NORMAL_CSV)
    csv_path.unlink()

    with pytest.raises(TopicDataError) as exc_info:
        provider.get_stats("a")
    assert not isinstance(exc_info.value, MissingTopicDataError)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_offsets_path(topics_root, provider):
    expected = topics_root / "a" / HISTORY_FOLDER_NAME / format_timestamp(TS) / CSV_DATAFILE_NAME
    assert provider.offsets_path("a", TS) == expected


def test_results_are_immutable(make_run, provider):
    make_run("a", TS, NORMAL_CSV)
    stats = provider.get_stats("a")
    with pytest.raises(ValidationError):
        stats.min = 0
