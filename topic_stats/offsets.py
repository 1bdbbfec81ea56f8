"""Parsing of per-partition message counts from a run's offsets file."""
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

CSV_DATAFILE_NAME = "offsets.csv"

INTEGER_REGEX = re.compile(r"[+-]?[0-9]+")
MAX_PARTITION = 2 ** 31 - 1
MIN_COUNT = -(2 ** 63)
MAX_COUNT = 2 ** 63 - 1


def parse_offset_line(line: str) -> Optional[Tuple[int, int]]:
    """
    Parse a single "<partition>,<count>" line.

    Partition must be a non-negative 32-bit integer and count a signed
    64-bit integer, both plain decimal without surrounding spaces.

    Returns:
        (partition, count), or None if the line is malformed
    """
    fields = line.rstrip("\r\n").split(",")
    if len(fields) != 2:
        return None
    if not all(INTEGER_REGEX.fullmatch(field) for field in fields):
        return None
    partition, count = int(fields[0]), int(fields[1])
    if not 0 <= partition <= MAX_PARTITION:
        return None
    if not MIN_COUNT <= count <= MAX_COUNT:
        return None
    return partition, count


def iter_offset_records(lines: Iterable[str]) -> Iterator[Tuple[int, int]]:
    """Yield valid (partition, count) records, dropping malformed lines."""
    for line in lines:
        record = parse_offset_line(line)
        if record is not None:
            yield record


def accumulate_offsets(records: Iterable[Tuple[int, int]]) -> Dict[int, int]:
    """Sum counts per partition."""
    parts: Dict[int, int] = {}
    for partition, count in records:
        parts[partition] = parts.get(partition, 0) + count
    return parts


def parse_offsets(path: Union[str, Path]) -> Dict[int, int]:
    """
    Read an offsets file into a partition -> count mapping.

    Duplicate partitions are summed. A file without valid lines gives an
    empty mapping. OSError propagates if the file cannot be opened or read.
    """
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return accumulate_offsets(iter_offset_records(f))
