"""Min / max / average over a run's partition counts."""
from typing import Mapping, Tuple


def compute_stats(parts: Mapping[int, int]) -> Tuple[int, int, int]:
    """
    Reduce a partition -> count mapping to (min, max, avg).

    The average is the sum of counts divided by the number of partitions,
    truncated toward zero.

    Raises:
        ValueError: if the mapping is empty
    """
    if not parts:
        raise ValueError("cannot compute statistics for an empty partition map")

    counts = list(parts.values())
    total = sum(counts)
    avg = abs(total) // len(counts)
    if total < 0:
        avg = -avg
    return min(counts), max(counts), avg
