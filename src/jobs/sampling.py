"""Random down-sampling of records."""
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def sample_items(items: Sequence[T], sample_size: int, rng: Optional[random.Random] = None) -> list[T]:
    """Pick ``sample_size`` distinct items uniformly at random.

    Partial Fisher-Yates shuffle over a copy; the result comes back in
    shuffle order. When ``sample_size`` covers the whole input, the input is
    returned as-is.
    """
    if sample_size >= len(items):
        return list(items)
    if sample_size <= 0:
        return []

    rng = rng or random.Random()
    pool = list(items)
    for i in range(sample_size):
        j = rng.randint(i, len(pool) - 1)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:sample_size]
