"""Fisher-Yates shuffling and uniform duplicate picking."""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffle_in_place(items: list, rng: Optional[random.Random] = None) -> list:
    """Fisher-Yates shuffle a list in place and return it.

    Every ordering is equally likely given a uniform rng. When no rng is
    supplied a freshly seeded one is used for this call only.
    """
    rng = rng or random.Random()
    current = len(items)
    while current > 1:
        pick = rng.randrange(current)
        current -= 1
        items[current], items[pick] = items[pick], items[current]
    return items


def shuffle(sequence: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """Return a shuffled copy of sequence. The input is not modified."""
    return shuffle_in_place(list(sequence), rng)


def pick_one_of(duplicates: Sequence[T], rng: Optional[random.Random] = None) -> T:
    """Pick one element uniformly at random.

    Raises:
        ValueError: if duplicates is empty
    """
    if not duplicates:
        raise ValueError("pick_one_of: nothing to pick from")
    if len(duplicates) == 1:
        return duplicates[0]
    rng = rng or random.Random()
    return duplicates[rng.randrange(len(duplicates))]
