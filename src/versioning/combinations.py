"""Deterministic enumeration of version combinations.

The enumeration is a mixed-radix counter: one digit per package, the radix of
each digit being the length of that package's candidate list. The first digit
is the least significant, so the first package cycles fastest.
"""

from typing import Iterator, List, Mapping, Sequence, Tuple

from .models import Combination


def iter_index_vectors(lengths: Sequence[int]) -> Iterator[Tuple[int, ...]]:
    """Yield every index vector for the given radix lengths exactly once.

    Starts at all zeros. After each yield the first index is advanced; on
    overflow it resets to zero and the carry moves to the next position.
    Enumeration ends when the carry overflows past the last position.

    An empty ``lengths`` yields one empty vector; any zero length yields
    nothing, since no choice exists for that position.
    """
    if any(n <= 0 for n in lengths):
        return
    indices = [0] * len(lengths)
    while True:
        yield tuple(indices)
        carry = 1
        for i, n in enumerate(lengths):
            if carry == 0:
                break
            indices[i] += carry
            if indices[i] >= n:
                indices[i] = 0
            else:
                carry = 0
        if carry == 1:
            return


def package_order(candidates: Mapping[str, Sequence[str]]) -> List[str]:
    """Fixed iteration order for a run: package names sorted."""
    return sorted(candidates)


def count_combinations(candidates: Mapping[str, Sequence[str]]) -> int:
    """Number of combinations iter_combinations will yield."""
    total = 1
    for versions in candidates.values():
        total *= len(versions)
    return total


def iter_combinations(candidates: Mapping[str, Sequence[str]]) -> Iterator[Combination]:
    """Lazily yield one Combination per index vector, in enumeration order."""
    names = package_order(candidates)
    lists = [list(candidates[name]) for name in names]
    for vector in iter_index_vectors([len(versions) for versions in lists]):
        yield {name: lists[pos][idx] for pos, (name, idx) in enumerate(zip(names, vector))}
