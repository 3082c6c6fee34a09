from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class FrequencyTable:
    """Occurrence count per byte value.

    Entries are kept in first-discovery order (the position of each symbol's
    first occurrence in the input). The tree builder inserts leaves in this
    order, so it is what breaks ties between equal weights.
    """

    entries: tuple[tuple[int, int], ...] = ()
    _counts: dict[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_counts", dict(self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(self.entries)

    def __getitem__(self, symbol: int) -> int:
        return self._counts[symbol]

    def symbols(self) -> list[int]:
        return [sym for sym, _ in self.entries]

    def items(self) -> list[tuple[int, int]]:
        return list(self.entries)

    def total(self) -> int:
        return sum(count for _, count in self.entries)


def build_freq_table(data: bytes) -> FrequencyTable:
    # dict keeps insertion order: first occurrence wins the slot
    counts: dict[int, int] = {}
    for b in data:
        counts[b] = counts.get(b, 0) + 1
    return FrequencyTable(entries=tuple(counts.items()))
