from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union, overload

from .error import InvalidArgumentError

_B: int = 1000
_iB: int = 1024

# Only the prefixes up to Peta/Pebi have a table entry

B: int = 1

KB: int = _B
KiB: int = _iB

MB: int = _B ** 2
MiB: int = _iB ** 2

GB: int = _B ** 3
GiB: int = _iB ** 3

TB: int = _B ** 4
TiB: int = _iB ** 4

PB: int = _B ** 5
PiB: int = _iB ** 5


class UnitStandard(Enum):
    IEC = "iec"  # 1024-based: KiB, MiB, ...
    SI = "si"  # 1000-based: KB, MB, ...


@dataclass(frozen=True)
class SuffixEntry:
    symbol: str
    factor: float

    def matches_end_of(self, text: str) -> bool:
        """True if `text` ends with this symbol (ignoring case) and the symbol isn't the tail of a longer word."""
        size = len(self.symbol)
        if len(text) < size or text[-size:].casefold() != self.symbol.casefold():
            return False
        return len(text) == size or not text[-size - 1].isalpha()


SuffixLike = Union[SuffixEntry, Tuple[str, float]]


def _coerce_entry(entry: SuffixLike) -> SuffixEntry:
    symbol, factor = (entry.symbol, entry.factor) if isinstance(entry, SuffixEntry) else (entry[0], entry[1])
    if not isinstance(symbol, str):
        raise TypeError(f"suffix symbol must be a string (got `{symbol!r}`)")
    return SuffixEntry(symbol, float(factor))


class SuffixTable(Sequence[SuffixEntry]):
    """
    An ordered, read-only unit system; entry 0 is the base unit.

    Factors must increase strictly and symbols must be unique (ignoring case).
    """

    __slots__ = ("_entries", "_by_length")

    def __init__(self, entries: Iterable[SuffixLike]):
        try:
            self._entries: Tuple[SuffixEntry, ...] = tuple(_coerce_entry(e) for e in entries)
        except (TypeError, ValueError, IndexError) as e:
            raise InvalidArgumentError("table", "expected (symbol, factor) pairs") from e
        self._validate()
        # sorted() is stable; equal-length symbols keep table order
        self._by_length: Tuple[SuffixEntry, ...] = tuple(
            sorted(self._entries, key=lambda e: len(e.symbol), reverse=True)
        )

    def _validate(self) -> None:
        if len(self._entries) == 0:
            raise InvalidArgumentError("table", "suffix table must not be empty")
        if self._entries[0].factor != 1:
            raise InvalidArgumentError(
                "table", f"base unit `{self._entries[0].symbol}` must have a factor of 1 (got `{self._entries[0].factor}`)"
            )
        seen = set()
        previous = None
        for entry in self._entries:
            if not entry.symbol:
                raise InvalidArgumentError("table", "suffix symbols must not be empty")
            folded = entry.symbol.casefold()
            if folded in seen:
                raise InvalidArgumentError("table", f"duplicate suffix symbol `{entry.symbol}`")
            seen.add(folded)
            if not math.isfinite(entry.factor):
                raise InvalidArgumentError("table", f"factor of `{entry.symbol}` must be finite")
            if previous is not None and entry.factor <= previous.factor:
                raise InvalidArgumentError(
                    "table", f"factor of `{entry.symbol}` must be greater than that of `{previous.symbol}`"
                )
            previous = entry

    @classmethod
    def coerce(cls, table: Union[SuffixTable, Iterable[SuffixLike]]) -> SuffixTable:
        if isinstance(table, SuffixTable):
            return table
        return cls(table)

    @property
    def base(self) -> SuffixEntry:
        return self._entries[0]

    @property
    def largest(self) -> SuffixEntry:
        return self._entries[-1]

    def by_length(self) -> Iterator[SuffixEntry]:
        return iter(self._by_length)

    def magnitude(self, value: float) -> int:
        # Index of the largest unit not exceeding `value`; clamps at both ends
        if value >= self.largest.factor:
            return len(self._entries) - 1
        return next((i - 1 for i in range(1, len(self._entries)) if value < self._entries[i].factor), 0)

    @overload
    def __getitem__(self, index: int) -> SuffixEntry:
        ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[SuffixEntry, ...]:
        ...

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SuffixTable):
            return self._entries == other._entries
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{e.symbol}={e.factor:g}" for e in self._entries)
        return f"{self.__class__.__name__}({pairs})"


IEC_SUFFIXES = SuffixTable(
    [
        ("B", B),
        ("KiB", KiB),
        ("MiB", MiB),
        ("GiB", GiB),
        ("TiB", TiB),
        ("PiB", PiB),
    ]
)
SI_SUFFIXES = SuffixTable(
    [
        ("B", B),
        ("KB", KB),
        ("MB", MB),
        ("GB", GB),
        ("TB", TB),
        ("PB", PB),
    ]
)

_STANDARD_TABLES = {
    UnitStandard.IEC: IEC_SUFFIXES,
    UnitStandard.SI: SI_SUFFIXES,
}


def resolve_table(
    standard: UnitStandard = UnitStandard.IEC,
    table: Optional[Union[SuffixTable, Iterable[SuffixLike]]] = None,
) -> SuffixTable:
    if table is not None:
        return SuffixTable.coerce(table)
    try:
        return _STANDARD_TABLES[standard]
    except (KeyError, TypeError):
        raise InvalidArgumentError("standard", f"unknown unit standard `{standard!r}`") from None
