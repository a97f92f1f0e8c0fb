from typing import List, Tuple

import pytest

from byte_tools.error import InvalidArgumentError
from byte_tools.size import (
    IEC_SUFFIXES,
    SI_SUFFIXES,
    GiB,
    KB,
    KiB,
    PB,
    PiB,
    SuffixEntry,
    SuffixTable,
    UnitStandard,
    resolve_table,
)

_CUSTOM: List[Tuple[str, float]] = [("X", 1), ("KX", 1000), ("MX", 1e6)]


class TestBuiltinTables:
    @pytest.mark.parametrize(
        "table, symbols",
        [
            (IEC_SUFFIXES, ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]),
            (SI_SUFFIXES, ["B", "KB", "MB", "GB", "TB", "PB"]),
        ],
    )
    def test_symbols(self, table: SuffixTable, symbols: List[str]):
        assert [e.symbol for e in table] == symbols

    def test_iec_factors(self):
        assert [e.factor for e in IEC_SUFFIXES] == [1024 ** i for i in range(6)]
        assert IEC_SUFFIXES.largest.factor == PiB

    def test_si_factors(self):
        assert [e.factor for e in SI_SUFFIXES] == [1000 ** i for i in range(6)]
        assert SI_SUFFIXES.largest.factor == PB

    def test_constants(self):
        assert KB == 1000
        assert KiB == 1024
        assert GiB == 1024 ** 3

    def test_base(self):
        assert IEC_SUFFIXES.base == SuffixEntry("B", 1)
        assert SI_SUFFIXES.base == SuffixEntry("B", 1)


class TestSuffixTable:
    def test_from_pairs(self):
        table = SuffixTable(_CUSTOM)
        assert len(table) == 3
        assert table[1] == SuffixEntry("KX", 1000.0)
        assert table.base.symbol == "X"

    def test_coerce_keeps_instance(self):
        assert SuffixTable.coerce(IEC_SUFFIXES) is IEC_SUFFIXES

    def test_coerce_pairs(self):
        assert SuffixTable.coerce(_CUSTOM) == SuffixTable(_CUSTOM)

    def test_does_not_hold_caller_list(self):
        pairs = list(_CUSTOM)
        table = SuffixTable(pairs)
        pairs.append(("GX", 1e9))
        assert len(table) == 3

    @pytest.mark.parametrize(
        "pairs",
        [
            [],
            [("KB", 1000)],
            [("B", 1), ("KB", 1000), ("MB", 1000)],
            [("B", 1), ("MB", 1e6), ("KB", 1e3)],
            [("B", 1), ("b", 8)],
            [("B", 1), ("", 1000)],
            [("B", 1), ("X", float("inf"))],
            [("B",)],
            [("B", "one")],
            [(1, 1)],
            [SuffixEntry(1, 1.0)],  # type: ignore
            [SuffixEntry("B", "one")],  # type: ignore
            None,
        ],
    )
    def test_invalid(self, pairs):
        with pytest.raises(InvalidArgumentError):
            SuffixTable(pairs)

    def test_by_length_longest_first(self):
        assert [e.symbol for e in IEC_SUFFIXES.by_length()] == ["KiB", "MiB", "GiB", "TiB", "PiB", "B"]
        assert [e.symbol for e in SI_SUFFIXES.by_length()] == ["KB", "MB", "GB", "TB", "PB", "B"]

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1, 0),
            (1023, 0),
            (1024, 1),
            (1024 ** 2 - 1, 1),
            (1024 ** 2, 2),
            (PiB, 5),
            (2 ** 63 - 1, 5),
        ],
    )
    def test_magnitude(self, value: int, expected: int):
        assert IEC_SUFFIXES.magnitude(value) == expected

    def test_magnitude_single_entry(self):
        table = SuffixTable([("B", 1)])
        assert table.magnitude(0.5) == 0
        assert table.magnitude(10 ** 20) == 0
        assert table.largest is table.base

    def test_magnitude_below_base(self):
        assert SI_SUFFIXES.magnitude(0.5) == 0

    def test_hashable(self):
        assert hash(SuffixTable(_CUSTOM)) == hash(SuffixTable(_CUSTOM))

    def test_repr(self):
        assert repr(SuffixTable(_CUSTOM)) == "SuffixTable(X=1, KX=1000, MX=1e+06)"


class TestSuffixEntry:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1 MB", True),
            ("1mb", True),
            ("1 Mb", True),
            ("MB", True),
            ("1 XMB", False),
            ("1 M", False),
            ("B", False),
        ],
    )
    def test_matches_end_of(self, text: str, expected: bool):
        assert SuffixEntry("MB", 1e6).matches_end_of(text) is expected


class TestResolveTable:
    def test_standards(self):
        assert resolve_table(UnitStandard.IEC) is IEC_SUFFIXES
        assert resolve_table(UnitStandard.SI) is SI_SUFFIXES

    def test_default(self):
        assert resolve_table() is IEC_SUFFIXES

    def test_table_wins(self):
        assert resolve_table(UnitStandard.SI, _CUSTOM) == SuffixTable(_CUSTOM)

    def test_unknown_standard(self):
        with pytest.raises(InvalidArgumentError):
            resolve_table("si")  # type: ignore

    def test_unhashable_standard(self):
        with pytest.raises(InvalidArgumentError):
            resolve_table([])  # type: ignore
