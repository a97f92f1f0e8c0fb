from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from .error import ByteSizeError, InvalidArgumentError, OutOfRangeError, UnknownUnitError, negative_bytes_error
from .numfmt import INVARIANT, NumberFormat, format_number, parse_number
from .size import SuffixLike, SuffixTable, UnitStandard, resolve_table

logger = logging.getLogger(__name__)

TableLike = Union[SuffixTable, Iterable[SuffixLike]]


def _resolve_locale(locale: Optional[NumberFormat]) -> NumberFormat:
    if locale is None:
        return INVARIANT
    if not isinstance(locale, NumberFormat):
        raise InvalidArgumentError("locale", f"expected a NumberFormat (got `{locale!r}`)")
    return locale


def format_bytes(
    value: int,
    decimal_places: int = 2,
    standard: UnitStandard = UnitStandard.IEC,
    locale: Optional[NumberFormat] = None,
    table: Optional[TableLike] = None,
) -> str:
    """
    Convert a byte count into a human-readable string, e.g. `1536` -> `"1.50 KiB"`.

    The largest unit that does not exceed `value` is used; values beyond the largest unit stay in that unit.
    Zero is always rendered as `"0 <base unit>"`.
    """
    if value < 0:
        raise negative_bytes_error(value)
    if decimal_places < 0:
        raise OutOfRangeError("decimal_places", decimal_places)
    suffixes = resolve_table(standard, table)

    if value == 0:
        return f"0 {suffixes.base.symbol}"

    unit = suffixes[suffixes.magnitude(value)]
    try:
        adjusted = value / unit.factor
    except OverflowError:
        raise OutOfRangeError("bytes", value) from None
    number = format_number(adjusted, decimal_places, _resolve_locale(locale))
    return f"{number} {unit.symbol}"


def format_bytes_aligned(
    value: int,
    decimal_places: int = 2,
    standard: UnitStandard = UnitStandard.IEC,
    width: int = 10,
    pad_char: str = " ",
    locale: Optional[NumberFormat] = None,
    table: Optional[TableLike] = None,
) -> str:
    if not isinstance(pad_char, str) or len(pad_char) != 1:
        raise InvalidArgumentError("pad_char", f"expected a single character (got `{pad_char!r}`)")
    text = format_bytes(value, decimal_places, standard, locale, table)
    return text.rjust(width, pad_char)


def parse_bytes(
    text: Optional[str],
    standard: UnitStandard = UnitStandard.IEC,
    locale: Optional[NumberFormat] = None,
    table: Optional[TableLike] = None,
) -> int:
    """
    Parse a human-readable size (e.g. `"2.5 GiB"`, `"1KB"`) back into a byte count.

    Suffixes match case-insensitively, longest first; the result is truncated toward zero.
    """
    if text is None or not isinstance(text, str):
        raise InvalidArgumentError("text", f"expected a string (got `{text!r}`)")
    text = text.strip()
    if not text:
        raise InvalidArgumentError("text", "must not be empty or whitespace")
    suffixes = resolve_table(standard, table)

    for entry in suffixes.by_length():
        if not entry.matches_end_of(text):
            continue
        number_part = text[: len(text) - len(entry.symbol)].strip()
        number = parse_number(number_part, _resolve_locale(locale))
        scaled = number * entry.factor
        if not math.isfinite(scaled):
            raise OutOfRangeError("text", text)
        result = int(scaled)
        if result < 0:
            raise negative_bytes_error(result)
        return result

    raise UnknownUnitError(text)


def try_parse_bytes(
    text: Optional[str],
    standard: UnitStandard = UnitStandard.IEC,
    locale: Optional[NumberFormat] = None,
    table: Optional[TableLike] = None,
) -> Tuple[bool, int]:
    try:
        return True, parse_bytes(text, standard, locale, table)
    except ByteSizeError as e:
        logger.debug("Could not parse size `%r`: %s", text, e)
        return False, 0


@dataclass(frozen=True)
class SizeOptions:
    decimal_places: int = 2
    standard: UnitStandard = UnitStandard.IEC
    locale: Optional[NumberFormat] = None
    table: Optional[SuffixTable] = None
    width: int = 10
    pad_char: str = " "

    def __post_init__(self) -> None:
        if self.table is not None and not isinstance(self.table, SuffixTable):
            # coerce pair lists once; the dataclass is frozen
            object.__setattr__(self, "table", SuffixTable.coerce(self.table))

    @property
    def suffixes(self) -> SuffixTable:
        return resolve_table(self.standard, self.table)

    def format_bytes(self, value: int) -> str:
        return format_bytes(value, self.decimal_places, self.standard, self.locale, self.table)

    def format_bytes_aligned(self, value: int) -> str:
        return format_bytes_aligned(
            value, self.decimal_places, self.standard, self.width, self.pad_char, self.locale, self.table
        )

    def parse_bytes(self, text: Optional[str]) -> int:
        return parse_bytes(text, self.standard, self.locale, self.table)

    def try_parse_bytes(self, text: Optional[str]) -> Tuple[bool, int]:
        return try_parse_bytes(text, self.standard, self.locale, self.table)


DEFAULT_OPTIONS = SizeOptions()
