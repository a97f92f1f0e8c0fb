from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from functools import lru_cache
from typing import Any, Mapping

from .error import InvalidArgumentError, MalformedNumberError, OutOfRangeError


@dataclass(frozen=True)
class NumberFormat:
    """
    The numeric conventions of a locale, as far as sizes need them.

    Instances are immutable; the same one can be shared between threads.
    """

    decimal_point: str = "."
    thousands_sep: str = ""
    grouping: bool = False

    def __post_init__(self) -> None:
        if not self.decimal_point:
            raise InvalidArgumentError("decimal_point", "must not be empty")
        if any(c.isdigit() for c in self.decimal_point + self.thousands_sep):
            raise InvalidArgumentError("locale", "separators must not contain digits")
        if self.decimal_point == self.thousands_sep:
            raise InvalidArgumentError(
                "locale", f"decimal point and thousands separator are both `{self.decimal_point}`"
            )

    @classmethod
    def from_localeconv(cls, conv: Mapping[str, Any]) -> NumberFormat:
        """
        Build a format from the mapping returned by `locale.localeconv()`.

        Reading the host locale stays the caller's decision; nothing here calls `setlocale`.
        """
        decimal_point = conv.get("decimal_point") or "."
        thousands_sep = conv.get("thousands_sep") or ""
        grouping = bool(conv.get("grouping")) and bool(thousands_sep)
        return cls(decimal_point, thousands_sep, grouping)


INVARIANT = NumberFormat()


def _group(digits: str, sep: str) -> str:
    head = len(digits) % 3 or 3
    parts = [digits[:head]]
    parts.extend(digits[i:i + 3] for i in range(head, len(digits), 3))
    return sep.join(parts)


def format_number(value: float, places: int, fmt: NumberFormat = INVARIANT) -> str:
    if places < 0:
        raise OutOfRangeError("decimal_places", places)
    if not math.isfinite(value):
        raise OutOfRangeError("value", value)

    # Round the shortest decimal repr, so 1.005 behaves like it reads
    exact = Decimal(repr(float(value)))
    context = Context(prec=max(exact.adjusted(), 0) + places + 2)
    rounded = exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP, context=context)
    if rounded.is_zero():
        rounded = abs(rounded)

    text = format(rounded, "f")
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    whole, _, fraction = text.partition(".")
    if fmt.grouping and fmt.thousands_sep:
        whole = _group(whole, fmt.thousands_sep)
    if fraction:
        return f"{sign}{whole}{fmt.decimal_point}{fraction}"
    return f"{sign}{whole}"


@lru_cache(maxsize=32)
def _number_pattern(fmt: NumberFormat) -> re.Pattern[str]:
    point = re.escape(fmt.decimal_point)
    if fmt.grouping and fmt.thousands_sep:
        whole = rf"(?:[0-9]{{1,3}}(?:{re.escape(fmt.thousands_sep)}[0-9]{{3}})+|[0-9]+)"
    else:
        whole = r"[0-9]+"
    return re.compile(
        rf"(?P<sign>[+-]?)(?:(?P<whole>{whole})(?:{point}(?P<frac>[0-9]*))?|{point}(?P<bare>[0-9]+))"
        rf"(?P<exp>[eE][+-]?[0-9]+)?"
    )


def parse_number(text: str, fmt: NumberFormat = INVARIANT) -> float:
    match = _number_pattern(fmt).fullmatch(text.strip())
    if match is None:
        raise MalformedNumberError(text)
    whole = match["whole"] or "0"
    if fmt.thousands_sep:
        whole = whole.replace(fmt.thousands_sep, "")
    fraction = match["frac"] or match["bare"] or ""
    literal = f"{match['sign']}{whole}.{fraction or '0'}{match['exp'] or ''}"
    return float(literal)
