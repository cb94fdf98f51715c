# door_catalog/services/importers/normalize.py
"""
Field normalizers for spreadsheet exports.

Width and height values are free-text size labels (``36``, ``6'8"``), so
every operation here is textual: labels are split and trimmed, never
converted to numbers. Prices are the one numeric field.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple, Union

from door_catalog.core.exceptions import CSVParseError, CodeConflictError

PRICE_JUNK = re.compile(r"[$,\s]")
NON_DIGITS = re.compile(r"[^0-9]")


def _split_labels(raw: Optional[str]) -> List[str]:
    if raw is None:
        return []
    text = str(raw).strip()
    if not text:
        return []
    if ',' not in text:
        return [text]
    labels = [part.strip() for part in text.split(',') if part.strip()]
    if not labels:
        raise CSVParseError(f"No labels in {raw!r}")
    return labels


def parse_widths(raw: Optional[str]) -> List[str]:
    """
    Split a widths cell into an ordered list of labels.

    "32, 34, 36" -> ["32", "34", "36"], "36" -> ["36"], "" -> [].
    Order is kept and duplicates are not removed. Empty fragments are
    dropped; a cell made only of commas raises CSVParseError.
    """
    return _split_labels(raw)


def parse_heights(raw: Optional[str]) -> List[str]:
    """Split a height cell. A single height is a one-element list."""
    return _split_labels(raw)


def parse_price(raw: Optional[str], default: Optional[Union[Decimal, float, int]] = None) -> Decimal:
    """
    Parse a price cell such as "$1,000 " into Decimal("1000").

    Args:
        raw: The cell value.
        default: Returned when the cell is empty or unparseable. When None,
            a CSVParseError is raised instead.

    Raises:
        CSVParseError: If the value cannot be parsed and no default is given.
    """
    cleaned = PRICE_JUNK.sub('', str(raw)) if raw is not None else ''
    try:
        value = Decimal(cleaned)
        if not value.is_finite():
            raise InvalidOperation(cleaned)
        return value
    except InvalidOperation:
        if default is not None:
            return Decimal(str(default))
        raise CSVParseError(f"Unparseable price: {raw!r}")


def synthesize_height_code(base_code: str, height: str) -> str:
    """
    Build a variant code from the digits of a height label.

    ("HAR-BS05", "6'8\"") -> "HAR-BS05-68"
    """
    digits = NON_DIGITS.sub('', height)
    if not digits:
        raise CSVParseError(f"Height {height!r} of {base_code} has no digits to build a code from")
    return f"{base_code}-{digits}"


def expand_height_variants(
    base_code: str,
    heights: List[str],
    always_suffix: bool = False,
) -> List[Tuple[str, str]]:
    """
    Map a row's heights to (code, height) pairs, one per panel model.

    A single height keeps the base code unless ``always_suffix`` is set
    (the height repair, whose output codes must never match its input
    codes). Several heights each get a synthesized code; two heights that
    reduce to the same code raise CodeConflictError.
    """
    if len(heights) == 1 and not always_suffix:
        return [(base_code, heights[0])]

    variants = []
    seen = {}
    for height in heights:
        code = synthesize_height_code(base_code, height)
        if code in seen:
            raise CodeConflictError(
                f"Heights {seen[code]!r} and {height!r} of {base_code} both map to code {code}"
            )
        seen[code] = height
        variants.append((code, height))
    return variants
