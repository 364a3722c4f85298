# discount_rules/has_one_product/specification.py
"""
Restricted-products specification.

Administrators store a comma-separated list where each entry is one of:

    77          the cart contains product 77 (any quantity)
    77:2        the cart contains exactly 2 of product 77
    77:1-3      the cart contains between 1 and 3 of product 77 (inclusive)

Entries are OR-ed. A bare entry that is not a number is skipped, but a
quantity or range entry with a bad number makes the whole specification
fail. Evaluation never raises on malformed text.

Quantities are compared against per-product totals: cart lines for the
same product (e.g. with different attributes) are summed first.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1

_INT_RE = re.compile(r"\s*[+-]?[0-9]+\s*")

# strict form accepted when an administrator saves the list
_ENTRY_RE = re.compile(r"([0-9]+)(?:\s*:\s*([0-9]+)(?:\s*-\s*([0-9]+))?)?")


def parse_int(text: Optional[str]) -> Optional[int]:
    """
    Integer in the signed 32-bit range, or None. Surrounding whitespace
    and a leading sign are accepted; digit separators and fractions are not.
    """
    if text is None or not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if value < INT32_MIN or value > INT32_MAX:
        return None
    return value


def split_entries(specification: Optional[str]) -> List[str]:
    """Split on commas, trim, drop empty entries."""
    return [t.strip() for t in (specification or "").split(",") if t.strip()]


@dataclass(frozen=True)
class ByProduct:
    product_id: int

    def matches(self, totals: Mapping[int, int]) -> bool:
        return self.product_id in totals


@dataclass(frozen=True)
class ExactQuantity:
    product_id: int
    quantity: int

    def matches(self, totals: Mapping[int, int]) -> bool:
        return self.product_id in totals and totals[self.product_id] == self.quantity


@dataclass(frozen=True)
class QuantityRange:
    product_id: int
    min_quantity: int
    max_quantity: int

    def matches(self, totals: Mapping[int, int]) -> bool:
        if self.product_id not in totals:
            return False
        return self.min_quantity <= totals[self.product_id] <= self.max_quantity


@dataclass(frozen=True)
class Malformed:
    """A quantity or range entry with a bad number; reaching it stops evaluation."""
    entry: str


Entry = Union[ByProduct, ExactQuantity, QuantityRange, Malformed]


def parse_entry(entry: str) -> Optional[Entry]:
    """
    Parse one trimmed entry. Returns None for a bare entry that is not a
    number (it is ignored).
    """
    if ":" not in entry:
        product_id = parse_int(entry)
        return None if product_id is None else ByProduct(product_id)

    parts = entry.split(":")
    product_id = parse_int(parts[0])

    if "-" in entry:
        bounds = parts[1].split("-")
        min_quantity = parse_int(bounds[0])
        max_quantity = parse_int(bounds[1]) if len(bounds) > 1 else None
        if product_id is None or min_quantity is None or max_quantity is None:
            return Malformed(entry)
        return QuantityRange(product_id, min_quantity, max_quantity)

    quantity = parse_int(parts[1])
    if product_id is None or quantity is None:
        return Malformed(entry)
    return ExactQuantity(product_id, quantity)


@dataclass(frozen=True)
class RuleSpecification:
    entries: Tuple[Entry, ...] = ()
    blank: bool = True

    @classmethod
    def parse(cls, specification: Optional[str]) -> "RuleSpecification":
        if not specification or not specification.strip():
            return cls()
        entries = []
        for token in split_entries(specification):
            entry = parse_entry(token)
            if entry is not None:
                entries.append(entry)
        return cls(entries=tuple(entries), blank=False)

    def matches(self, totals: Mapping[int, int]) -> bool:
        """
        Blank means "no restriction". Otherwise the first matching entry
        wins; a malformed entry reached before any match fails the lot.
        Nothing can match an empty cart.
        """
        if self.blank:
            return True
        if not self.entries or not totals:
            return False
        for entry in self.entries:
            if isinstance(entry, Malformed):
                logger.debug("Malformed restricted product entry %r; requirement not met", entry.entry)
                return False
            if entry.matches(totals):
                return True
        return False


def evaluate(specification: Optional[str], cart_totals: Mapping[int, int]) -> bool:
    return RuleSpecification.parse(specification).matches(cart_totals)


def aggregate_cart_lines(lines: Iterable) -> Dict[int, int]:
    """
    Total quantity per product id over cart items (anything with
    ``product_id`` and ``quantity`` attributes).
    """
    totals: Dict[int, int] = {}
    for line in lines:
        totals[line.product_id] = totals.get(line.product_id, 0) + line.quantity
    return totals


def referenced_product_ids(specification: Optional[str]) -> List[int]:
    """
    Product ids mentioned in the list, quantities and ranges ignored.
    Used for display only; entries that do not start with a number are skipped.
    """
    ids = []
    for token in split_entries(specification):
        if ":" in token:
            parts = [p for p in token.split(":") if p]
            if not parts:
                continue
            token = parts[0]
        product_id = parse_int(token)
        if product_id is not None:
            ids.append(product_id)
    return ids


def invalid_entries(specification: Optional[str]) -> List[str]:
    """
    Entries that do not follow the documented format: positive ids and
    non-negative quantities, with min <= max in ranges.
    """
    invalid = []
    for token in split_entries(specification):
        m = _ENTRY_RE.fullmatch(token)
        if not m:
            invalid.append(token)
            continue
        product_id, low, high = m.group(1), m.group(2), m.group(3)
        if parse_int(product_id) in (None, 0):
            invalid.append(token)
        elif low is not None and parse_int(low) is None:
            invalid.append(token)
        elif high is not None and (parse_int(high) is None or int(low) > int(high)):
            invalid.append(token)
    return invalid
