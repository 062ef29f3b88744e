"""CSV encoding for inventory files.

Layout::

    id,name,price,quantity
    1,Widget,9.99,10
    2,"O'Brien, Inc",12.5,3

A name is quote-wrapped (with embedded quotes doubled) only when it
contains a comma. Reading undoes that doubling, so a quoted name comes
back exactly as it was written.
"""

from __future__ import annotations

import logging
import re

from ims.domain.model.product import Product

logger = logging.getLogger(__name__)

HEADER = "id,name,price,quantity"
MIN_FIELDS = 4

# Plain ASCII decimal forms only: no digit-group underscores, no inf/nan.
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def encode_lines(products: list[Product]) -> list[str]:
    """Return the header followed by one CSV row per record."""
    return [HEADER] + [p.to_csv_row() for p in products]


def split_csv_line(line: str) -> list[str]:
    """Split *line* on commas that are not inside a quoted region.

    A quote toggles quoted mode. Inside quoted mode a doubled quote
    stands for one literal quote character.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '"':
            if in_quotes and line[i + 1:i + 2] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current))
    return fields


def decode_row(line: str) -> Product | None:
    """Parse one data row, or return None if it is malformed."""
    parts = split_csv_line(line)
    if len(parts) < MIN_FIELDS:
        logger.debug("Skipping row with %d fields: %r", len(parts), line)
        return None
    try:
        product_id = _parse_int(parts[0])
        price = _parse_float(parts[2])
        quantity = _parse_int(parts[3])
    except ValueError:
        logger.debug("Skipping row with unparsable numbers: %r", line)
        return None
    return Product(id=product_id, name=parts[1].strip(), price=price, quantity=quantity)


def _parse_int(field: str) -> int:
    text = field.strip()
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def _parse_float(field: str) -> float:
    text = field.strip()
    if not _FLOAT_PATTERN.fullmatch(text):
        raise ValueError(f"not a decimal number: {text!r}")
    return float(text)


def decode_lines(lines: list[str]) -> list[Product]:
    """Decode every data row after the first line, skipping bad rows.

    The first line is always treated as the header, whatever it holds.
    """
    products: list[Product] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        product = decode_row(line)
        if product is not None:
            products.append(product)
    return products
