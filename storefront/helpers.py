"""
Helper functions shared by the storefront components.

This module contains coercion of loosely typed page values into numbers,
product id derivation and price formatting for the presentation layer.
"""

import math
import re
import time
from decimal import Decimal
from typing import Any, Optional

from .config import settings

# Constants
INT32_MASK = 0xFFFFFFFF
INT32_SIGN_BIT = 0x80000000
NUMBER_PATTERN = re.compile(r"-?(?:\d[\d,]*(?:\.\d+)?|\.\d+)(?:[eE][-+]?\d+)?")


def parse_number(value: Any, default: float = 0.0) -> float:
    """
    Coerce a page attribute into a float.

    Accepts numbers and displayed text such as ``"₹ 1,299"``, ``"1299.50"``
    or ``"1e3"``.
    Anything that carries no finite number yields ``default``.

    Examples:
        >>> parse_number("₹ 1,299")
        1299.0
        >>> parse_number(None)
        0.0
        >>> parse_number("n/a", default=5)
        5
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        match = NUMBER_PATTERN.search(value)
        if not match:
            return default
        try:
            number = float(match.group(0).replace(",", ""))
        except ValueError:
            return default
    else:
        return default

    if math.isnan(number) or math.isinf(number):
        return default
    return number


def _to_int32(value: int) -> int:
    value &= INT32_MASK
    return value - (INT32_MASK + 1) if value & INT32_SIGN_BIT else value


def hash_string(text: str) -> int:
    """
    Compute the 31-multiplier string hash used for generated product ids.

    Operates on UTF-16 code units with 32-bit wraparound and returns the
    absolute value, so ids derived from a name stay identical to the ids the
    page generates for the same name. Lone surrogates hash as their raw code
    unit.
    """
    encoded = text.encode("utf-16-le", errors="surrogatepass")
    h = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32((h << 5) - h + unit)
    return abs(h)


def derive_product_id(product_id: Any, name: Optional[str]) -> str:
    """
    Pick the id for a product added to the cart.

    Order of preference: explicit id, hash of the name, current timestamp
    in milliseconds.
    """
    if product_id is not None and str(product_id).strip():
        return str(product_id).strip()
    if name:
        return str(hash_string(name))
    return str(int(time.time() * 1000))


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_price(amount: float, symbol: Optional[str] = None) -> str:
    """
    Format an amount with Indian digit grouping.

    At most two fraction digits are shown and trailing zeros are dropped.

    Examples:
        >>> format_price(129999)
        '₹1,29,999'
        >>> format_price(-100.5)
        '-₹100.5'
    """
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.2f}".partition(".")
    fraction = fraction.rstrip("0")

    formatted = _group_indian(whole)
    if fraction:
        formatted += f".{fraction}"
    return f"{sign}{symbol}{formatted}"
