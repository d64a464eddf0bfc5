"""Decimal decoding for the fixed European numeric convention.

``.`` groups thousands and ``,`` marks the decimal point. No other locale is
recognized and nothing is rounded.
"""
from __future__ import annotations

import re
from decimal import Decimal

from statement_ingest.domain.errors import NumberFormatError

# Plain positional notation only: no exponent, NaN/Infinity or underscores.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def _to_decimal(cleaned: str, original: str) -> Decimal:
    if not _DECIMAL_RE.fullmatch(cleaned):
        raise NumberFormatError(f"Not a decimal number: {original!r}")
    return Decimal(cleaned)


def parse_locale_decimal(text: str) -> Decimal:
    """Decode ``"2.505,00"`` as ``Decimal("2505.00")``."""
    cleaned = text.strip().replace(".", "").replace(",", ".")
    return _to_decimal(cleaned, text)


def parse_comma_decimal(text: str) -> Decimal:
    """Decode a value whose only separator is the decimal comma.

    Used by the legacy line-oriented layout, which never groups thousands.
    """
    cleaned = text.strip().replace(",", ".")
    return _to_decimal(cleaned, text)
