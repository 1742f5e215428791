"""Display formatting helpers."""

from __future__ import annotations


def format_currency(amount: float) -> str:
    """Render an amount without trailing fractional zeros.

    ``110.0`` -> ``"110"``, ``115.5`` -> ``"115.5"``. Amounts are rendered
    with six decimals first, so float noise such as ``11.000000000000002``
    disappears.
    """
    text = f"{amount:f}".rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def pluralize(count: int, word: str) -> str:
    """``1 ticket`` / ``3 tickets``."""
    return f"{count} {word}{'s' if count > 1 else ''}"
