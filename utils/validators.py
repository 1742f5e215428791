"""Input validation helpers."""

from __future__ import annotations

import re

from core.constants import PurchaseDefaults
from core.exceptions import InvalidInputError


COUNT_RE = re.compile(r"^[+-]?[0-9]+$")
INVALID_FORMAT_MESSAGE = "Invalid input format. Please enter name and number of tickets."


def validate_name(value: str) -> bool:
    return bool(value and value.strip())


def parse_ticket_count(value: str) -> int:
    """Parse a ticket count, which must be a non-negative base-10 integer.

    Raises:
        InvalidInputError: If the value is not an integer or is negative
    """
    stripped = (value or "").strip()
    if not COUNT_RE.match(stripped):
        raise InvalidInputError(f"{INVALID_FORMAT_MESSAGE} '{stripped}' is not a number.")
    count = int(stripped)
    if count < 0:
        raise InvalidInputError("Number of tickets must not be negative.")
    return count


def parse_purchase_input(raw_input: str) -> tuple[str, int]:
    """Split a ``"<name>,<count>"`` purchase line.

    Returns:
        Tuple of (trimmed name, ticket count)

    Raises:
        InvalidInputError: If the line is not exactly a name and a count
    """
    parts = (raw_input or "").split(PurchaseDefaults.SEPARATOR)
    if len(parts) != 2:
        raise InvalidInputError(INVALID_FORMAT_MESSAGE)

    name = parts[0].strip()
    if not validate_name(name):
        raise InvalidInputError(INVALID_FORMAT_MESSAGE)

    return name, parse_ticket_count(parts[1])
