"""
Identifier case conversion.

Splits identifiers into words according to their source convention and joins them
again in the requested one. Conversion is total: any string converts, and converting
an identifier to the convention it is already in returns it unchanged.
"""

from __future__ import annotations

import re
from enum import Enum

# Acronym runs and digit runs count as words of their own
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")

_UPPER_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class Case(Enum):
    """Identifier conventions understood by :func:`to_case`."""

    SNAKE = "snake"  # lower_underscore
    CAMEL = "camel"  # lowerCamel
    PASCAL = "pascal"  # UpperCamel
    KEBAB = "kebab"  # lower-hyphen
    CONSTANT = "constant"  # UPPER_UNDERSCORE


def _split(identifier: str, case: Case) -> list[str]:
    if case in (Case.SNAKE, Case.CONSTANT):
        return identifier.split("_")
    if case is Case.KEBAB:
        return identifier.split("-")
    return _UPPER_BOUNDARY.split(identifier)


def _title(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_case(identifier: str, from_case: Case, to: Case) -> str:
    """Convert ``identifier`` from one naming convention to another.

    Examples:
        to_case("customer_id", Case.SNAKE, Case.PASCAL) -> "CustomerId"
        to_case("customerId", Case.CAMEL, Case.SNAKE) -> "customer_id"
        to_case("CustomerId", Case.PASCAL, Case.KEBAB) -> "customer-id"

    Args:
        identifier: The identifier to convert
        from_case: Convention ``identifier`` is written in
        to: Convention to produce

    Returns:
        The converted identifier
    """
    if from_case is to or not identifier:
        return identifier
    words = _split(identifier, from_case)
    if to is Case.SNAKE:
        return "_".join(w.lower() for w in words)
    if to is Case.CONSTANT:
        return "_".join(w.upper() for w in words)
    if to is Case.KEBAB:
        return "-".join(w.lower() for w in words)
    if to is Case.PASCAL:
        return "".join(_title(w) for w in words)
    return words[0].lower() + "".join(_title(w) for w in words[1:])


def capitalize(word: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return word[:1].upper() + word[1:]


def pascal_join(*parts: str) -> str:
    """Join name fragments into a class name.

    Each fragment is split on underscores and every piece gets its first letter
    upper-cased; the remaining letters are kept as written, so already-cased
    fragments survive ("CustomerAddress", "line_items" -> "CustomerAddressLineItems").
    """
    pieces = []
    for part in parts:
        for piece in part.split("_"):
            if piece:
                pieces.append(capitalize(piece))
    return "".join(pieces)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case, camelCase or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "payment-source" -> "PaymentSource"
    """
    if not text:
        return ""
    words = _WORD_PATTERN.findall(text.replace("_", " ").replace("-", " "))
    return "".join(word.capitalize() for word in words if word)


def pascal_to_snake_case(text: str) -> str:
    """Convert PascalCase or camelCase text to snake_case ("PaymentSource" -> "payment_source")."""
    return to_case(text, Case.PASCAL, Case.SNAKE)
