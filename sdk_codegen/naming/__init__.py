"""Naming helpers: case conversion and English inflection."""

from .case import Case, capitalize, pascal_join, pascal_to_snake_case, snake_to_pascal_case, to_case
from .inflector import pluralize, singularize

__all__ = [
    "Case",
    "capitalize",
    "pascal_join",
    "pascal_to_snake_case",
    "pluralize",
    "singularize",
    "snake_to_pascal_case",
    "to_case",
]
