"""
Base class for per-target type classifiers.

A classifier renders language-neutral ``TypeRef``s in one target's type syntax.
Each target owns exactly one classifier; classifiers hold no per-run state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from ..ir.nodes import OperationResponse, Resource
from ..ir.types import TypeKind, TypeRef


class TypeClassifier(ABC):
    """Renders IR types for one target."""

    # Rendering of the scalar kinds; each subclass declares its own table
    TYPE_MAP: ClassVar[Mapping[TypeKind, str]]

    @abstractmethod
    def type_of(self, type_ref: TypeRef, scope: str | None = None) -> str:
        """
        Render a type.

        Args:
            type_ref: The type to render
            scope: Class name of the resource the type appears in, if any

        Returns:
            Target-specific type string
        """

    @abstractmethod
    def list_type_of(self, responses: Sequence[OperationResponse], scope: str | None = None) -> str:
        """
        Render the type of a list response whose entries carry ``responses``.

        Args:
            responses: Fields of one list entry
            scope: Class name of the resource the list belongs to

        Returns:
            Target-specific list type string
        """

    @abstractmethod
    def extra_context(self, resource: Resource) -> dict[str, Any]:
        """Additional template variables for a resource."""
