"""
Python type rendering for generated models.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from ..ir.nodes import OperationResponse, Resource
from ..ir.types import TypeKind, TypeRef
from ..naming import singularize
from .base import TypeClassifier


class PythonClassifier(TypeClassifier):
    """Renders types as ``typing`` annotations of the response models."""

    TYPE_MAP = {
        TypeKind.STRING: "str",
        TypeKind.BOOLEAN: "bool",
        TypeKind.INTEGER: "int",
        TypeKind.LONG: "int",
        TypeKind.TIMESTAMP: "int",
        # Decimals travel as strings to keep their precision
        TypeKind.DECIMAL: "str",
        TypeKind.NUMBER: "float",
        TypeKind.DOUBLE: "float",
        TypeKind.MAP: "Dict[Any, Any]",
        TypeKind.ENUM: "str",
        TypeKind.ANY: "Any",
    }

    def __init__(self, model_exists: Callable[[str], bool] | None = None):
        """
        Initialize the classifier.

        Args:
            model_exists: Whether a response model is generated for a schema name;
                references to other schemas render as plain dictionaries
        """
        self.model_exists = model_exists or (lambda name: True)

    def type_of(self, type_ref: TypeRef, scope: str | None = None) -> str:
        kind = type_ref.kind
        if kind in self.TYPE_MAP:
            return self.TYPE_MAP[kind]
        if kind is TypeKind.GLOBAL_ENUM:
            return f"enums.{type_ref.name}"
        if kind is TypeKind.ARRAY:
            item = type_ref.item
            if item is None or item.kind is TypeKind.ANY:
                return "List[Dict[Any, Any]]"
            return f"List[{self.type_of(item, scope)}]"
        if kind is TypeKind.OBJECT:
            if type_ref.is_global_reference:
                return self.type_of(TypeRef(TypeKind.REFERENCE, name=type_ref.name), scope)
            if type_ref.is_sub_resource:
                return f'"{singularize(type_ref.name)}Response"'
            return "Dict[str, Any]"
        if kind is TypeKind.REFERENCE:
            if self.model_exists(type_ref.name):
                return f'"{type_ref.name}Response"'
            return "Dict[Any, Any]"
        return "Any"

    def list_type_of(self, responses: Sequence[OperationResponse], scope: str | None = None) -> str:
        return "List[Dict[str, Any]]"

    def extra_context(self, resource: Resource) -> dict[str, Any]:
        return {"fields": [a.name for a in resource.visible_attributes]}
