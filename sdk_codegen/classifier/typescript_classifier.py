"""
TypeScript type rendering for generated declaration files.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..ir.nodes import Attribute, OperationResponse, Resource
from ..ir.types import TypeKind, TypeRef
from ..naming import singularize, snake_to_pascal_case
from .base import TypeClassifier


def _optional(name: str, required: bool) -> str:
    return name if required else f"{name}?"


class TypeScriptClassifier(TypeClassifier):
    """Renders types as TypeScript type expressions."""

    TYPE_MAP = {
        TypeKind.STRING: "string",
        TypeKind.BOOLEAN: "boolean",
        TypeKind.INTEGER: "number",
        TypeKind.LONG: "number",
        TypeKind.TIMESTAMP: "number",
        TypeKind.DECIMAL: "string",
        TypeKind.NUMBER: "number",
        TypeKind.DOUBLE: "number",
        TypeKind.MAP: "object",
        TypeKind.ANY: "any",
    }

    def type_of(self, type_ref: TypeRef, scope: str | None = None) -> str:
        kind = type_ref.kind
        if kind in self.TYPE_MAP:
            return self.TYPE_MAP[kind]
        if kind is TypeKind.ENUM:
            if not type_ref.values:
                return "string"
            return " | ".join(f"'{v}'" for v in type_ref.values)
        if kind is TypeKind.GLOBAL_ENUM:
            return f"{type_ref.name}Enum"
        if kind is TypeKind.ARRAY:
            item = type_ref.item
            if item is None or item.kind is TypeKind.ANY:
                return "any[]"
            rendered = self.type_of(item, scope)
            return f"({rendered})[]" if " | " in rendered else f"{rendered}[]"
        if kind is TypeKind.OBJECT:
            if type_ref.is_global_reference:
                return type_ref.name
            if type_ref.is_sub_resource:
                owner = snake_to_pascal_case(type_ref.parent) if type_ref.parent else scope
                name = singularize(type_ref.name)
                return f"{owner}.{name}" if owner else name
            fields = ",".join(
                f"{_optional(f.name, f.required)}:{self.type_of(f.type, scope)}" for f in type_ref.fields
            )
            return "{" + fields + "}"
        if kind is TypeKind.REFERENCE:
            return type_ref.name
        return "any"

    def response_type_of(self, response: OperationResponse, scope: str | None = None) -> str:
        if response.type is None:
            return "any"
        if response.referred_name:
            suffix = "[]" if response.is_list else ""
            return f"{response.referred_name}{suffix}"
        return self.type_of(response.type, scope)

    def list_type_of(self, responses: Sequence[OperationResponse], scope: str | None = None) -> str:
        fields = ",".join(
            f"{_optional(r.name, r.required)}:{self.response_type_of(r, scope)}" for r in responses
        )
        return "{" + fields + "}[]"

    def attribute_line(self, attribute: Attribute, scope: str | None = None) -> str:
        return f"{_optional(attribute.name, attribute.required)}: {self.type_of(attribute.type, scope)};"

    def extra_context(self, resource: Resource) -> dict[str, Any]:
        return {
            "attribute_lines": [self.attribute_line(a, resource.class_name) for a in resource.visible_attributes],
        }
