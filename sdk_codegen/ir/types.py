"""
Language-neutral type descriptors.

``classify`` maps a schema node to a ``TypeRef``; each target turns ``TypeRef``s
into its own type syntax through a ``TypeClassifier``.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .. import extensions as ext
from ..document import extension, flag, has_free_form_properties, items_of, properties_of, ref_name
from ..errors import UnknownTypeWarning
from ..naming import snake_to_pascal_case

logger = logging.getLogger(__name__)


class TypeKind(Enum):
    """Kind of type in the IR."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    LONG = "long"  # int64 and money columns
    TIMESTAMP = "timestamp"  # integer with unix-time format
    DECIMAL = "decimal"  # arbitrary precision, carried as a string on the wire
    NUMBER = "number"
    DOUBLE = "double"
    OBJECT = "object"  # nested model, named or inline
    MAP = "map"  # free-form object
    ARRAY = "array"
    ENUM = "enum"  # enum local to its attribute
    GLOBAL_ENUM = "global_enum"  # enum shared across resources
    REFERENCE = "reference"  # $ref to a component schema
    ANY = "any"


NUMERIC_KINDS = frozenset(
    {TypeKind.INTEGER, TypeKind.LONG, TypeKind.TIMESTAMP, TypeKind.DECIMAL, TypeKind.NUMBER, TypeKind.DOUBLE}
)


@dataclass(frozen=True)
class TypeField:
    """A field of an inline object type."""

    name: str
    type: TypeRef
    required: bool = False


@dataclass(frozen=True)
class TypeRef:
    """A classified type."""

    kind: TypeKind = TypeKind.ANY
    name: str = ""  # Model, enum or referenced schema name

    # For arrays
    item: TypeRef | None = None

    # For enums: values that are not deprecated
    values: tuple[str, ...] = ()

    # For inline objects
    fields: tuple[TypeField, ...] = ()

    # For sub-resource objects; a flagged object without a parent belongs to its owner
    parent: str = ""
    is_global_reference: bool = False
    is_model: bool = False

    format: str = ""

    @property
    def is_enum(self) -> bool:
        return self.kind in (TypeKind.ENUM, TypeKind.GLOBAL_ENUM)

    @property
    def is_numeric(self) -> bool:
        return self.kind in NUMERIC_KINDS

    @property
    def is_sub_resource(self) -> bool:
        return self.kind is TypeKind.OBJECT and (self.is_model or bool(self.parent or self.is_global_reference))

    @property
    def element(self) -> TypeRef:
        """Element type for arrays, the type itself otherwise."""
        return self.item if self.kind is TypeKind.ARRAY and self.item is not None else self


ANY = TypeRef(TypeKind.ANY)


def global_enum_name(reference: str) -> str:
    """Enum name from a shared enum reference ("./enums/AutoCollection.yaml" -> "AutoCollection")."""
    return ref_name(reference).split(".")[0]


def deprecated_enum_values(schema: Mapping[str, Any]) -> tuple[str, ...]:
    raw = extension(schema, ext.DEPRECATED_ENUM_VALUES)
    if not raw:
        return ()
    if isinstance(raw, str):
        raw = raw.split(",")
    return tuple(str(v).strip() for v in raw if str(v).strip())


def _classify_enum(schema: Mapping[str, Any], name: str) -> TypeRef:
    deprecated = set(deprecated_enum_values(schema))
    values = tuple(str(v) for v in schema["enum"] if str(v) not in deprecated)
    reference = extension(schema, ext.GLOBAL_ENUM_REFERENCE)
    if reference or flag(schema, ext.IS_GLOBAL_ENUM):
        enum_name = global_enum_name(reference) if reference else snake_to_pascal_case(name)
        return TypeRef(TypeKind.GLOBAL_ENUM, name=enum_name, values=values)
    return TypeRef(TypeKind.ENUM, name=snake_to_pascal_case(name), values=values)


def _classify_integer(schema: Mapping[str, Any]) -> TypeRef:
    fmt = schema.get("format", "")
    if fmt == "unix-time":
        return TypeRef(TypeKind.TIMESTAMP, format=fmt)
    if fmt == "decimal":
        return TypeRef(TypeKind.DECIMAL, format=fmt)
    if fmt == "int64" or flag(schema, ext.IS_MONEY_COLUMN) or flag(schema, ext.IS_LONG_MONEY_COLUMN):
        return TypeRef(TypeKind.LONG, format=fmt)
    return TypeRef(TypeKind.INTEGER, format=fmt)


def _classify_number(schema: Mapping[str, Any]) -> TypeRef:
    fmt = schema.get("format", "")
    if fmt == "double":
        return TypeRef(TypeKind.DOUBLE, format=fmt)
    if fmt == "decimal":
        return TypeRef(TypeKind.DECIMAL, format=fmt)
    return TypeRef(TypeKind.NUMBER, format=fmt)


def _classify_object(schema: Mapping[str, Any], name: str) -> TypeRef:
    if flag(schema, ext.IS_SUB_RESOURCE):
        return TypeRef(
            TypeKind.OBJECT,
            name=extension(schema, ext.SUB_RESOURCE_NAME) or snake_to_pascal_case(name),
            parent=extension(schema, ext.SUB_RESOURCE_PARENT_NAME, ""),
            is_global_reference=flag(schema, ext.IS_GLOBAL_RESOURCE_REFERENCE),
            is_model=True,
        )
    properties = properties_of(schema)
    if has_free_form_properties(schema) or not properties:
        return TypeRef(TypeKind.MAP)
    required = set(schema.get("required") or ())
    fields = tuple(
        TypeField(key, classify(prop, key), key in required)
        for key, prop in properties.items()
        if not flag(prop, ext.HIDDEN_FROM_CLIENT_SDK)
    )
    return TypeRef(TypeKind.OBJECT, name=snake_to_pascal_case(name), fields=fields)


def classify(schema: Mapping[str, Any] | None, name: str = "") -> TypeRef:
    """Classify a schema node.

    Args:
        schema: The schema node (may be a ``$ref`` node or empty)
        name: Name of the attribute or parameter that carries the schema

    Returns:
        The type descriptor; unknown shapes warn with ``UnknownTypeWarning`` and
        yield an ``ANY`` descriptor
    """
    if not schema:
        return ANY
    if "$ref" in schema:
        return TypeRef(TypeKind.REFERENCE, name=ref_name(schema["$ref"]))
    schema_type = schema.get("type")
    if "enum" in schema and schema_type in (None, "string"):
        return _classify_enum(schema, name)
    if schema_type == "string":
        return TypeRef(TypeKind.STRING, format=schema.get("format", ""))
    if schema_type == "boolean":
        return TypeRef(TypeKind.BOOLEAN)
    if schema_type == "integer":
        return _classify_integer(schema)
    if schema_type == "number":
        return _classify_number(schema)
    if schema_type == "array":
        items = items_of(schema)
        return TypeRef(TypeKind.ARRAY, item=classify(items, name) if items else ANY)
    if schema_type == "object" or (schema_type is None and "properties" in schema):
        return _classify_object(schema, name)
    if schema_type is None and not any(k in schema for k in ("oneOf", "anyOf", "allOf")):
        return ANY
    message = f"Cannot classify schema of '{name or '<anonymous>'}' (type={schema_type!r}); treating it as untyped"
    logger.warning(message)
    warnings.warn(message, UnknownTypeWarning, stacklevel=2)
    return ANY
