"""Intermediate representation of an API document."""

from .builder import SpecBuilder, build_spec, check_acyclic, filter_kind
from .nodes import (
    Action,
    ActionResponse,
    Attribute,
    EnumDef,
    Error,
    FilterKind,
    JsonKey,
    OperationResponse,
    Parameter,
    ParameterLocation,
    Resource,
    Spec,
    Version,
    WebhookInfo,
)
from .types import TypeField, TypeKind, TypeRef, classify

__all__ = [
    "Action",
    "ActionResponse",
    "Attribute",
    "EnumDef",
    "Error",
    "FilterKind",
    "JsonKey",
    "OperationResponse",
    "Parameter",
    "ParameterLocation",
    "Resource",
    "Spec",
    "SpecBuilder",
    "TypeField",
    "TypeKind",
    "TypeRef",
    "Version",
    "WebhookInfo",
    "build_spec",
    "check_acyclic",
    "classify",
    "filter_kind",
]
