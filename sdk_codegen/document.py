"""
Read-only view over a parsed OpenAPI document.

Documents are loaded with PyYAML, which reads both the YAML and the JSON form.
Schema nodes stay plain mappings; the helpers below read their vendor
extensions.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .errors import SpecIntegrityError

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = "#/components/schemas/"


def ref_name(ref: str) -> str:
    """Last path segment of a reference ("#/components/schemas/Customer" -> "Customer")."""
    return ref.rsplit("/", 1)[-1]


def flag(node: Mapping[str, Any] | None, key: str) -> bool:
    """Whether a boolean extension is set on ``node``."""
    if not node:
        return False
    return node.get(key) is True


def extension(node: Mapping[str, Any] | None, key: str, default: Any = None) -> Any:
    if not node:
        return default
    value = node.get(key)
    return default if value is None else value


def items_of(schema: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    """Items schema of an array schema, or None."""
    if not schema:
        return None
    items = schema.get("items")
    return items if isinstance(items, Mapping) else None


def properties_of(schema: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not schema:
        return {}
    return schema.get("properties") or {}


def has_free_form_properties(schema: Mapping[str, Any]) -> bool:
    """Whether an object schema accepts arbitrary keys."""
    additional = schema.get("additionalProperties")
    return additional is True or isinstance(additional, Mapping)


class Document:
    """An OpenAPI document with convenient accessors for the parts the IR uses."""

    def __init__(self, data: Any, source: str = "<memory>"):
        if not isinstance(data, Mapping):
            raise SpecIntegrityError(f"{source}: document root must be a mapping, got {type(data).__name__}")
        self.data = data
        self.source = source

    @classmethod
    def load(cls, path: str | Path) -> Document:
        """Load a YAML or JSON document from ``path``."""
        path = Path(path)
        logger.debug("Loading API document %s", path)
        with open(path, encoding="utf-8") as f:
            return cls(yaml.safe_load(f), source=str(path))

    @classmethod
    def from_string(cls, text: str) -> Document:
        return cls(yaml.safe_load(text))

    @property
    def info(self) -> Mapping[str, Any]:
        return self.data.get("info") or {}

    @property
    def title(self) -> str:
        return self.info.get("title", "")

    @property
    def schemas(self) -> Mapping[str, Mapping[str, Any]]:
        components = self.data.get("components") or {}
        return components.get("schemas") or {}

    @property
    def paths(self) -> Mapping[str, Mapping[str, Any]]:
        return self.data.get("paths") or {}

    @property
    def webhooks(self) -> Mapping[str, Mapping[str, Any]]:
        return self.data.get("webhooks") or {}

    def resolve(self, ref: str) -> tuple[str, Mapping[str, Any]]:
        """Resolve a component schema reference.

        Args:
            ref: A reference such as "#/components/schemas/Customer"

        Returns:
            The schema name and the schema itself

        Raises:
            SpecIntegrityError: If the reference does not point at a component schema
        """
        if not ref.startswith(SCHEMA_REF_PREFIX):
            raise SpecIntegrityError(f"Unsupported reference '{ref}'")
        name = ref_name(ref)
        schema = self.schemas.get(name)
        if schema is None:
            raise SpecIntegrityError(f"Unresolvable reference '{ref}'")
        return name, schema
