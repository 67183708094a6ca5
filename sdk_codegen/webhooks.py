"""
Webhook event resolution.

Each webhook entry names the event schema its payload follows. The resources an
event carries are the ``$ref`` children of that schema's ``content`` attribute.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .ir.nodes import Attribute, Resource, WebhookInfo
from .ir.types import TypeKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventResource:
    """A resource carried in an event's content."""

    name: str
    is_array: bool = False


@dataclass(frozen=True)
class WebhookEvent:
    event_type: str
    resources: tuple[EventResource, ...] = ()


@dataclass(frozen=True)
class WebhookResolution:
    """Resolved events, sorted by event type, and the models they import."""

    events: tuple[WebhookEvent, ...] = ()
    imports: tuple[str, ...] = ()


def _content_references(attribute: Attribute) -> list[EventResource]:
    found = []
    for child in attribute.attributes:
        child_type = child.type
        if child_type.kind is TypeKind.REFERENCE:
            found.append(EventResource(child_type.name))
        elif child_type.kind is TypeKind.ARRAY and child_type.element.kind is TypeKind.REFERENCE:
            found.append(EventResource(child_type.element.name, is_array=True))
    return found


class WebhookResolver:
    """Matches webhook entries against event schemas."""

    def __init__(self, event_resources: Iterable[Resource], model_exists: Callable[[str], bool]):
        """
        Initialize the resolver.

        Args:
            event_resources: Resources built from event schemas
            model_exists: Whether the target generates a model with the given name
        """
        self.event_resources = {}
        for resource in event_resources:
            self.event_resources.setdefault(resource.name, resource)
        self.model_exists = model_exists

    def resources_of(self, schema_name: str | None) -> tuple[EventResource, ...]:
        """Resources carried by the event schema ``schema_name``; empty when it is unknown."""
        resource = self.event_resources.get(schema_name) if schema_name else None
        if resource is None:
            return ()
        content = resource.attribute("content")
        if content is None:
            return ()
        return tuple(r for r in _content_references(content) if self.model_exists(r.name))

    def resolve(self, webhook_infos: Iterable[WebhookInfo]) -> WebhookResolution:
        """
        Resolve webhook entries into events.

        Only the first entry of each event type counts; later duplicates are skipped.

        Args:
            webhook_infos: Webhook entries in document order

        Returns:
            The events sorted by type and the sorted, de-duplicated model imports
        """
        seen: set[str] = set()
        events = []
        imports: set[str] = set()
        for info in webhook_infos:
            if info.event_type in seen:
                logger.debug("Skipping duplicate webhook entry '%s'", info.event_type)
                continue
            seen.add(info.event_type)
            resources = self.resources_of(info.resource_schema_name)
            imports.update(r.name for r in resources)
            events.append(WebhookEvent(info.event_type, resources))
        events.sort(key=lambda e: e.event_type)
        return WebhookResolution(tuple(events), tuple(sorted(imports)))
