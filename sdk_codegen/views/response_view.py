"""Response-side views of actions and resources."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from ..ir.nodes import Action, Attribute, OperationResponse, Resource
from ..naming import pascal_join, singularize


def required_first(responses) -> tuple[OperationResponse, ...]:
    """Required responses first; ties keep their original order."""
    return tuple(sorted(responses, key=lambda r: not r.required))


class ResponseView:
    """Response types of one action."""

    def __init__(self, action: Action, resource_name: str):
        self.action = action
        self.resource_name = resource_name

    @property
    def class_name(self) -> str:
        return pascal_join(self.action.name) + "Response"

    @cached_property
    def responses(self) -> tuple[OperationResponse, ...]:
        return required_first(self.action.response_parameters)

    @cached_property
    def _list_response(self) -> OperationResponse | None:
        return next((r for r in self.responses if r.is_list and r.children), None)

    @property
    def sub_response_class_name(self) -> str | None:
        """Class of one list entry (``<ActionName><ResourceName>Response``), for list responses."""
        if self._list_response is None:
            return None
        return pascal_join(self.action.name) + pascal_join(self.resource_name) + "Response"

    @cached_property
    def sub_responses(self) -> tuple[OperationResponse, ...]:
        if self._list_response is None:
            return ()
        return required_first(self._list_response.children)


@dataclass(frozen=True)
class NamedEnum:
    """An enum attribute with the name its generated type takes inside a resource."""

    name: str
    attribute: Attribute

    @property
    def values(self) -> tuple[str, ...]:
        return self.attribute.enum.valid_values if self.attribute.enum else self.attribute.type.element.values


class ResourceView:
    """Model-side view of a resource."""

    def __init__(self, resource: Resource):
        self.resource = resource

    @cached_property
    def sub_resource_attributes(self) -> tuple[Attribute, ...]:
        return tuple(
            a for a in self.resource.visible_attributes if a.is_sub_resource and not a.is_global_resource_reference
        )

    @cached_property
    def enums(self) -> tuple[NamedEnum, ...]:
        """Local enums of the resource, then enums of its sub-resources.

        Sub-resource enums are prefixed with the singular sub-resource attribute name,
        so ``status`` under ``subscription_items`` becomes ``subscription_item_status``.
        """
        named = [NamedEnum(a.name, a) for a in self.resource.enums]
        for parent in self.sub_resource_attributes:
            prefix = singularize(parent.name)
            named.extend(
                NamedEnum(f"{prefix}_{child.name}", child)
                for child in parent.attributes
                if child.is_enum and not child.is_global_enum
            )
        return tuple(named)

    @cached_property
    def global_enum_names(self) -> tuple[str, ...]:
        """Shared enums the resource or its sub-resources refer to, sorted."""
        names = {a.type.element.name for a in self.resource.global_enum_attributes}
        for sub in self.resource.sub_resources:
            names.update(a.type.element.name for a in sub.global_enum_attributes)
        return tuple(sorted(names))
