"""
Per-action parameter grouping.

Targets render request types from these groups instead of walking raw parameters:
scalar values, one-object sub-parameter groups, list-valued sub-parameter groups,
filters and sort options.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from ..ir.nodes import Action, Attribute, FilterKind
from ..ir.types import TypeKind
from ..naming import pascal_join


@dataclass(frozen=True)
class ViewOptions:
    """Switches that change which parameters a view exposes.

    Attributes:
        include_filter_sub_resources: Keep sub-resource parameters that are not filters
            in the merged parameter list
        include_pagination: Keep ``limit``/``offset`` style parameters
        accept_only_pagination: Keep pagination even when it is all the action takes
        include_sort_by: Group ``sort_by`` with its options as a multi sub-parameter
    """

    include_filter_sub_resources: bool = True
    include_pagination: bool = True
    accept_only_pagination: bool = True
    include_sort_by: bool = True


@dataclass(frozen=True)
class SubParameterGroup:
    """A parameter whose fields are rendered as their own input type."""

    attribute: Attribute
    fields: tuple[Attribute, ...]
    operation_key: str
    is_list: bool = False

    @property
    def name(self) -> str:
        return self.attribute.name

    @property
    def key(self) -> str:
        """Unique name of the group within its resource (``<field>_<operationKey>``)."""
        return f"{self.attribute.name}_{self.operation_key}"

    @property
    def required(self) -> bool:
        return self.attribute.required


@dataclass(frozen=True)
class FilterParameter:
    attribute: Attribute
    kind: FilterKind
    group: str | None = None  # Parent parameter for nested filters

    @property
    def name(self) -> str:
        return self.attribute.name

    @property
    def is_list(self) -> bool:
        return self.attribute.type.kind is TypeKind.ARRAY

    @property
    def type_name(self) -> str:
        return self.kind.type_name


def _by_sort_order(attributes) -> tuple[Attribute, ...]:
    return tuple(sorted(attributes, key=lambda a: a.sort_order))


class ActionView:
    """Grouped parameters of one action."""

    def __init__(self, action: Action, resource_name: str, options: ViewOptions | None = None):
        self.action = action
        self.resource_name = resource_name
        self.options = options or ViewOptions()

    @property
    def operation_key(self) -> str:
        return self.action.name

    @property
    def params_class_name(self) -> str:
        return pascal_join(self.action.name) + "Params"

    @cached_property
    def body_attributes(self) -> tuple[Attribute, ...]:
        return tuple(p.attribute for p in self.action.body_parameters if not p.is_hidden)

    @cached_property
    def query_attributes(self) -> tuple[Attribute, ...]:
        return tuple(p.attribute for p in self.action.query_parameters if not p.is_hidden)

    def _without_pagination(self, attributes: list[Attribute]) -> list[Attribute]:
        only_pagination = bool(attributes) and all(a.is_pagination for a in attributes)
        if not self.options.include_pagination or (only_pagination and not self.options.accept_only_pagination):
            return [a for a in attributes if not a.is_pagination]
        return attributes

    @cached_property
    def all_attributes(self) -> tuple[Attribute, ...]:
        """Visible body and query parameters, sorted by sort order."""
        attributes = [*self.body_attributes, *self.query_attributes]
        if not self.options.include_filter_sub_resources:
            attributes = [a for a in attributes if not a.is_sub_resource or a.is_filter]
        return _by_sort_order(self._without_pagination(attributes))

    @cached_property
    def request_body(self) -> tuple[Attribute, ...]:
        """Body parameters sent as form fields."""
        return _by_sort_order(a for a in self.body_attributes if not a.is_composite_array_body and not a.is_filter)

    @cached_property
    def query(self) -> tuple[Attribute, ...]:
        """Query parameters, with body filters of POST list actions folded in."""
        attributes = [*self.query_attributes, *(a for a in self.body_attributes if a.is_filter)]
        return _by_sort_order(self._without_pagination(attributes))

    def _is_sort_group(self, attribute: Attribute) -> bool:
        return self.options.include_sort_by and attribute.is_sort and bool(attribute.attributes)

    @cached_property
    def scalar_parameters(self) -> tuple[Attribute, ...]:
        """Parameters rendered as a single typed value."""
        grouped = {g.name for g in self.singular_sub_parameters}
        return tuple(
            a
            for a in self.all_attributes
            if a.name not in grouped and not a.is_filter and not a.is_composite_array_body and not a.is_sort
        )

    @cached_property
    def singular_sub_parameters(self) -> tuple[SubParameterGroup, ...]:
        """Object parameters with child fields, one input type each."""
        return tuple(
            SubParameterGroup(a, _by_sort_order(a.attributes), self.operation_key)
            for a in self.all_attributes
            if a.attributes
            and a.type.kind is not TypeKind.ARRAY
            and not a.is_composite_array_body
            and not a.is_filter
            and not a.is_sort
        )

    @cached_property
    def multi_sub_parameters(self) -> tuple[SubParameterGroup, ...]:
        """Composite array bodies (lists of items) and, when enabled, the sort group."""
        return tuple(
            SubParameterGroup(
                a, _by_sort_order(a.attributes), self.operation_key, is_list=a.is_composite_array_body
            )
            for a in self.all_attributes
            if (a.is_composite_array_body and a.attributes) or self._is_sort_group(a)
        )

    @cached_property
    def filter_parameters(self) -> tuple[FilterParameter, ...]:
        filters = []
        for attribute in self.query:
            if not attribute.is_filter:
                continue
            nested = [c for c in attribute.attributes if c.is_filter and c.filter_kind is not None]
            if nested:
                filters.extend(FilterParameter(c, c.filter_kind, group=attribute.name) for c in nested)
            elif attribute.filter_kind is not None:
                filters.append(FilterParameter(attribute, attribute.filter_kind))
        return tuple(filters)

    @cached_property
    def sort_parameters(self) -> tuple[Attribute, ...]:
        return tuple(a for a in self.all_attributes if a.is_sort)

    @property
    def sort_type_name(self) -> str | None:
        """Name of the synthesized sort-builder type, when the action sorts."""
        if not self.sort_parameters:
            return None
        return pascal_join(self.resource_name, self.action.name, "sort_by")

    @property
    def filter_kinds(self) -> tuple[FilterKind, ...]:
        return tuple(sorted({f.kind for f in self.filter_parameters}, key=lambda k: k.value))

    @property
    def has_input(self) -> bool:
        return bool(self.all_attributes or self.action.path_parameters)

