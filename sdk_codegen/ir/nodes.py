"""
IR (Intermediate Representation) node definitions.

These nodes are the language-neutral model of an API document: every vendor
extension has already been interpreted into a flag and every collection is a
tuple. Nodes are frozen; nothing changes them after the builder returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..config import ApiVersion, ProductCatalogVersion
from ..naming import pascal_join
from .types import TypeKind, TypeRef

DEFAULT_DEPRECATION_MESSAGE = "Please refer API docs to use other attributes"

SIMPLE_KINDS = frozenset(
    {
        TypeKind.STRING,
        TypeKind.BOOLEAN,
        TypeKind.INTEGER,
        TypeKind.LONG,
        TypeKind.TIMESTAMP,
        TypeKind.DECIMAL,
        TypeKind.NUMBER,
        TypeKind.DOUBLE,
    }
)


class FilterKind(Enum):
    """Filter families; each renders as its own filter type."""

    DATE = "Date"
    TIMESTAMP = "Timestamp"
    BOOLEAN = "Boolean"
    NUMBER = "Number"
    ENUM = "Enum"
    STRING = "String"

    @property
    def type_name(self) -> str:
        return f"{self.value}Filter"

    @classmethod
    def from_type_name(cls, type_name: str) -> FilterKind | None:
        for kind in cls:
            if kind.type_name == type_name:
                return kind
        return None


class ParameterLocation(Enum):
    PATH = "path"
    QUERY = "query"
    BODY = "body"


@dataclass(frozen=True)
class EnumDef:
    """An enum definition."""

    name: str
    values: tuple[str, ...] = ()
    deprecated_values: tuple[str, ...] = ()
    is_global: bool = False
    global_reference: str | None = None  # Name of the shared enum this one points at
    is_param_blank_option: bool = False
    is_api_column: bool = False
    is_external: bool = False
    api_name: str | None = None

    @property
    def valid_values(self) -> tuple[str, ...]:
        deprecated = set(self.deprecated_values)
        return tuple(v for v in self.values if v not in deprecated)


@dataclass(frozen=True)
class Attribute:
    """A property of a resource, a sub-resource or a request parameter."""

    name: str
    type: TypeRef
    required: bool = False
    description: str = ""
    sort_order: int = -1
    deprecated: bool = False
    deprecation_message: str = DEFAULT_DEPRECATION_MESSAGE
    is_hidden: bool = False  # Hidden in this run (never in QA mode)
    attributes: tuple[Attribute, ...] = ()  # Visible children
    enum: EnumDef | None = None

    is_sub_resource: bool = False
    is_sub_resource_array: bool = False
    sub_resource_name: str | None = None
    sub_resource_parent_name: str | None = None
    is_global_resource_reference: bool = False

    is_filter: bool = False
    filter_kind: FilterKind | None = None
    is_sort: bool = False
    is_pagination: bool = False
    is_composite_array_body: bool = False

    is_money_column: bool = False
    is_long_money_column: bool = False
    supports_custom_fields: bool = False
    supports_consent_fields: bool = False
    is_dependent: bool = False
    is_multi_value: bool = False
    is_api_column: bool = False
    is_foreign_column: bool = False
    is_gen_separate: bool = False
    is_presence_operator_supported: bool = False
    is_hidden_parameter: bool = False
    meta_model_name: str | None = None
    param_blank_option: str | None = None

    @property
    def is_list(self) -> bool:
        """Array with typed items."""
        return self.type.kind is TypeKind.ARRAY and self.type.item is not None and self.type.item.kind is not TypeKind.ANY

    @property
    def is_enum(self) -> bool:
        return self.type.element.is_enum

    @property
    def is_global_enum(self) -> bool:
        return self.type.element.kind is TypeKind.GLOBAL_ENUM

    @property
    def is_external_enum(self) -> bool:
        return self.enum is not None and self.enum.is_external

    @property
    def is_list_of_enum(self) -> bool:
        return self.is_list and not self.is_sub_resource and self.type.element.is_enum

    @property
    def is_list_of_simple_type(self) -> bool:
        return (
            self.is_list
            and not self.is_sub_resource
            and self.param_blank_option != "not_allowed"
            and not self.is_list_of_enum
            and self.type.element.kind in SIMPLE_KINDS
        )

    @property
    def is_content_object(self) -> bool:
        return self.name == "content" and self.type.kind is TypeKind.MAP

    @property
    def is_list_filter(self) -> bool:
        return self.is_filter and self.type.kind is TypeKind.ARRAY

    @property
    def has_required_children(self) -> bool:
        return any(a.required for a in self.attributes)

    @property
    def is_composite(self) -> bool:
        """Object or array that groups child attributes."""
        return self.is_sub_resource or self.is_composite_array_body


@dataclass(frozen=True)
class Parameter:
    """A path, query or body parameter of an action."""

    attribute: Attribute
    location: ParameterLocation

    @property
    def name(self) -> str:
        return self.attribute.name

    @property
    def type(self) -> TypeRef:
        return self.attribute.type

    @property
    def required(self) -> bool:
        return self.attribute.required

    @property
    def sort_order(self) -> int:
        return self.attribute.sort_order

    @property
    def deprecated(self) -> bool:
        return self.attribute.deprecated

    @property
    def is_hidden(self) -> bool:
        return self.attribute.is_hidden

    @property
    def is_filter(self) -> bool:
        return self.attribute.is_filter

    @property
    def is_pagination(self) -> bool:
        return self.attribute.is_pagination

    @property
    def is_sub_resource(self) -> bool:
        return self.attribute.is_sub_resource

    @property
    def is_composite_array_body(self) -> bool:
        return self.attribute.is_composite_array_body

    @property
    def has_required_sub_parameters(self) -> bool:
        return self.attribute.has_required_children


@dataclass(frozen=True)
class OperationResponse:
    """A field of an action's success response."""

    name: str
    type: TypeRef | None = None  # None for list wrappers
    referred_name: str | None = None  # Component schema the field points at
    is_list: bool = False
    required: bool = False
    children: tuple[OperationResponse, ...] = ()


@dataclass(frozen=True)
class ActionResponse:
    name: str
    description: str = ""
    parameters: tuple[OperationResponse, ...] = ()

    @property
    def is_list(self) -> bool:
        return any(p.is_list and p.children for p in self.parameters)


@dataclass(frozen=True)
class JsonKey:
    """A body key carrying free-form JSON, with its nesting level."""

    name: str
    level: int


@dataclass(frozen=True)
class Action:
    """An operation of a resource."""

    id: str
    name: str
    resource_id: str
    http_method: str
    url: str
    url_prefix: str = ""
    url_suffix: str = ""
    description: str = ""
    sort_order: int = -1
    path_parameters: tuple[Parameter, ...] = ()
    query_parameters: tuple[Parameter, ...] = ()
    body_parameters: tuple[Parameter, ...] = ()
    response: ActionResponse | None = None
    json_keys: tuple[JsonKey, ...] = ()

    is_list: bool = False
    is_batch: bool = False
    is_bulk: bool = False
    is_internal: bool = False
    is_hidden: bool = False
    is_deprecated: bool = False
    is_idempotent: bool = False
    needs_json_input: bool = False
    needs_input_object: bool = False
    is_custom_fields_supported: bool = False
    sub_domain: str | None = None
    batch_id: str | None = None
    module_name: str | None = None

    # Not hidden, bulk or internal (always True in QA mode)
    is_generated: bool = True

    @property
    def has_path_parameter(self) -> bool:
        return bool(self.path_parameters)

    @property
    def has_filter_body_parameters(self) -> bool:
        return any(p.is_filter for p in self.body_parameters)

    @property
    def is_all_body_parameters_optional(self) -> bool:
        return not any(p.required or p.has_required_sub_parameters for p in self.body_parameters)

    @property
    def is_all_query_parameters_optional(self) -> bool:
        return not any(p.required or p.has_required_sub_parameters for p in self.query_parameters)

    @property
    def has_input_parameters(self) -> bool:
        return bool(self.query_parameters or self.body_parameters)

    @property
    def response_parameters(self) -> tuple[OperationResponse, ...]:
        return self.response.parameters if self.response else ()


@dataclass(frozen=True)
class Resource:
    """One API entity."""

    name: str
    id: str
    description: str = ""
    sort_order: int = -1
    path_name: str = ""
    attributes: tuple[Attribute, ...] = ()
    actions: tuple[Action, ...] = ()
    sub_resources: tuple[Resource, ...] = ()
    dependent_resources: tuple[Resource, ...] = ()
    product_catalog_version: ProductCatalogVersion | None = None

    is_hidden: bool = False
    is_dependent: bool = False
    is_third_party: bool = False
    is_deprecated: bool = False
    is_custom_fields_supported: bool = False
    is_consent_fields_supported: bool = False
    is_additional_properties_supported: bool = False

    # For sub-resources and dependent resources
    parent_name: str | None = None
    is_array: bool = False  # Declared as an array property of its parent

    @property
    def class_name(self) -> str:
        return pascal_join(self.name)

    @property
    def visible_attributes(self) -> tuple[Attribute, ...]:
        return tuple(a for a in self.attributes if not a.is_hidden)

    @property
    def sorted_actions(self) -> tuple[Action, ...]:
        return tuple(sorted((a for a in self.actions if a.is_generated), key=lambda a: a.sort_order))

    @property
    def enums(self) -> tuple[Attribute, ...]:
        """Visible attributes carrying an enum local to this resource."""
        return tuple(a for a in self.visible_attributes if a.is_enum and not a.is_global_enum)

    @property
    def global_enum_attributes(self) -> tuple[Attribute, ...]:
        return tuple(a for a in self.visible_attributes if a.is_global_enum)

    @property
    def singular_dependent_resources(self) -> tuple[Resource, ...]:
        return tuple(r for r in self.dependent_resources if not r.is_array)

    @property
    def list_dependent_resources(self) -> tuple[Resource, ...]:
        return tuple(r for r in self.dependent_resources if r.is_array)

    @property
    def responses(self) -> tuple[OperationResponse, ...]:
        return tuple(p for a in self.sorted_actions for p in a.response_parameters)

    @property
    def has_list_operations(self) -> bool:
        return any(a.is_list for a in self.sorted_actions)

    @property
    def any_action_has_body_or_query_params(self) -> bool:
        return any(a.has_input_parameters for a in self.sorted_actions)

    @property
    def is_event(self) -> bool:
        return self.name == "Event"

    @property
    def is_export(self) -> bool:
        return self.name == "Export"

    @property
    def is_time_machine(self) -> bool:
        return self.name == "TimeMachine"

    @property
    def is_hosted_page(self) -> bool:
        return self.name == "HostedPage"

    @property
    def is_session(self) -> bool:
        return self.name == "Session"

    def attribute(self, name: str) -> Attribute | None:
        return next((a for a in self.attributes if a.name == name), None)


@dataclass(frozen=True)
class Error:
    """An error resource: a schema describing an API error payload."""

    name: str
    status: str | None = None
    category: str | None = None
    error_codes: tuple[str, ...] = ()
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class WebhookInfo:
    event_type: str
    resource_schema_name: str | None = None
    deprecated: bool = False


@dataclass(frozen=True)
class Version:
    api_version: ApiVersion = ApiVersion.V2
    product_catalog_version: ProductCatalogVersion = ProductCatalogVersion.PC2


@dataclass(frozen=True)
class Spec:
    """Root of the IR."""

    title: str = ""
    version: Version = field(default_factory=Version)
    resources: tuple[Resource, ...] = ()
    all_resources: tuple[Resource, ...] = ()
    event_resources: tuple[Resource, ...] = ()
    global_enums: tuple[EnumDef, ...] = ()
    errors: tuple[Error, ...] = ()
    webhooks: tuple[WebhookInfo, ...] = ()

    def resource(self, name: str) -> Resource | None:
        return next((r for r in self.all_resources if r.name == name), None)

    def pc_aware_resources(self) -> tuple[Resource, ...]:
        """Resources that belong to the product catalog generation of this run."""
        pc = self.version.product_catalog_version
        return tuple(
            r for r in self.resources if r.product_catalog_version is None or r.product_catalog_version is pc
        )

    def webhook_info(self, include_deprecated: bool = False) -> tuple[WebhookInfo, ...]:
        return tuple(w for w in self.webhooks if include_deprecated or not w.deprecated)
