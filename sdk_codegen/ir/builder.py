"""
IR builder.

Walks an OpenAPI document and builds the frozen ``Spec`` tree: resources with their
attributes, sub-resources and actions, shared enums, error resources and webhook
metadata. All vendor extensions are interpreted here; later stages only read flags.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from typing import Any

from .. import extensions as ext
from ..config import ApiVersion, ProductCatalogVersion, RunConfig
from ..document import (
    Document,
    extension,
    flag,
    has_free_form_properties,
    items_of,
    properties_of,
    ref_name,
)
from ..errors import SpecIntegrityError
from ..naming import pascal_join, pluralize, snake_to_pascal_case
from .nodes import (
    DEFAULT_DEPRECATION_MESSAGE,
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
from .types import TypeKind, TypeRef, classify, deprecated_enum_values, global_enum_name

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"^/([^/]+)(?:/\{[^}]+\})?(?:/([^/]+(?:/[^/]+)?))?$")

FORM_CONTENT = "application/x-www-form-urlencoded"
JSON_CONTENT = "application/json"

# Properties every error payload carries; not generated per error resource
ERROR_BASE_ATTRIBUTES = frozenset({"message", "error_msg", "type", "error_code", "api_error_code"})

HTTP_METHODS = ("get", "post")


def _sort_order(schema: Mapping[str, Any] | None) -> int:
    value = extension(schema, ext.SORT_ORDER)
    return int(value) if value is not None else -1


def _first_value(schema: Mapping[str, Any] | None) -> str | None:
    if not schema:
        return None
    if schema.get("enum"):
        return str(schema["enum"][0])
    if schema.get("default") is not None:
        return str(schema["default"])
    return None


def filter_kind(schema: Mapping[str, Any]) -> FilterKind:
    """Filter family of a filterable parameter.

    ``x-cb-sdk-filter-name`` decides when present; otherwise the first operator
    property (``is``, ``after``, ...) of the filter object is inspected. Array
    filters use their item schema.
    """
    named = extension(schema, ext.SDK_FILTER_NAME)
    if named:
        kind = FilterKind.from_type_name(named)
        if kind is not None:
            return kind
        logger.warning("Unknown filter name '%s'; using string filter", named)
        return FilterKind.STRING
    target = items_of(schema) if schema.get("type") == "array" else schema
    target = target or {}
    properties = properties_of(target)
    probe = next(iter(properties.values())) if properties else target
    probe = probe or {}
    fmt = probe.get("format")
    if probe.get("enum"):
        return FilterKind.BOOLEAN if fmt == "boolean" else FilterKind.ENUM
    probe_type = probe.get("type")
    if probe_type == "boolean":
        return FilterKind.BOOLEAN
    if fmt == "unix-time":
        return FilterKind.TIMESTAMP
    if fmt == "date":
        return FilterKind.DATE
    if probe_type in ("integer", "number") or (probe_type == "string" and fmt):
        return FilterKind.NUMBER
    return FilterKind.STRING


def _child_nodes(node: Mapping[str, Any] | list) -> Iterator[tuple[Any, Any]]:
    return iter(node.items()) if isinstance(node, Mapping) else enumerate(node)


def check_acyclic(node: Any, path: str = "#") -> None:
    """Reject documents whose node graph loops back on itself.

    Parsed YAML can only loop through aliases (``&a`` / ``*a``); a sub-resource or
    attribute chain built from such a document would never end. The walk keeps its
    own stack so that deeply nested documents do not exhaust the interpreter's.

    Raises:
        SpecIntegrityError: If a node is its own ancestor
    """
    if not isinstance(node, (Mapping, list)):
        return
    active = {id(node)}
    stack = [(node, path, _child_nodes(node))]
    while stack:
        current, current_path, children = stack[-1]
        for key, child in children:
            if not isinstance(child, (Mapping, list)):
                continue
            child_path = f"{current_path}/{key}"
            if id(child) in active:
                raise SpecIntegrityError(f"Cyclic schema chain at {child_path}")
            active.add(id(child))
            stack.append((child, child_path, _child_nodes(child)))
            break
        else:
            stack.pop()
            active.discard(id(current))


class SpecBuilder:
    """Builds the IR from a document.

    One builder builds one ``Spec``; building twice yields equal trees.
    """

    def __init__(self, document: Document, run_config: RunConfig | None = None):
        """
        Initialize the builder.

        Args:
            document: The API document
            run_config: QA mode and API version switches for this run
        """
        self.document = document
        self.run_config = run_config or RunConfig()
        self.qa_mode = self.run_config.qa_mode

        # Shared enum name -> value set, seeded from component enums
        self._global_enum_values: dict[str, frozenset[str]] = {}
        self._global_enum_defs: dict[str, EnumDef] = {}

    def build(self) -> Spec:
        """Build the IR.

        Raises:
            SpecIntegrityError: If the document is inconsistent
        """
        check_acyclic(self.document.data)
        version = self.version()
        self._global_enums()
        actions = self._actions_by_resource()

        built = [
            self._resource(name, schema, actions.get(extension(schema, ext.RESOURCE_ID), ()))
            for name, schema in self.document.schemas.items()
            if extension(schema, ext.RESOURCE_ID)
        ]
        self._check_unique(built)

        all_resources = sorted(
            (r for r in built if self.qa_mode or not r.is_third_party),
            key=lambda r: r.name,
        )
        resources = [r for r in all_resources if self.qa_mode or not r.is_hidden]

        spec = Spec(
            title=self.document.title,
            version=version,
            resources=tuple(resources),
            all_resources=tuple(all_resources),
            event_resources=self._event_resources(actions),
            errors=self._errors(),
            webhooks=self._webhooks(),
            global_enums=tuple(sorted(self._global_enum_defs.values(), key=lambda e: e.name)),
        )
        logger.info(
            "Built IR: %d resources, %d global enums, %d errors, %d webhooks",
            len(spec.resources),
            len(spec.global_enums),
            len(spec.errors),
            len(spec.webhooks),
        )
        return spec

    def version(self) -> Version:
        """API and product catalog version of the run."""
        info_ext = self.document.info
        api_version = self.run_config.api_version
        if api_version is None:
            api_version = ApiVersion.V1 if info_ext.get(ext.API_VERSION) == 1 else ApiVersion.V2
        if api_version is ApiVersion.V1:
            return Version(ApiVersion.V1, ProductCatalogVersion.PC1)
        if info_ext.get(ext.PRODUCT_CATALOG_VERSION) == 1:
            return Version(ApiVersion.V2, ProductCatalogVersion.PC1)
        return Version(ApiVersion.V2, ProductCatalogVersion.PC2)

    # Visibility

    def _is_hidden(self, schema: Mapping[str, Any] | None) -> bool:
        return not self.qa_mode and flag(schema, ext.HIDDEN_FROM_CLIENT_SDK)

    def _is_visible_attribute(self, schema: Mapping[str, Any]) -> bool:
        if self._is_hidden(schema):
            return False
        properties = properties_of(schema)
        if properties and all(self._is_hidden(p) for p in properties.values()):
            return False
        return not self._is_hidden(items_of(schema))

    def _resolve(self, schema: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
        if schema and "$ref" in schema:
            return self.document.resolve(schema["$ref"])[1]
        return schema

    def _check_reference(self, schema: Mapping[str, Any] | None) -> None:
        # Only the name of a referenced model is kept, but the model must exist
        for node in (schema, items_of(schema)):
            if node and "$ref" in node:
                self.document.resolve(node["$ref"])

    # Resources

    def _check_unique(self, resources: list[Resource]) -> None:
        seen: dict[str, str] = {}
        for resource in resources:
            if resource.id in seen:
                raise SpecIntegrityError(
                    f"Resource id '{resource.id}' is declared by both '{seen[resource.id]}' and '{resource.name}'"
                )
            seen[resource.id] = resource.name

    def _resource(
        self,
        name: str,
        schema: Mapping[str, Any],
        actions: tuple[Action, ...] | list[Action] = (),
        resource_id: str | None = None,
        sort_order: int | None = None,
        parent_name: str | None = None,
        is_array: bool = False,
    ) -> Resource:
        resource_id = resource_id or extension(schema, ext.RESOURCE_ID, "")
        required = set(schema.get("required") or ())
        attributes = tuple(
            self._attribute(key, prop, key in required)
            for key, prop in properties_of(schema).items()
            if prop is not None
        )
        pc_version = extension(schema, ext.PRODUCT_CATALOG_VERSION)
        return Resource(
            name=name,
            id=resource_id,
            description=schema.get("description", "") or "",
            sort_order=_sort_order(schema) if sort_order is None else sort_order,
            path_name=extension(schema, ext.RESOURCE_PATH_NAME) or pluralize(resource_id),
            attributes=attributes,
            actions=tuple(a for a in actions if self.qa_mode or not a.is_hidden),
            sub_resources=self._sub_resources(name, schema),
            dependent_resources=self._dependent_resources(schema),
            product_catalog_version=(
                None
                if pc_version is None
                else ProductCatalogVersion.PC1 if pc_version == 1 else ProductCatalogVersion.PC2
            ),
            is_hidden=flag(schema, ext.HIDDEN_FROM_CLIENT_SDK),
            is_dependent=flag(schema, ext.IS_DEPENDENT_RESOURCE),
            is_third_party=flag(schema, ext.IS_THIRD_PARTY_RESOURCE),
            is_deprecated=schema.get("deprecated") is True,
            is_custom_fields_supported=flag(schema, ext.IS_CUSTOM_FIELDS_SUPPORTED),
            is_consent_fields_supported=flag(schema, ext.IS_CONSENT_FIELDS_SUPPORTED),
            is_additional_properties_supported=has_free_form_properties(schema),
            parent_name=parent_name,
            is_array=is_array,
        )

    @staticmethod
    def _is_sub_resource_schema(schema: Mapping[str, Any]) -> bool:
        if schema.get("type") == "array":
            return flag(items_of(schema), ext.IS_SUB_RESOURCE)
        return flag(schema, ext.IS_SUB_RESOURCE)

    @staticmethod
    def _is_global_reference(schema: Mapping[str, Any]) -> bool:
        if schema.get("type") == "array":
            return flag(items_of(schema), ext.IS_GLOBAL_RESOURCE_REFERENCE)
        return flag(schema, ext.IS_GLOBAL_RESOURCE_REFERENCE)

    @staticmethod
    def _declared_sub_resource_name(schema: Mapping[str, Any]) -> str | None:
        target = items_of(schema) if schema.get("type") == "array" else schema
        return extension(target, ext.SUB_RESOURCE_NAME)

    def _sub_resources(self, parent: str, schema: Mapping[str, Any]) -> tuple[Resource, ...]:
        # Keyed by name: a later property with the same name replaces the earlier one in place
        found: dict[str, Resource] = {}
        for key, prop in properties_of(schema).items():
            if not prop or not self._is_sub_resource_schema(prop) or self._is_global_reference(prop):
                continue
            if self._is_hidden(prop):
                continue
            is_array = prop.get("type") == "array"
            if is_array:
                name = snake_to_pascal_case(key)
            else:
                name = extension(prop, ext.SUB_RESOURCE_NAME) or snake_to_pascal_case(key)
            target = items_of(prop) if is_array else prop
            found[name] = self._resource(
                name,
                target,
                resource_id=key,
                sort_order=_sort_order(prop),
                parent_name=extension(target, ext.SUB_RESOURCE_PARENT_NAME) or parent,
                is_array=is_array,
            )
        return tuple(found.values())

    def _dependent_resources(self, schema: Mapping[str, Any]) -> tuple[Resource, ...]:
        dependents = []
        for key, prop in properties_of(schema).items():
            if not prop or not self._is_sub_resource_schema(prop) or not self._is_global_reference(prop):
                continue
            is_array = prop.get("type") == "array"
            target = items_of(prop) if is_array else prop
            name = self._declared_sub_resource_name(prop) or snake_to_pascal_case(key)
            dependents.append(self._resource(name, target, resource_id=key, is_array=is_array))
        return tuple(dependents)

    def _event_resources(self, actions: dict[str, tuple[Action, ...]]) -> tuple[Resource, ...]:
        events = [
            self._resource(name, schema, actions.get(extension(schema, ext.RESOURCE_ID), ()))
            for name, schema in self.document.schemas.items()
            if "Event" in name
        ]
        visible = (
            r for r in events if self.qa_mode or not (r.is_hidden or r.is_third_party)
        )
        return tuple(sorted(visible, key=lambda r: r.name))

    # Attributes

    def _enum(self, name: str, schema: Mapping[str, Any]) -> EnumDef | None:
        target = schema
        if schema.get("type") == "array":
            target = items_of(schema) or {}
        if not target.get("enum"):
            return None
        values = tuple(str(v) for v in target["enum"])
        deprecated = deprecated_enum_values(target)
        reference = extension(target, ext.GLOBAL_ENUM_REFERENCE) or extension(schema, ext.GLOBAL_ENUM_REFERENCE)
        is_global = flag(target, ext.IS_GLOBAL_ENUM) or reference is not None
        reference_name = global_enum_name(reference) if reference else None
        if is_global:
            self._register_global_enum(
                EnumDef(reference_name or snake_to_pascal_case(name), values, deprecated, is_global=True)
            )
        return EnumDef(
            name=name,
            values=values,
            deprecated_values=deprecated,
            is_global=is_global,
            global_reference=reference_name,
            is_param_blank_option=extension(schema, ext.IS_PARAMETER_BLANK_OPTION) == "not_allowed",
            is_api_column=flag(schema, ext.IS_API_COLUMN),
            is_external=flag(schema, ext.IS_EXTERNAL_ENUM) or flag(items_of(schema), ext.IS_EXTERNAL_ENUM),
            api_name=extension(schema, ext.SDK_ENUM_API_NAME),
        )

    def _register_global_enum(self, enum: EnumDef) -> None:
        """Record a shared enum; every declaration of one name must list the same values."""
        value_set = frozenset(enum.values)
        known = self._global_enum_values.get(enum.name)
        if known is None:
            self._global_enum_values[enum.name] = value_set
            self._global_enum_defs[enum.name] = enum
        elif known != value_set:
            raise SpecIntegrityError(
                f"Shared enum '{enum.name}' is declared with conflicting values: "
                f"{sorted(known)} vs {sorted(value_set)}"
            )

    def _children(self, schema: Mapping[str, Any]) -> tuple[Attribute, ...]:
        source = schema
        if not properties_of(schema):
            items = items_of(schema)
            if not properties_of(items):
                return ()
            source = items
        required = set(source.get("required") or ())
        return tuple(
            self._attribute(key.replace("-", "_"), prop, key in required)
            for key, prop in properties_of(source).items()
            if prop is not None and self._is_visible_attribute(prop)
        )

    def _attribute(self, name: str, schema: Mapping[str, Any], required: bool) -> Attribute:
        self._check_reference(schema)
        items = items_of(schema)
        children = self._children(schema)
        is_filter = flag(schema, ext.IS_FILTER_PARAMETER) or any(c.is_filter for c in children)
        sort_order = _sort_order(schema)
        if sort_order == -1:
            sort_order = _sort_order(items)
        return Attribute(
            name=name,
            type=classify(schema, name),
            required=required,
            description=schema.get("description", "") or "",
            sort_order=sort_order,
            deprecated=schema.get("deprecated") is True or bool(items and items.get("deprecated") is True),
            deprecation_message=extension(schema, ext.DEPRECATION_MESSAGE, DEFAULT_DEPRECATION_MESSAGE),
            is_hidden=not self._is_visible_attribute(schema),
            attributes=children,
            enum=self._enum(name, schema),
            is_sub_resource=flag(schema, ext.IS_SUB_RESOURCE) or flag(items, ext.IS_SUB_RESOURCE),
            is_sub_resource_array=(
                schema.get("type") == "array" and bool(properties_of(items)) and flag(items, ext.IS_SUB_RESOURCE)
            ),
            sub_resource_name=extension(schema, ext.SUB_RESOURCE_NAME) or extension(items, ext.SUB_RESOURCE_NAME),
            sub_resource_parent_name=(
                extension(schema, ext.SUB_RESOURCE_PARENT_NAME) or extension(items, ext.SUB_RESOURCE_PARENT_NAME)
            ),
            is_global_resource_reference=self._is_global_reference(schema)
            or flag(schema, ext.IS_GLOBAL_RESOURCE_REFERENCE),
            is_filter=is_filter,
            filter_kind=filter_kind(schema) if is_filter else None,
            is_sort=name == "sort_by",
            is_pagination=flag(schema, ext.IS_PAGINATION_PARAMETER),
            is_composite_array_body=flag(schema, ext.IS_COMPOSITE_ARRAY_REQUEST_BODY),
            is_money_column=flag(schema, ext.IS_MONEY_COLUMN),
            is_long_money_column=flag(schema, ext.IS_LONG_MONEY_COLUMN),
            supports_custom_fields=flag(schema, ext.IS_CUSTOM_FIELDS_SUPPORTED),
            supports_consent_fields=flag(schema, ext.IS_CONSENT_FIELDS_SUPPORTED),
            is_dependent=flag(schema, ext.IS_DEPENDENT_ATTRIBUTE),
            is_multi_value=flag(schema, ext.IS_MULTI_ATTRIBUTE),
            is_api_column=flag(schema, ext.IS_API_COLUMN),
            is_foreign_column=flag(schema, ext.IS_FOREIGN_KEY_COLUMN),
            is_gen_separate=flag(items if schema.get("type") == "array" else schema, ext.IS_GEN_SEPARATE),
            is_presence_operator_supported=flag(schema, ext.IS_PRESENCE_OPERATOR_SUPPORTED),
            is_hidden_parameter=schema.get("type") == "array" and self._is_hidden(items),
            meta_model_name=extension(schema, ext.META_MODEL_NAME) or extension(items, ext.META_MODEL_NAME),
            param_blank_option=extension(schema, ext.IS_PARAMETER_BLANK_OPTION),
        )

    # Actions

    def _actions_by_resource(self) -> dict[str, tuple[Action, ...]]:
        grouped: dict[str, list[Action]] = {}
        for url, path_item in self.document.paths.items():
            for method in HTTP_METHODS:
                operation = (path_item or {}).get(method)
                if operation is None:
                    continue
                action = self._action(method.upper(), url, operation)
                grouped.setdefault(action.resource_id, []).append(action)
        return {k: tuple(v) for k, v in grouped.items()}

    def _action(self, method: str, url: str, operation: Mapping[str, Any]) -> Action:
        where = f"{method} {url}"
        if not any(str(k).startswith("x-") for k in operation):
            raise SpecIntegrityError(f"{where}: operation extensions not found")
        name = operation.get(ext.OPERATION_METHOD_NAME)
        if not name:
            raise SpecIntegrityError(f"{where}: missing {ext.OPERATION_METHOD_NAME}")
        resource_id = operation.get(ext.RESOURCE_ID)
        if not resource_id:
            raise SpecIntegrityError(f"{where}: missing {ext.RESOURCE_ID}")

        parameters = operation.get("parameters") or []
        body_schema = self._request_body_schema(operation) if method == "POST" else None
        match = URL_PATTERN.match(url)
        sub_domain = operation.get(ext.OPERATION_SUB_DOMAIN)
        batch_id = operation.get(ext.BATCH_OPERATION_PATH_ID)
        module = operation.get(ext.MODULE)
        is_hidden = flag(operation, ext.HIDDEN_FROM_CLIENT_SDK)
        is_bulk = flag(operation, ext.IS_BULK_OPERATION)
        is_internal = flag(operation, ext.IS_INTERNAL)

        if method == "POST":
            custom_fields = flag(body_schema, ext.IS_CUSTOM_FIELDS_SUPPORTED)
        else:
            custom_fields = flag(operation, ext.IS_CUSTOM_FIELDS_SUPPORTED)

        return Action(
            id=operation.get("operationId", name),
            name=name,
            resource_id=resource_id,
            http_method=method,
            url=url,
            url_prefix=(match.group(1) or "") if match else "",
            url_suffix=(match.group(2) or "") if match else "",
            description=operation.get("description", "") or "",
            sort_order=_sort_order(operation),
            path_parameters=tuple(
                self._parameter(p, ParameterLocation.PATH) for p in parameters if str(p.get("in", "")).lower() == "path"
            ),
            query_parameters=self._query_parameters(parameters) if method == "GET" else (),
            body_parameters=self._body_parameters(body_schema),
            response=self._action_response(name, self._success_schema(operation)),
            json_keys=self._json_keys(body_schema),
            is_list=flag(operation, ext.IS_OPERATION_LIST),
            is_batch=flag(operation, ext.OPERATION_IS_BATCH),
            is_bulk=is_bulk,
            is_internal=is_internal,
            is_hidden=is_hidden,
            is_deprecated=operation.get("deprecated") is True,
            is_idempotent=flag(operation, ext.IS_OPERATION_IDEMPOTENT),
            needs_json_input=flag(operation, ext.IS_OPERATION_NEEDS_JSON_INPUT),
            needs_input_object=flag(operation, ext.IS_OPERATION_NEEDS_INPUT_OBJECT),
            is_custom_fields_supported=custom_fields,
            sub_domain=str(sub_domain) if sub_domain is not None else None,
            batch_id=str(batch_id) if batch_id is not None else None,
            module_name=str(module) if module is not None else None,
            is_generated=self.qa_mode or not (is_hidden or is_bulk or is_internal),
        )

    def _parameter(self, parameter: Mapping[str, Any], location: ParameterLocation) -> Parameter:
        # Extensions may sit on the parameter object or on its schema
        schema = dict(parameter.get("schema") or {})
        for key, value in parameter.items():
            if str(key).startswith("x-cb-"):
                schema.setdefault(key, value)
        if parameter.get("deprecated") is True:
            schema["deprecated"] = True
        if parameter.get("description") and "description" not in schema:
            schema["description"] = parameter["description"]
        name = str(parameter.get("name", "")).replace("-", "_")
        required = parameter.get("required") is True or location is ParameterLocation.PATH
        return Parameter(self._attribute(name, schema, required), location)

    def _query_parameters(self, parameters: list[Mapping[str, Any]]) -> tuple[Parameter, ...]:
        query = [self._parameter(p, ParameterLocation.QUERY) for p in parameters if p.get("in") == "query"]
        return tuple(sorted(query, key=lambda p: p.sort_order))

    def _request_body_schema(self, operation: Mapping[str, Any]) -> Mapping[str, Any] | None:
        body = operation.get("requestBody")
        if not body:
            return None
        content = body.get("content") or {}
        media = content.get(FORM_CONTENT) or content.get(JSON_CONTENT)
        if not media:
            return None
        return self._resolve(media.get("schema"))

    def _body_parameters(self, schema: Mapping[str, Any] | None) -> tuple[Parameter, ...]:
        if not schema or not properties_of(schema) or schema.get("type", "object") != "object":
            return ()
        required = set(schema.get("required") or ())
        body = [
            Parameter(
                self._attribute(key, prop, key in required or prop.get("required") is not None),
                ParameterLocation.BODY,
            )
            for key, prop in properties_of(schema).items()
            if prop is not None
        ]
        return tuple(sorted(body, key=lambda p: p.sort_order))

    def _json_keys(self, schema: Mapping[str, Any] | None) -> tuple[JsonKey, ...]:
        if not schema or not properties_of(schema) or schema.get("type", "object") != "object":
            return ()
        keys: list[JsonKey] = []
        self._collect_json_keys(properties_of(schema), 0, keys)
        seen: set[JsonKey] = set()
        unique = []
        for key in keys:
            if key not in seen:
                seen.add(key)
                unique.append(key)
        return tuple(unique)

    def _collect_json_keys(self, properties: Mapping[str, Any], level: int, keys: list[JsonKey]) -> None:
        for key, schema in properties.items():
            if not schema or flag(schema, ext.HIDDEN_FROM_CLIENT_SDK):
                continue
            schema_type = schema.get("type")
            items = items_of(schema)
            if schema_type == "object":
                if not properties_of(schema):
                    keys.append(JsonKey(key, level))
                self._collect_json_keys(properties_of(schema), level + 1, keys)
            elif schema_type == "array" and items is not None:
                if items.get("type") is None:
                    keys.append(JsonKey(key, level))
                else:
                    self._collect_json_keys({key: items}, level, keys)

    # Responses

    def _success_schema(self, operation: Mapping[str, Any]) -> Mapping[str, Any] | None:
        response = (operation.get("responses") or {}).get("200") or (operation.get("responses") or {}).get(200)
        if not response:
            return None
        media = (response.get("content") or {}).get(JSON_CONTENT)
        if not media:
            return None
        return self._resolve(media.get("schema"))

    def _action_response(self, action_name: str, schema: Mapping[str, Any] | None) -> ActionResponse:
        name = pascal_join(action_name) + "Response"
        if not schema:
            return ActionResponse(name)
        list_schema = properties_of(schema).get("list")
        if list_schema and list_schema.get("type") == "array":
            items = self._resolve(items_of(list_schema)) or {}
            parameters = (
                OperationResponse("list", None, None, is_list=True, required=True, children=self._response_fields(items)),
                OperationResponse("next_offset", TypeRef(TypeKind.STRING), None, is_list=False, required=False),
            )
        else:
            parameters = self._response_fields(schema)
        return ActionResponse(name, schema.get("description", "") or "", parameters)

    def _response_fields(self, schema: Mapping[str, Any]) -> tuple[OperationResponse, ...]:
        required = set(schema.get("required") or ())
        fields = []
        for key, prop in properties_of(schema).items():
            if prop is None:
                continue
            self._check_reference(prop)
            is_array = prop.get("type") == "array"
            target = items_of(prop) if is_array else prop
            referred = ref_name(target["$ref"]) if target and "$ref" in target else None
            fields.append(OperationResponse(key, classify(prop, key), referred, is_array, key in required))
        return tuple(fields)

    # Shared enums, errors, webhooks

    def _global_enums(self) -> None:
        # Component string enums are the canonical shared definitions
        for name, schema in self.document.schemas.items():
            if schema.get("type") != "string" or not schema.get("enum"):
                continue
            self._register_global_enum(
                EnumDef(
                    name=name,
                    values=tuple(str(v) for v in schema["enum"]),
                    deprecated_values=deprecated_enum_values(schema),
                    is_global=True,
                    is_param_blank_option=extension(schema, ext.IS_PARAMETER_BLANK_OPTION) == "not_allowed",
                )
            )

    def _errors(self) -> tuple[Error, ...]:
        errors = []
        for name, schema in self.document.schemas.items():
            properties = properties_of(schema)
            if "api_error_code" not in properties or "message" not in properties:
                continue
            if name in ERROR_BASE_ATTRIBUTES or name.isdigit():
                continue
            required = set(schema.get("required") or ())
            attributes = [
                self._attribute(key, prop, key in required)
                for key, prop in properties.items()
                if key not in ERROR_BASE_ATTRIBUTES and prop is not None
            ]
            visible = sorted((a for a in attributes if not a.is_hidden), key=lambda a: a.sort_order)
            codes = properties["api_error_code"].get("enum") or ()
            errors.append(
                Error(
                    name=name,
                    status=_first_value(properties.get("http_status_code")),
                    category=_first_value(properties.get("type")),
                    error_codes=tuple(str(c) for c in codes),
                    attributes=tuple(visible),
                )
            )
        return tuple(sorted(errors, key=lambda e: e.name))

    def _webhooks(self) -> tuple[WebhookInfo, ...]:
        infos = []
        for event_type, path_item in self.document.webhooks.items():
            operation = (path_item or {}).get("post")
            schema_name = None
            deprecated = False
            if operation is not None:
                deprecated = operation.get("deprecated") is True
                media = ((operation.get("requestBody") or {}).get("content") or {}).get(JSON_CONTENT)
                schema = (media or {}).get("schema") or {}
                deprecated = deprecated or schema.get("deprecated") is True
                if "$ref" in schema:
                    schema_name = ref_name(schema["$ref"])
            infos.append(WebhookInfo(event_type, schema_name, deprecated))
        return tuple(infos)


def build_spec(document: Document, run_config: RunConfig | None = None) -> Spec:
    """Build the IR for ``document``."""
    return SpecBuilder(document, run_config).build()
