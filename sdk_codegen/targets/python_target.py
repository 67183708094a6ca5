"""
Python SDK target.

Generates one package per resource under ``models/`` (operations, response models
and the package ``__init__``), the shared enums module and the client entry point.
"""

from __future__ import annotations

import keyword
import logging
import re
from typing import Any

from ..classifier import PythonClassifier
from ..fileops import CreateDirectory, FileOp, WriteFile, join_path
from ..formatters import BlackFormatter
from ..ir.nodes import Action, Attribute, EnumDef, OperationResponse, Resource, Spec
from ..ir.types import TypeKind, TypeRef
from ..naming import Case, pascal_join, singularize, snake_to_pascal_case, to_case
from ..template_set import TemplateSet
from ..views import ActionView, ResourceView, ResponseView, SubParameterGroup, ViewOptions
from .base import Target

logger = logging.getLogger(__name__)

_NON_IDENTIFIER = re.compile(r"\W+")


def member_name(value: str) -> str:
    """Enum member for a wire value ("in_trial" -> "IN_TRIAL", "1.0" -> "_1_0")."""
    name = _NON_IDENTIFIER.sub("_", value).strip("_").upper() or "EMPTY"
    return f"_{name}" if name[0].isdigit() else name


def _field(name: str, type_: str, required: bool = False) -> dict[str, Any]:
    # "attr" is the dataclass attribute name for the wire key
    attr = _NON_IDENTIFIER.sub("_", name)
    if keyword.iskeyword(attr):
        attr += "_"
    return {"name": name, "attr": attr, "type": type_, "required": required}


def _typed_dict(name: str, fields: list[dict[str, Any]]) -> dict[str, Any]:
    # Keys that are not plain identifiers need the functional TypedDict syntax
    functional = any(keyword.iskeyword(f["name"]) or not f["name"].isidentifier() for f in fields)
    return {"name": name, "fields": fields, "functional": functional}


class PythonTarget(Target):
    """Python SDK target."""

    NAME = "python"
    TEMPLATE_LANG = "python"
    TEMPLATES = {
        "models.init": "models.init.py.jinja2",
        "enums": "enums.py.jinja2",
        "resource.init": "resource.init.py.jinja2",
        "resource.operations": "resource.operations.py.jinja2",
        "resource.responses": "resource.responses.py.jinja2",
        "main": "main.py.jinja2",
    }
    HIDDEN_OVERRIDE = frozenset({"media", "business_entity_change", "non_subscription"})

    VIEW_OPTIONS = ViewOptions(include_pagination=True, include_filter_sub_resources=True, include_sort_by=True)

    def __init__(self, config=None):
        super().__init__(config)
        self.formatter = BlackFormatter()

    def generate(self, spec: Spec, templates: TemplateSet, output_dir: str) -> list[FileOp]:
        resources = self.resources(spec)
        model_ids = {r.name: r.id for r in resources}
        classifier = PythonClassifier(model_exists=lambda name: name in model_ids)
        models_dir = join_path(output_dir, "models")
        header = self.generation_comment("#")
        package = self.config.python_package

        ops: list[FileOp] = [CreateDirectory(output_dir, "models")]
        ops.append(
            self._write(
                models_dir,
                "__init__.py",
                templates.render("models.init", header=header, resources=resources),
            )
        )
        ops.append(
            self._write(
                models_dir,
                "enums.py",
                templates.render("enums", header=header, enums=[self._enum_context(e) for e in spec.global_enums]),
            )
        )
        for resource in resources:
            resource_dir = join_path(models_dir, resource.id)
            context = {
                "header": header,
                "package": package,
                "resource": resource,
                **self._operations_context(resource, classifier),
                **self._responses_context(resource, classifier, model_ids),
                **classifier.extra_context(resource),
            }
            ops.append(CreateDirectory(models_dir, resource.id))
            ops.append(self._write(resource_dir, "__init__.py", templates.render("resource.init", **context)))
            ops.append(self._write(resource_dir, "operations.py", templates.render("resource.operations", **context)))
            ops.append(self._write(resource_dir, "responses.py", templates.render("resource.responses", **context)))
        ops.append(
            self._write(output_dir, "main.py", templates.render("main", header=header, package=package, resources=resources))
        )
        logger.info("Python target: %d resources, %d file operations", len(resources), len(ops))
        return ops

    def _write(self, base_path: str, name: str, content: str) -> WriteFile:
        return WriteFile(base_path, name, self.formatter.format(content, self.config.formatter))

    @staticmethod
    def _enum_context(enum: EnumDef) -> dict[str, Any]:
        return {
            "name": enum.name,
            "members": [(member_name(v), v) for v in enum.valid_values],
        }

    # Operations

    def _operations_context(self, resource: Resource, classifier: PythonClassifier) -> dict[str, Any]:
        resource_view = ResourceView(resource)
        enums = []
        for named in resource_view.enums:
            members = [(member_name(v), v) for v in named.values]
            enums.append({"name": snake_to_pascal_case(named.name), "members": members})
        enum_names = {e["name"] for e in enums}

        sub_resources = [
            _typed_dict(
                singularize(sub.name),
                [
                    _field(a.name, self._value_type(a, classifier, resource.class_name, enum_names, singularize(sub.id)))
                    for a in sub.visible_attributes
                ],
            )
            for sub in resource.sub_resources
        ]

        param_classes = []
        operations = []
        for action in resource.sorted_actions:
            view = ActionView(action, resource.name, self.VIEW_OPTIONS)
            param_classes.extend(self._param_classes(view, classifier, resource.class_name, enum_names))
            operations.append(self._operation(action, view))
        return {
            "enums": enums,
            "sub_resources": sub_resources,
            "param_classes": param_classes,
            "operations": operations,
        }

    def _value_type(
        self,
        attribute: Attribute,
        classifier: PythonClassifier,
        scope: str,
        enum_names: set[str],
        enum_prefix: str = "",
    ) -> str:
        """Type of a request value; local enums resolve to the resource's nested enum classes."""
        attr_type = attribute.type
        if attr_type.kind is TypeKind.ARRAY and attr_type.item is None:
            return "List[Any]"
        element = attr_type.element
        if element.kind is TypeKind.ENUM:
            local = snake_to_pascal_case(f"{enum_prefix}_{attribute.name}" if enum_prefix else attribute.name)
            rendered = f"{scope}.{local}" if local in enum_names else "str"
        elif element.kind in (TypeKind.OBJECT, TypeKind.REFERENCE):
            rendered = "Dict[str, Any]"
        else:
            rendered = classifier.type_of(element)
        return f"List[{rendered}]" if attr_type.kind is TypeKind.ARRAY else rendered

    def _group_class(self, group: SubParameterGroup) -> str:
        return pascal_join(group.key) + "Params"

    def _param_classes(
        self, view: ActionView, classifier: PythonClassifier, scope: str, enum_names: set[str]
    ) -> list[dict[str, Any]]:
        classes = []
        groups = {g.name: g for g in (*view.singular_sub_parameters, *view.multi_sub_parameters)}
        for group in groups.values():
            prefix = singularize(group.name)
            fields = []
            for child in group.fields:
                if group.is_list:
                    # Composite array bodies carry one array per field; each item takes one value
                    child = Attribute(child.name, child.type.element, child.required)
                value = self._value_type(child, classifier, scope, enum_names, prefix)
                fields.append(_field(child.name, value, child.required))
            classes.append(_typed_dict(self._group_class(group), fields))

        filter_groups: dict[str, list[dict[str, Any]]] = {}
        for flt in view.filter_parameters:
            if flt.group:
                filter_groups.setdefault(flt.group, []).append(_field(flt.name, f"filters.{flt.type_name}"))
        for group_name, fields in filter_groups.items():
            classes.append(_typed_dict(pascal_join(group_name, view.operation_key) + "Params", fields))

        if not view.has_input or not view.all_attributes:
            return classes

        fields = []
        leaf_filters = {f.name: f for f in view.filter_parameters if not f.group}
        scalars = {a.name for a in view.scalar_parameters}
        for attribute in view.all_attributes:
            if attribute.name in groups:
                group = groups[attribute.name]
                group_type = f"{scope}.{self._group_class(group)}"
                fields.append(
                    _field(attribute.name, f"List[{group_type}]" if group.is_list else group_type, attribute.required)
                )
            elif attribute.name in leaf_filters:
                fields.append(_field(attribute.name, f"filters.{leaf_filters[attribute.name].type_name}"))
            elif attribute.name in filter_groups:
                fields.append(
                    _field(attribute.name, f"{scope}.{pascal_join(attribute.name, view.operation_key)}Params")
                )
            elif attribute.name in scalars or attribute.is_sort:
                # A sort_by without sort options is a plain value
                fields.append(
                    _field(attribute.name, self._value_type(attribute, classifier, scope, enum_names), attribute.required)
                )
        classes.append(_typed_dict(view.params_class_name, fields))
        return classes

    def _operation(self, action: Action, view: ActionView) -> dict[str, Any]:
        has_params = bool(view.all_attributes)
        params_required = has_params and not (
            action.is_all_body_parameters_optional and action.is_all_query_parameters_optional
        )
        return {
            "method": to_case(action.name, Case.CAMEL, Case.SNAKE),
            "params_class": view.params_class_name if has_params else None,
            "params_required": params_required,
            "has_path_param": action.has_path_parameter,
            "http_method": action.http_method.lower(),
            "url_prefix": action.url_prefix,
            "url_suffix": action.url_suffix,
            "response_class": ResponseView(action, "").class_name,
            "sub_domain": action.sub_domain,
            "is_json": action.needs_json_input,
            "json_keys": {k.name: k.level for k in action.json_keys},
            "is_list": action.is_list,
            "is_idempotent": action.is_idempotent,
            "deprecated": action.is_deprecated,
            "description": action.description,
        }

    # Responses

    def _responses_context(
        self, resource: Resource, classifier: PythonClassifier, model_ids: dict[str, str]
    ) -> dict[str, Any]:
        referenced: set[str] = set()

        def note(type_ref: TypeRef | None) -> None:
            if type_ref is None:
                return
            element = type_ref.element
            if element.kind is TypeKind.REFERENCE or (element.kind is TypeKind.OBJECT and element.is_global_reference):
                referenced.add(element.name)

        def model_fields(attributes) -> list[dict[str, Any]]:
            fields = []
            for attribute in attributes:
                note(attribute.type)
                fields.append(_field(attribute.name, classifier.type_of(attribute.type)))
            return fields

        models = [
            {"name": f"{singularize(sub.name)}Response", "fields": model_fields(sub.visible_attributes)}
            for sub in resource.sub_resources
        ]
        models.append({"name": f"{resource.class_name}Response", "fields": model_fields(resource.visible_attributes)})

        responses = []
        for action in resource.sorted_actions:
            view = ResponseView(action, resource.name)
            if view.sub_response_class_name:
                responses.append(
                    {
                        "name": view.sub_response_class_name,
                        "base": None,
                        "fields": [self._response_field(r, classifier, None, note) for r in view.sub_responses],
                    }
                )
            responses.append(
                {
                    "name": view.class_name,
                    "base": "Response",
                    "fields": [
                        self._response_field(r, classifier, view.sub_response_class_name, note) for r in view.responses
                    ],
                }
            )

        imports = sorted(
            (model_ids[name], f"{name}Response")
            for name in referenced
            if name in model_ids and name != resource.name
        )
        return {"models": models, "responses": responses, "response_imports": imports}

    @staticmethod
    def _response_field(
        response: OperationResponse, classifier: PythonClassifier, sub_class: str | None, note
    ) -> dict[str, Any]:
        if response.type is None:
            rendered = f'List["{sub_class}"]' if sub_class else classifier.list_type_of(response.children)
        elif response.referred_name:
            reference = TypeRef(TypeKind.REFERENCE, name=response.referred_name)
            note(reference)
            rendered = classifier.type_of(reference)
            if response.is_list:
                rendered = f"List[{rendered}]"
        else:
            note(response.type)
            rendered = classifier.type_of(response.type)
        return _field(response.name, rendered, response.required)

