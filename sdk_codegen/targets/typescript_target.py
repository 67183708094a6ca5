"""
TypeScript typings target.

Generates ``.d.ts`` declarations for every resource, the shared filter and core
declarations, the module index and the typed webhook helpers.
"""

from __future__ import annotations

import logging
from typing import Any

from ..classifier import TypeScriptClassifier
from ..fileops import CreateDirectory, FileOp, WriteFile, join_path
from ..ir.nodes import Attribute, FilterKind, Resource, Spec
from ..naming import pascal_join, singularize
from ..template_set import TemplateSet
from ..views import ActionView, ResponseView, SubParameterGroup, ViewOptions
from ..webhooks import WebhookResolver
from .base import Target

logger = logging.getLogger(__name__)

# Operators each filter family accepts
FILTER_OPERATORS: dict[FilterKind, tuple[tuple[str, str], ...]] = {
    FilterKind.STRING: (
        ("is", "string"),
        ("is_not", "string"),
        ("starts_with", "string"),
        ("is_present", "'true' | 'false'"),
        ("in", "string"),
        ("not_in", "string"),
    ),
    FilterKind.NUMBER: (
        ("is", "number"),
        ("is_not", "number"),
        ("lt", "number"),
        ("lte", "number"),
        ("gt", "number"),
        ("gte", "number"),
        ("between", "string"),
        ("is_present", "'true' | 'false'"),
    ),
    FilterKind.TIMESTAMP: (
        ("after", "number"),
        ("before", "number"),
        ("on", "number"),
        ("between", "string"),
    ),
    FilterKind.DATE: (
        ("after", "string"),
        ("before", "string"),
        ("on", "string"),
        ("between", "string"),
    ),
    FilterKind.BOOLEAN: (("is", "'true' | 'false'"),),
    FilterKind.ENUM: (
        ("is", "string"),
        ("is_not", "string"),
        ("in", "string"),
        ("not_in", "string"),
    ),
}


def _interface(name: str, lines: list[str]) -> dict[str, Any]:
    return {"name": name, "lines": lines}


def _member(name: str, required: bool, type_: str) -> str:
    return f"{name}{'' if required else '?'}: {type_};"


class TypeScriptTarget(Target):
    """TypeScript typings target."""

    NAME = "typescript"
    TEMPLATE_LANG = "typescript"
    TEMPLATES = {
        "resource": "resource.d.ts.jinja2",
        "filter": "filter.d.ts.jinja2",
        "core": "core.d.ts.jinja2",
        "index": "index.d.ts.jinja2",
        "webhook.content": "webhook.content.ts.jinja2",
        "webhook.event_type": "webhook.eventType.ts.jinja2",
    }
    HIDDEN_OVERRIDE = frozenset({"media"})

    # Sort options get their own builder type instead of a sub-parameter group
    VIEW_OPTIONS = ViewOptions(include_pagination=True, include_filter_sub_resources=True, include_sort_by=False)

    def generate(self, spec: Spec, templates: TemplateSet, output_dir: str) -> list[FileOp]:
        resources = self.resources(spec)
        classifier = TypeScriptClassifier()
        resources_dir = join_path(output_dir, "resources")
        header = self.generation_comment("//")
        module = self.config.typescript_module

        ops: list[FileOp] = [CreateDirectory(output_dir, "resources")]
        for resource in resources:
            context = {
                "header": header,
                "module": module,
                "resource": resource,
                **self._resource_context(resource, classifier),
                **classifier.extra_context(resource),
            }
            ops.append(WriteFile(resources_dir, f"{resource.class_name}.d.ts", templates.render("resource", **context)))

        filters = [{"name": kind.type_name, "operators": FILTER_OPERATORS[kind]} for kind in FilterKind]
        ops.append(WriteFile(resources_dir, "filter.d.ts", templates.render("filter", header=header, module=module, filters=filters)))

        enums = [
            {"name": f"{e.name}Enum", "type": " | ".join(f"'{v}'" for v in e.valid_values) or "string"}
            for e in spec.global_enums
        ]
        ops.append(WriteFile(output_dir, "core.d.ts", templates.render("core", header=header, module=module, enums=enums)))
        ops.append(
            WriteFile(output_dir, "index.d.ts", templates.render("index", header=header, module=module, resources=resources))
        )
        ops.extend(self._webhooks(spec, templates, output_dir, resources, header, module))
        logger.info("TypeScript target: %d resources, %d file operations", len(resources), len(ops))
        return ops

    # Resources

    def _resource_context(self, resource: Resource, classifier: TypeScriptClassifier) -> dict[str, Any]:
        scope = resource.class_name
        sub_resources = [
            _interface(singularize(sub.name), [classifier.attribute_line(a, scope) for a in sub.visible_attributes])
            for sub in resource.sub_resources
        ]

        operations = []
        responses = []
        inputs = []
        for action in resource.sorted_actions:
            view = ActionView(action, resource.name, self.VIEW_OPTIONS)
            response_view = ResponseView(action, resource.name)
            has_input = bool(view.all_attributes)
            operations.append(
                {
                    "name": action.name[:1].lower() + action.name[1:],
                    "has_path_param": action.has_path_parameter,
                    "input": f"{pascal_join(action.name)}InputParam" if has_input else None,
                    "input_required": has_input
                    and not (action.is_all_body_parameters_optional and action.is_all_query_parameters_optional),
                    "response": response_view.class_name,
                    "deprecated": action.is_deprecated,
                }
            )
            responses.append(_interface(response_view.class_name, self._response_lines(response_view, classifier, scope)))
            if has_input:
                inputs.extend(self._input_interfaces(view, classifier, scope))
        return {
            "sub_resources": sub_resources,
            "operations": operations,
            "responses": responses,
            "inputs": inputs,
        }

    @staticmethod
    def _response_lines(view: ResponseView, classifier: TypeScriptClassifier, scope: str) -> list[str]:
        lines = []
        for response in view.responses:
            if response.type is None:
                rendered = classifier.list_type_of(view.sub_responses, scope)
            else:
                rendered = classifier.response_type_of(response, scope)
            lines.append(_member(response.name, response.required, rendered))
        return lines

    @staticmethod
    def _group_interface(group: SubParameterGroup) -> str:
        return pascal_join(group.key) + "InputParam"

    def _input_interfaces(
        self, view: ActionView, classifier: TypeScriptClassifier, scope: str
    ) -> list[dict[str, Any]]:
        interfaces = []
        groups = {g.name: g for g in (*view.singular_sub_parameters, *view.multi_sub_parameters)}
        for group in groups.values():
            if group.is_list:
                lines = [_member(c.name, c.required, classifier.type_of(c.type.element, scope)) for c in group.fields]
            else:
                lines = [classifier.attribute_line(c, scope) for c in group.fields]
            interfaces.append(_interface(self._group_interface(group), lines))

        sort_type = view.sort_type_name
        sort_with_options = [s for s in view.sort_parameters if s.attributes]
        if sort_type and sort_with_options:
            interfaces.append(
                _interface(sort_type, [classifier.attribute_line(c, scope) for c in sort_with_options[0].attributes])
            )

        filter_groups: dict[str, list[str]] = {}
        leaf_filters = {}
        for flt in view.filter_parameters:
            if flt.group:
                filter_groups.setdefault(flt.group, []).append(f"{flt.name}?:filter.{flt.type_name}")
            else:
                leaf_filters[flt.name] = flt

        scalars = {a.name for a in view.scalar_parameters}
        lines = []
        for attribute in view.all_attributes:
            if attribute.name in groups:
                group = groups[attribute.name]
                name = self._group_interface(group)
                lines.append(_member(attribute.name, attribute.required, f"{name}[]" if group.is_list else name))
            elif attribute.name in leaf_filters:
                lines.append(_member(attribute.name, False, f"filter.{leaf_filters[attribute.name].type_name}"))
            elif attribute.name in filter_groups:
                lines.append(_member(attribute.name, False, "{" + ",".join(filter_groups[attribute.name]) + "}"))
            elif attribute.is_sort:
                lines.append(self._sort_line(attribute, sort_type, classifier, scope))
            elif attribute.name in scalars:
                lines.append(classifier.attribute_line(attribute, scope))
        interfaces.append(_interface(pascal_join(view.action.name) + "InputParam", lines))
        return interfaces

    @staticmethod
    def _sort_line(attribute: Attribute, sort_type: str | None, classifier: TypeScriptClassifier, scope: str) -> str:
        if attribute.attributes and sort_type:
            return _member(attribute.name, attribute.required, sort_type)
        return classifier.attribute_line(attribute, scope)

    # Webhooks

    def _webhooks(
        self,
        spec: Spec,
        templates: TemplateSet,
        output_dir: str,
        resources: tuple[Resource, ...],
        header: str,
        module: str,
    ) -> list[FileOp]:
        ops: list[FileOp] = [CreateDirectory(output_dir, "webhook")]
        infos = spec.webhook_info(include_deprecated=self.config.include_deprecated_webhooks)
        if not infos:
            return ops
        generated = {r.name for r in resources}
        resolution = WebhookResolver(spec.event_resources, lambda name: name in generated).resolve(infos)
        webhook_dir = join_path(output_dir, "webhook")
        context = {"header": header, "module": module, "events": resolution.events, "imports": resolution.imports}
        ops.append(WriteFile(webhook_dir, "content.ts", templates.render("webhook.content", **context)))
        ops.append(WriteFile(webhook_dir, "eventType.ts", templates.render("webhook.event_type", **context)))
        return ops
