"""
Pre-compiled template sets.

A target declares its templates as ``{template_id: file_name}``. ``TemplateSet.load``
compiles them once per run and the set is passed to the target explicitly.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import jinja2

from .errors import TemplateResourceMissing
from .naming import Case, capitalize, pascal_join, pluralize, singularize, snake_to_pascal_case, to_case

TEMPLATE_ROOT = Path(__file__).parent / "templates"


def _camel(text: str) -> str:
    if "_" not in text:
        return text[:1].lower() + text[1:]
    return to_case(text, Case.SNAKE, Case.CAMEL)


def _snake(text: str) -> str:
    # camelCase and PascalCase split alike; snake_case input has no boundaries
    return to_case(text, Case.CAMEL, Case.SNAKE)


FILTERS = {
    "pascal": snake_to_pascal_case,
    "pascal_join": pascal_join,
    "camel": _camel,
    "snake": _snake,
    "capitalize": capitalize,
    "singularize": singularize,
    "pluralize": pluralize,
}


def create_environment(template_dir: Path) -> jinja2.Environment:
    """Jinja2 environment with the naming filters registered."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        lstrip_blocks=True,
        trim_blocks=True,
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters.update(FILTERS)
    return env


class TemplateSet:
    """Immutable mapping of template id to compiled template."""

    def __init__(self, lang: str, templates: Mapping[str, jinja2.Template]):
        self.lang = lang
        self._templates = MappingProxyType(dict(templates))

    @classmethod
    def load(cls, lang: str, definitions: Mapping[str, str], root: Path = TEMPLATE_ROOT) -> TemplateSet:
        """
        Compile the templates of one target.

        Args:
            lang: Template directory under ``root``
            definitions: Template id to file name
            root: Directory holding one sub-directory per target

        Raises:
            TemplateResourceMissing: If a declared template file does not exist
        """
        env = create_environment(root / lang)
        compiled = {}
        for template_id, file_name in definitions.items():
            try:
                compiled[template_id] = env.get_template(file_name)
            except jinja2.TemplateNotFound as e:
                raise TemplateResourceMissing(template_id, f"{lang}/{file_name}") from e
        return cls(lang, compiled)

    def __getitem__(self, template_id: str) -> jinja2.Template:
        try:
            return self._templates[template_id]
        except KeyError:
            raise TemplateResourceMissing(template_id, f"{self.lang}/?") from None

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._templates

    def render(self, template_id: str, **context) -> str:
        return self[template_id].render(**context)
