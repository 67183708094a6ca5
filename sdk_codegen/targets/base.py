"""
Base class for SDK targets.

Defines the interface that all language-specific targets implement. A target turns
the IR into an ordered list of file operations using a pre-compiled ``TemplateSet``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .. import __version__
from ..cli_utils import reconstruct_command_line
from ..config import GeneratorConfig
from ..fileops import FileOp
from ..ir.nodes import Resource, Spec
from ..template_set import TemplateSet


class Target(ABC):
    """Abstract base class for SDK targets."""

    # Name used on the command line
    NAME: str = ""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # Template id -> file name under the template directory
    TEMPLATES: dict[str, str] = {}

    # Resource ids never generated by this target
    HIDDEN_OVERRIDE: frozenset[str] = frozenset()

    def __init__(self, config: GeneratorConfig | None = None):
        """
        Initialize the target.

        Args:
            config: Generation options
        """
        self.config = config or GeneratorConfig()

    def load_templates(self) -> TemplateSet:
        """Compile this target's templates.

        Raises:
            TemplateResourceMissing: If a declared template cannot be found
        """
        return TemplateSet.load(self.TEMPLATE_LANG, self.TEMPLATES)

    def resources(self, spec: Spec) -> tuple[Resource, ...]:
        """Resources this target generates, sorted by name."""
        return tuple(r for r in spec.pc_aware_resources() if r.id not in self.HIDDEN_OVERRIDE)

    def generation_comment(self, prefix: str) -> str:
        """Header line naming the command that produced the file."""
        if not self.config.add_generation_comment:
            return ""
        try:
            from ..sdk_codegen import sdk_codegen as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "sdk_codegen"
        return f"{prefix} Generated by sdk_codegen v{__version__} : {command_line}"

    @abstractmethod
    def generate(self, spec: Spec, templates: TemplateSet, output_dir: str) -> list[FileOp]:
        """
        Generate the SDK sources.

        Args:
            spec: The IR
            templates: This target's compiled templates
            output_dir: Base path the file operations are relative to

        Returns:
            Ordered file operations
        """
