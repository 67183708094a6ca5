"""
SDK generator.

Builds the IR once and runs every requested target against it. A failing target is
logged and recorded; the remaining targets still run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import jinja2

from .config import GeneratorConfig, Language
from .document import Document
from .errors import TemplateResourceMissing
from .fileops import FileOp, FileOpExecutor
from .ir import Spec, build_spec
from .targets import TARGETS, Target

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of a generation run.

    Attributes:
        operations: File operations per language that succeeded
        failures: Error message per language that failed
        written: Paths written (or that would be written in dry-run mode)
    """

    operations: dict[Language, list[FileOp]] = field(default_factory=dict)
    failures: dict[Language, str] = field(default_factory=dict)
    written: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class SdkGenerator:
    """Generates SDK sources for one API document."""

    def __init__(self, document: Document, config: GeneratorConfig | None = None):
        """
        Initialize the generator and build the IR.

        Args:
            document: The API document
            config: Generation options

        Raises:
            SpecIntegrityError: If the document cannot be turned into an IR
        """
        self.document = document
        self.config = config or GeneratorConfig()
        self.spec: Spec = build_spec(document, self.config.run_config())

    def target(self, language: Language) -> Target:
        return TARGETS[Language(language)](self.config)

    def plan(self, language: Language, output_dir: str = ".") -> list[FileOp]:
        """File operations for one language; template errors propagate."""
        target = self.target(language)
        templates = target.load_templates()
        return target.generate(self.spec, templates, output_dir)

    def generate(self, languages: Iterable[Language], output: str | Path | None = None) -> GenerationResult:
        """
        Generate every language in ``languages``.

        Args:
            languages: Languages to generate
            output: Output root; each language gets its own sub-directory. Without it
                the operations are only planned

        Returns:
            The operations, failures and written paths of the run
        """
        result = GenerationResult()
        for language in languages:
            language = Language(language)
            try:
                ops = self.plan(language, language.value)
            except (TemplateResourceMissing, jinja2.TemplateError) as e:
                logger.exception("Generation of the %s SDK failed", language.value)
                result.failures[language] = str(e) or type(e).__name__
                continue
            result.operations[language] = ops
            if output is not None:
                executor = FileOpExecutor(
                    output, atomic=self.config.output.atomic_write, dry_run=self.config.output.dry_run
                )
                result.written.extend(executor.execute(ops))
        return result
