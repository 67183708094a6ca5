"""
Configuration for the SDK generator.

``RunConfig`` is the immutable value threaded through IR construction;
``GeneratorConfig`` carries the user-facing options loaded from a JSON file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ApiVersion(str, Enum):
    """Major version of the API described by the document."""

    V1 = "v1"
    V2 = "v2"


class ProductCatalogVersion(str, Enum):
    """Product catalog generation the API models follow."""

    PC1 = "pc1"
    PC2 = "pc2"


class Language(str, Enum):
    """Targets the generator can emit."""

    PYTHON = "python"
    TYPESCRIPT = "typescript"


@dataclass(frozen=True)
class RunConfig:
    """Per-run switches consulted by the IR builder.

    Attributes:
        qa_mode: Keep hidden, internal and third-party entries in the IR
        api_version: Force an API version instead of reading it from the document
    """

    qa_mode: bool = False
    api_version: ApiVersion | None = None


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        atomic_write: Whether to use atomic file writes
        dry_run: Only list the file operations, write nothing
    """

    atomic_write: bool = True
    dry_run: bool = False


@dataclass
class FormatterConfig:
    """Configuration for post-processing formatters."""

    # Whether formatting is enabled
    enabled: bool = True

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"

    # Whether to use string normalization (convert single quotes to double)
    string_normalization: bool = True

    magic_trailing_comma: bool = True


@dataclass
class GeneratorConfig:
    """Configuration options for SDK generation."""

    # Keep hidden/internal/third-party resources, actions and attributes
    qa_mode: bool = False

    # Force an API version ("v1" or "v2"); None reads it from the document
    api_version: ApiVersion | None = None

    # Emit webhook event types that are flagged deprecated
    include_deprecated_webhooks: bool = True

    # Runtime package the generated Python code imports its base classes from
    python_package: str = "api_client"

    # Runtime module the generated TypeScript typings augment
    typescript_module: str = "api-client"

    # Add generation comment at top of file
    add_generation_comment: bool = True

    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                config.output = OutputConfig(**v)
            elif k == "api_version":
                config.api_version = ApiVersion(v) if v is not None else None
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "qa_mode": self.qa_mode,
            "api_version": self.api_version.value if self.api_version else None,
            "include_deprecated_webhooks": self.include_deprecated_webhooks,
            "python_package": self.python_package,
            "typescript_module": self.typescript_module,
            "add_generation_comment": self.add_generation_comment,
            "formatter": {
                "enabled": self.formatter.enabled,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
                "string_normalization": self.formatter.string_normalization,
                "magic_trailing_comma": self.formatter.magic_trailing_comma,
            },
            "output": {
                "atomic_write": self.output.atomic_write,
                "dry_run": self.output.dry_run,
            },
        }

    def run_config(self) -> RunConfig:
        """The immutable subset of options the IR builder needs."""
        return RunConfig(qa_mode=self.qa_mode, api_version=self.api_version)
