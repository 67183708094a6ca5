"""SDK code generator

Builds a language-neutral model of an OpenAPI document carrying ``x-cb-*`` vendor
extensions and renders client SDK sources from it for Python and TypeScript.
"""

__version__ = "1.0.0"

from .config import ApiVersion, FormatterConfig, GeneratorConfig, Language, OutputConfig, RunConfig
from .document import Document
from .errors import SdkCodegenError, SpecIntegrityError, TemplateResourceMissing, UnknownTypeWarning
from .generator import GenerationResult, SdkGenerator
from .ir import Spec, SpecBuilder, build_spec

__all__ = [
    "ApiVersion",
    "Document",
    "FormatterConfig",
    "GenerationResult",
    "GeneratorConfig",
    "Language",
    "OutputConfig",
    "RunConfig",
    "SdkCodegenError",
    "SdkGenerator",
    "Spec",
    "SpecBuilder",
    "SpecIntegrityError",
    "TemplateResourceMissing",
    "UnknownTypeWarning",
    "build_spec",
]
