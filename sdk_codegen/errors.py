"""
Exceptions and warnings raised while building the IR or rendering targets.
"""

from __future__ import annotations


class SdkCodegenError(Exception):
    """Base class for generator errors."""

    pass


class SpecIntegrityError(SdkCodegenError):
    """The API document cannot be turned into an IR.

    Raised for missing required fields, unresolvable references, cyclic
    sub-resource chains and conflicting shared enum definitions. Aborts the run.
    """

    pass


class TemplateResourceMissing(SdkCodegenError):
    """A template referenced by a target cannot be located."""

    def __init__(self, template_id: str, template_name: str):
        super().__init__(f"Template '{template_id}' ({template_name}) not found")
        self.template_id = template_id
        self.template_name = template_name


class UnknownTypeWarning(UserWarning):
    """A schema shape could not be classified and was treated as untyped."""
