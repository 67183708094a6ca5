"""
Black formatter for generated Python modules.
"""

from __future__ import annotations

import logging

from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)


class BlackFormatter(Formatter):
    """Formats Python output with black when it is installed."""

    def __init__(self):
        self._black = None
        self._available = None

    def is_available(self) -> bool:
        if self._available is None:
            try:
                import black

                self._black = black
                self._available = True
            except ImportError:
                logger.debug("black is not installed; Python output is left unformatted")
                self._available = False
        return self._available

    def _mode(self, config: FormatterConfig):
        black = self._black
        target_versions = set()
        version = getattr(black.TargetVersion, config.target_version.upper(), None) if config.target_version else None
        if version is not None:
            target_versions.add(version)
        return black.Mode(
            target_versions=target_versions,
            line_length=config.line_length,
            string_normalization=config.string_normalization,
            magic_trailing_comma=config.magic_trailing_comma,
        )

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format a generated Python module.

        Args:
            code: Rendered module source
            config: Formatter configuration

        Returns:
            Formatted code; the original text when black is missing or rejects it
        """
        if not config.enabled or not self.is_available():
            return code
        try:
            return self._black.format_str(code, mode=self._mode(config))
        except self._black.InvalidInput as e:
            logger.warning("black could not parse generated code, keeping it unformatted: %s", e)
            return code


def format_with_black(code: str, line_length: int = 100, target_version: str = "py312") -> str:
    """Format Python code with black using default settings otherwise."""
    config = FormatterConfig(enabled=True, line_length=line_length, target_version=target_version)
    return BlackFormatter().format(code, config)
