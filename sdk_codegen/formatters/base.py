"""
Base class for code formatters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..config import FormatterConfig


class Formatter(ABC):
    """Post-processing step applied to rendered source files."""

    @abstractmethod
    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format the given code.

        Args:
            code: The rendered source
            config: Formatter configuration

        Returns:
            Formatted code, or ``code`` unchanged when it cannot be formatted
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the formatter's dependencies are installed."""
