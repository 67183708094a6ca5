"""Per-target type classifiers."""

from .base import TypeClassifier
from .python_classifier import PythonClassifier
from .typescript_classifier import TypeScriptClassifier

__all__ = ["PythonClassifier", "TypeClassifier", "TypeScriptClassifier"]
