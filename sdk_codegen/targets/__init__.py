"""SDK targets, one per output language."""

from ..config import Language
from .base import Target
from .python_target import PythonTarget
from .typescript_target import TypeScriptTarget

TARGETS: dict[Language, type[Target]] = {
    Language.PYTHON: PythonTarget,
    Language.TYPESCRIPT: TypeScriptTarget,
}

__all__ = ["TARGETS", "PythonTarget", "Target", "TypeScriptTarget"]
