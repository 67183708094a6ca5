"""
File operations produced by targets and their execution.

Targets never touch the filesystem; they return an ordered list of
``CreateDirectory`` and ``WriteFile`` operations. ``FileOpExecutor`` applies them.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateDirectory:
    base_path: str
    name: str

    @property
    def path(self) -> Path:
        return Path(self.base_path) / self.name


@dataclass(frozen=True)
class WriteFile:
    base_path: str
    name: str
    content: str

    @property
    def path(self) -> Path:
        return Path(self.base_path) / self.name


FileOp = CreateDirectory | WriteFile


def join_path(*parts: str) -> str:
    """Join relative output path parts with ``/``."""
    return "/".join(p.strip("/") for p in parts if p and p.strip("/")) or "."


class AtomicWriter:
    """Writes files through a temporary file in the target directory.

    The temporary file is renamed over the target once fully written, so an
    interrupted run never leaves a truncated file behind.
    """

    def write(self, path: Path, content: str) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory keeps the rename on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)
        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise


class FileOpExecutor:
    """Applies file operations below an output root."""

    def __init__(self, root: str | Path, atomic: bool = True, dry_run: bool = False):
        """
        Initialize the executor.

        Args:
            root: Directory relative operation paths are resolved against
            atomic: Write through ``AtomicWriter`` instead of writing in place
            dry_run: Log the operations without touching the filesystem
        """
        self.root = Path(root)
        self.atomic = atomic
        self.dry_run = dry_run
        self._writer = AtomicWriter()

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root / path

    def execute(self, ops: Iterable[FileOp]) -> list[Path]:
        """
        Apply ``ops`` in order.

        Returns:
            Paths of the files written (or that would be written in dry-run mode)
        """
        written = []
        for op in ops:
            target = self._resolve(op.path)
            if isinstance(op, CreateDirectory):
                logger.debug("mkdir %s", target)
                if not self.dry_run:
                    target.mkdir(parents=True, exist_ok=True)
            elif isinstance(op, WriteFile):
                logger.debug("write %s (%d bytes)", target, len(op.content))
                if not self.dry_run:
                    if self.atomic:
                        self._writer.write(target, op.content)
                    else:
                        target.parent.mkdir(parents=True, exist_ok=True)
                        target.write_text(op.content, encoding="utf-8")
                written.append(target)
            else:
                raise TypeError(f"Unknown file operation {op!r}")
        return written
