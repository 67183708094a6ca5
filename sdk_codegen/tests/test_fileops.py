#!/usr/bin/env python3
"""
Tests for file operations and their execution.
"""

from pathlib import Path

import pytest

from sdk_codegen.fileops import AtomicWriter, CreateDirectory, FileOpExecutor, WriteFile, join_path


class TestJoinPath:
    @pytest.mark.parametrize(
        "parts,expected",
        [
            (("python", "models"), "python/models"),
            (("python/", "/models/", "customer"), "python/models/customer"),
            (("", "models"), "models"),
            ((".",), "."),
            ((), "."),
        ],
    )
    def test_join_path(self, parts, expected):
        assert join_path(*parts) == expected


class TestAtomicWriter:
    def test_write_creates_parents(self, tmp_path):
        target = tmp_path / "a" / "b" / "out.py"
        AtomicWriter().write(target, "x = 1\n")
        assert target.read_text(encoding="utf-8") == "x = 1\n"

    def test_write_replaces_existing_file(self, tmp_path):
        target = tmp_path / "out.py"
        target.write_text("old", encoding="utf-8")
        AtomicWriter().write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"
        # No temporary files are left behind
        assert [p.name for p in tmp_path.iterdir()] == ["out.py"]


class TestFileOpExecutor:
    OPS = [
        CreateDirectory("python", "models"),
        WriteFile("python/models", "__init__.py", "from . import enums\n"),
        WriteFile("python", "main.py", "class ApiClient: ...\n"),
    ]

    @pytest.mark.parametrize("atomic", [True, False])
    def test_execute_writes_files(self, tmp_path, atomic):
        written = FileOpExecutor(tmp_path, atomic=atomic).execute(self.OPS)

        assert written == [tmp_path / "python/models/__init__.py", tmp_path / "python/main.py"]
        assert (tmp_path / "python/models").is_dir()
        assert (tmp_path / "python/main.py").read_text(encoding="utf-8") == "class ApiClient: ...\n"

    def test_dry_run_touches_nothing(self, tmp_path):
        written = FileOpExecutor(tmp_path, dry_run=True).execute(self.OPS)

        assert len(written) == 2
        assert list(tmp_path.iterdir()) == []

    def test_absolute_paths_are_kept(self, tmp_path):
        absolute = tmp_path / "elsewhere"
        (written,) = FileOpExecutor(tmp_path / "root").execute([WriteFile(str(absolute), "x.txt", "x")])
        assert written == absolute / "x.txt"
        assert written.read_text(encoding="utf-8") == "x"

    def test_unknown_operation(self, tmp_path):
        class Remove:
            path = Path("gone")

        with pytest.raises(TypeError):
            FileOpExecutor(tmp_path).execute([Remove()])

    def test_operation_paths(self):
        assert CreateDirectory("out", "models").path == Path("out/models")
        assert WriteFile("out/models", "enums.py", "").path == Path("out/models/enums.py")


if __name__ == "__main__":
    pytest.main([__file__])
