#!/usr/bin/env python3

import json
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from sdk_codegen.cli_utils import reconstruct_command_line

TEST_DATA = Path(__file__).parent / "test_data"


def get_click_command():
    """Helper to get Click command for testing"""
    try:
        from sdk_codegen.sdk_codegen import sdk_codegen

        return sdk_codegen
    except ImportError:
        return None


@click.command()
@click.option("--language", "-l", "languages", multiple=True)
@click.option("--qa-mode", is_flag=True, default=False)
@click.option("--api-version", default=None)
@click.argument("spec_path")
def echo_command(languages, qa_mode, api_version, spec_path):
    click.echo(reconstruct_command_line(echo_command))


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Test command reconstruction without active Click context (fallback)"""
        click_cmd = get_click_command()
        if not click_cmd:
            pytest.skip("Click command not available")

        result = reconstruct_command_line(click_cmd)
        assert result == "sdk_codegen"

    def test_reconstruct_command_line_with_context(self):
        result = CliRunner().invoke(
            echo_command, ["-l", "python", "-l", "typescript", "--qa-mode", "--api-version", "v1", "spec.yaml"]
        )
        assert result.exit_code == 0
        assert result.output.strip() == (
            "sdk_codegen spec.yaml --language python --language typescript --qa-mode --api-version v1"
        )

    def test_defaults_are_omitted(self):
        result = CliRunner().invoke(echo_command, ["spec.yaml"])
        assert result.output.strip() == "sdk_codegen spec.yaml"


class TestCommand:
    """The sdk_codegen command"""

    def test_generate(self, tmp_path):
        result = CliRunner().invoke(
            get_click_command(), ["-l", "python", "-l", "typescript", str(TEST_DATA / "billing_spec.yaml"), str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / "python" / "main.py").is_file()
        assert (tmp_path / "typescript" / "index.d.ts").is_file()

    def test_generation_comment_names_the_command(self, tmp_path):
        CliRunner().invoke(get_click_command(), ["-l", "python", str(TEST_DATA / "billing_spec.yaml"), str(tmp_path)])
        header = (tmp_path / "python" / "main.py").read_text(encoding="utf-8").splitlines()[0]
        assert header.startswith("# Generated by sdk_codegen v")
        assert "billing_spec.yaml" in header
        assert "--language python" in header

    def test_dry_run_lists_files(self, tmp_path):
        result = CliRunner().invoke(
            get_click_command(), ["-l", "typescript", "--dry-run", str(TEST_DATA / "billing_spec.yaml"), str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        assert "Customer.d.ts" in result.output
        assert list(tmp_path.iterdir()) == []

    def test_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"python_package": "billing", "add_generation_comment": False}))
        out = tmp_path / "out"

        result = CliRunner().invoke(
            get_click_command(), ["-l", "python", "-c", str(config), str(TEST_DATA / "billing_spec.yaml"), str(out)]
        )
        assert result.exit_code == 0, result.output
        main = (out / "python" / "main.py").read_text(encoding="utf-8")
        assert main.startswith("from billing import environment")

    def test_invalid_document(self, tmp_path):
        spec = tmp_path / "broken.yaml"
        spec.write_text("- not\n- a mapping\n")
        result = CliRunner().invoke(get_click_command(), ["-l", "python", str(spec), str(tmp_path / "out")])
        assert result.exit_code == 1
        assert not (tmp_path / "out").exists()

    def test_unparsable_document(self, tmp_path):
        spec = tmp_path / "broken.yaml"
        spec.write_text("paths: [unclosed\n")
        result = CliRunner().invoke(get_click_command(), ["-l", "python", str(spec), str(tmp_path / "out")])
        assert result.exit_code == 1

    def test_unknown_language(self, tmp_path):
        result = CliRunner().invoke(
            get_click_command(), ["-l", "cobol", str(TEST_DATA / "billing_spec.yaml"), str(tmp_path)]
        )
        assert result.exit_code == 2


if __name__ == "__main__":
    pytest.main([__file__])
