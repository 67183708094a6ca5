#!/usr/bin/env python3
"""
Tests for the black post-processing step.
"""

import pytest

from sdk_codegen.config import FormatterConfig
from sdk_codegen.formatters import BlackFormatter, format_with_black

UNFORMATTED = "x = {  'a':1 }\n"


class TestBlackFormatter:
    def test_disabled_formatter_keeps_code(self):
        assert BlackFormatter().format(UNFORMATTED, FormatterConfig(enabled=False)) == UNFORMATTED

    def test_formats_code(self):
        pytest.importorskip("black")
        assert BlackFormatter().format(UNFORMATTED, FormatterConfig()) == 'x = {"a": 1}\n'

    def test_string_normalization_off(self):
        pytest.importorskip("black")
        config = FormatterConfig(string_normalization=False)
        assert BlackFormatter().format(UNFORMATTED, config) == "x = {'a': 1}\n"

    def test_invalid_code_is_returned_unchanged(self):
        pytest.importorskip("black")
        broken = "def f(:\n"
        assert BlackFormatter().format(broken, FormatterConfig()) == broken

    def test_unknown_target_version_is_ignored(self):
        pytest.importorskip("black")
        assert BlackFormatter().format(UNFORMATTED, FormatterConfig(target_version="py2")) == 'x = {"a": 1}\n'

    def test_format_with_black(self):
        pytest.importorskip("black")
        assert format_with_black("y=[1,2]\n", line_length=20) == "y = [1, 2]\n"


if __name__ == "__main__":
    pytest.main([__file__])
