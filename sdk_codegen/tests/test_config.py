#!/usr/bin/env python3
"""
Tests for generator configuration.
"""

import pytest

from sdk_codegen.config import ApiVersion, FormatterConfig, GeneratorConfig, OutputConfig, RunConfig


class TestGeneratorConfig:
    def test_defaults(self):
        config = GeneratorConfig()
        assert not config.qa_mode
        assert config.api_version is None
        assert config.include_deprecated_webhooks
        assert config.formatter.enabled
        assert config.output.atomic_write

    def test_from_dict(self):
        config = GeneratorConfig.from_dict(
            {
                "qa_mode": True,
                "api_version": "v1",
                "python_package": "billing",
                "formatter": {"line_length": 88},
                "output": {"dry_run": True},
                "unknown_option": 1,
            }
        )
        assert config.qa_mode
        assert config.api_version is ApiVersion.V1
        assert config.python_package == "billing"
        assert config.formatter == FormatterConfig(line_length=88)
        assert config.output == OutputConfig(dry_run=True)
        assert not hasattr(config, "unknown_option")

    def test_invalid_api_version(self):
        with pytest.raises(ValueError):
            GeneratorConfig.from_dict({"api_version": "v9"})

    def test_round_trip(self):
        config = GeneratorConfig.from_dict({"api_version": "v2", "typescript_module": "billing-client"})
        assert GeneratorConfig.from_dict(config.to_dict()) == config

    def test_run_config(self):
        config = GeneratorConfig.from_dict({"qa_mode": True, "api_version": "v2"})
        assert config.run_config() == RunConfig(qa_mode=True, api_version=ApiVersion.V2)

    def test_run_config_is_immutable(self):
        run_config = RunConfig()
        with pytest.raises(AttributeError):
            run_config.qa_mode = True


if __name__ == "__main__":
    pytest.main([__file__])
