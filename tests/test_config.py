"""
Tests for generator configuration loading.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config import GeneratorConfig, load_config


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml")
        assert config == GeneratorConfig()
        assert config.generated_by == "OpenShiftWebConsole"
        assert config.default_git_ref == "master"
        assert config.image_tag == "latest"
        assert config.secret_length == 16

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "appgen.yaml"
        path.write_text("generated_by: appgen-cli\ndefault_git_ref: main\n")
        config = load_config(path)
        assert config.generated_by == "appgen-cli"
        assert config.default_git_ref == "main"
        assert config.image_tag == "latest"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "appgen.yaml"
        path.write_text("")
        assert load_config(path) == GeneratorConfig()

    def test_env_overrides_generated_by(self, tmp_path):
        path = tmp_path / "appgen.yaml"
        path.write_text("generated_by: from-file\n")
        with patch.dict("os.environ", {"APPGEN_GENERATED_BY": "from-env"}):
            assert load_config(path).generated_by == "from-env"

    def test_config_path_from_env(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("image_tag: stable\n")
        with patch.dict("os.environ", {"APPGEN_CONFIG": str(path)}):
            assert load_config().image_tag == "stable"

    def test_invalid_value_rejected(self, tmp_path):
        path = tmp_path / "appgen.yaml"
        path.write_text("secret_length: 0\n")
        with pytest.raises(ValidationError):
            load_config(path)
