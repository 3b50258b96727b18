"""Tests for config/config.py - Configuration management."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from blue_gardener.config.config import Config
from blue_gardener.core.errors import ConfigurationError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _write_config(config_obj: Config, data) -> None:
    """Write raw YAML data to the config file without validation."""
    config_obj.config_directory.mkdir(parents=True, exist_ok=True)
    with open(config_obj.config_file, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# ===========================================================================
# ConfigurationError
# ===========================================================================
class TestConfigurationError:
    """Test cases for ConfigurationError exception."""

    def test_single_error_message(self):
        error = ConfigurationError("Single error")
        assert len(error.errors) == 1
        assert str(error) == "Single error"

    def test_format_errors_with_list(self):
        error = ConfigurationError(["First", "Second"])
        formatted = str(error)
        assert "2 errors" in formatted
        assert "  - First" in formatted
        assert "  - Second" in formatted


# ===========================================================================
# Config.__init__ / ensure_directories
# ===========================================================================
class TestConfigInitialization:

    def test_default_initialization(self):
        config = Config()
        assert config.config_directory == Path.home() / ".blue-gardener"
        assert config.config_file == Path.home() / ".blue-gardener" / "config.yaml"

    def test_custom_config_directory(self, tmp_path):
        custom_dir = tmp_path / "custom"
        config = Config(config_dir=custom_dir)
        assert config.config_directory == custom_dir
        assert config.config_file == custom_dir / "config.yaml"


class TestConfigEnsureDirectories:

    def test_creates_config_dir(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        with patch("blue_gardener.config.config.message"):
            config.ensure_directories()
            config.ensure_directories()
        assert config.config_directory.exists()

    def test_handles_permission_error(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        with (
            patch("pathlib.Path.mkdir", side_effect=PermissionError),
            patch("blue_gardener.config.config.message"),
            pytest.raises(SystemExit),
        ):
            config.ensure_directories()

    def test_handles_os_error(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        with (
            patch("pathlib.Path.mkdir", side_effect=OSError("Disk full")),
            patch("blue_gardener.config.config.message"),
            pytest.raises(SystemExit),
        ):
            config.ensure_directories()


# ===========================================================================
# validate
# ===========================================================================
class TestValidate:

    def test_empty_config_is_valid(self):
        assert Config.validate({}) == []

    def test_full_config_is_valid(self, tmp_path):
        config = {
            "default_platform": "claude",
            "catalog_directory": str(tmp_path),
            "interactive": False,
            "profiles": {"mine": {"name": "Mine", "description": "d", "agents": ["blue-a"]}},
        }
        assert Config.validate(config) == []

    def test_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match="mapping"):
            Config.validate(["a"])

    def test_unknown_default_platform(self):
        with pytest.raises(ConfigurationError, match="Unknown platform 'vim'"):
            Config.validate({"default_platform": "vim"})

    def test_default_platform_alias_accepted(self):
        assert Config.validate({"default_platform": "github-copilot"}) == []

    def test_default_platform_not_string(self):
        with pytest.raises(ConfigurationError, match="must be a string"):
            Config.validate({"default_platform": 3})

    def test_catalog_directory_empty(self):
        with pytest.raises(ConfigurationError, match="catalog_directory"):
            Config.validate({"catalog_directory": ""})

    def test_missing_catalog_directory_warns(self, tmp_path):
        warnings = Config.validate({"catalog_directory": str(tmp_path / "missing")})
        assert len(warnings) == 1
        assert "bundled catalog" in warnings[0]

    def test_interactive_not_bool(self):
        with pytest.raises(ConfigurationError, match="'interactive'"):
            Config.validate({"interactive": "yes"})

    def test_profiles_not_dict(self):
        with pytest.raises(ConfigurationError, match="'profiles' must be a dictionary"):
            Config.validate({"profiles": ["core"]})

    def test_profile_missing_agents(self):
        with pytest.raises(ConfigurationError, match="missing required key 'agents'"):
            Config.validate({"profiles": {"mine": {"name": "Mine"}}})

    def test_profile_agents_entries(self):
        with pytest.raises(ConfigurationError, match="agents entry 1"):
            Config.validate({"profiles": {"mine": {"agents": ["blue-a", 5]}}})

    def test_empty_profile_warns(self):
        warnings = Config.validate({"profiles": {"mine": {"agents": []}}})
        assert warnings == ["Profile 'mine' has no agents"]

    def test_unknown_key_warns(self):
        warnings = Config.validate({"colour": "blue"})
        assert warnings == ["Unknown configuration key 'colour' is ignored"]

    def test_collects_multiple_errors(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Config.validate({"default_platform": "vim", "interactive": "no", "profiles": 1})
        assert len(exc_info.value.errors) == 3


# ===========================================================================
# read
# ===========================================================================
class TestConfigRead:

    def test_read_missing_file_is_empty(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        assert config.read() == {}

    def test_read_empty_file_is_empty(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        config.config_directory.mkdir(parents=True)
        config.config_file.touch()
        assert config.read() == {}

    def test_read_returns_file_contents(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        data = {"default_platform": "cursor", "profiles": {"mine": {"agents": ["blue-a"]}}}
        _write_config(config, data)

        with patch("blue_gardener.config.config.message"):
            assert config.read() == data

    def test_read_handles_invalid_yaml(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        config.config_directory.mkdir(parents=True)
        config.config_file.write_text("invalid: yaml: content: [")
        with patch("blue_gardener.config.config.message"), pytest.raises(SystemExit):
            config.read()

    def test_read_handles_invalid_config(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        _write_config(config, {"default_platform": "vim"})
        with patch("blue_gardener.config.config.message") as mock_message, pytest.raises(SystemExit):
            config.read()
        assert "Unknown platform 'vim'" in mock_message.call_args[0][0]

    def test_read_reports_warnings(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        _write_config(config, {"colour": "blue"})
        with patch("blue_gardener.config.config.message") as mock_message:
            assert config.read() == {"colour": "blue"}
        texts = [call.args[0] for call in mock_message.call_args_list]
        assert "Warning: Unknown configuration key 'colour' is ignored" in texts


# ===========================================================================
# initialize / template
# ===========================================================================
class TestInitialize:

    def test_creates_file_from_template(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        with patch("blue_gardener.config.config.message"):
            assert config.initialize() is True
        assert config.config_file.read_text() == Config.generate_template()

    def test_keeps_existing_file(self, tmp_path):
        config = Config(config_dir=tmp_path / "cfg")
        _write_config(config, {"interactive": False})
        with patch("blue_gardener.config.config.message"):
            assert config.initialize() is False
        assert yaml.safe_load(config.config_file.read_text()) == {"interactive": False}


class TestGenerateTemplate:

    def test_template_is_valid_config(self):
        data = yaml.safe_load(Config.generate_template())
        assert Config.validate(data) == []
        assert data["interactive"] is True
        assert "review" in data["profiles"]
