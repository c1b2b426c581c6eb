import pytest
from pathlib import Path

from spoon.services.exceptions import ConfigError
from spoon.utils.config_manager import ConfigManager


class TestConfigManager:
    """Tests for loading and merging spoon configuration."""

    def test_missing_default_config_uses_defaults(self, isolated_config):
        manager = ConfigManager()
        assert manager.config_file == isolated_config
        assert manager.load_config() == {}

        options = manager.resolve_options()
        assert options.image == "spoon-pairing"
        assert options.config == isolated_config

    def test_missing_explicit_config_is_an_error(self, tmp_path):
        manager = ConfigManager(tmp_path / "nope.yml")
        with pytest.raises(ConfigError, match="Config file not found"):
            manager.load_config()

    def test_load_yaml_config(self, isolated_config):
        isolated_config.write_text(
            "url: tcp://docker.example.com:2375\n"
            "image: team-pairing\n"
            "pre-build-commands:\n"
            "  - make keys\n"
            "  - make dotfiles\n"
        )

        options = ConfigManager().resolve_options()

        assert options.url == "tcp://docker.example.com:2375"
        assert options.image == "team-pairing"
        assert options.pre_build_commands == ["make keys", "make dotfiles"]
        assert options.prefix == "spoon-"

    def test_cli_overrides_config(self, isolated_config):
        isolated_config.write_text("image: team-pairing\nprefix: team-\n")

        options = ConfigManager().resolve_options({"image": "other", "prefix": None})

        assert options.image == "other"
        assert options.prefix == "team-"

    def test_empty_file(self, isolated_config):
        isolated_config.write_text("")
        assert ConfigManager().load_config() == {}

    def test_non_mapping_rejected(self, isolated_config):
        isolated_config.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            ConfigManager().load_config()

    def test_invalid_yaml_rejected(self, isolated_config):
        isolated_config.write_text("image: [unclosed\n")
        with pytest.raises(ConfigError, match="Failed to read config file"):
            ConfigManager().load_config()

    def test_unknown_key_rejected(self, isolated_config):
        isolated_config.write_text("imgae: typo\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            ConfigManager().resolve_options()

    def test_config_is_not_executed(self, isolated_config, tmp_path):
        marker = tmp_path / "pwned"
        isolated_config.write_text(f"!!python/object/apply:os.system ['touch {marker}']\n")

        with pytest.raises(ConfigError):
            ConfigManager().load_config()
        assert not marker.exists()

    def test_explicit_path(self, tmp_path):
        config_file = tmp_path / "spoon.yml"
        config_file.write_text("prefix: pair-\n")

        options = ConfigManager(config_file).resolve_options()

        assert options.prefix == "pair-"
        assert options.config == Path(config_file)

    def test_bad_cli_value_blames_command_line(self, isolated_config):
        isolated_config.write_text("image: team-pairing\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigManager().resolve_options({"wait_timeout": 0})

        message = str(exc_info.value)
        assert message.startswith("Invalid configuration in command line options")
        assert str(isolated_config) not in message

    def test_bad_file_value_blames_file(self, isolated_config):
        isolated_config.write_text("wait_timeout: -1\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigManager().resolve_options({"image": "other"})

        assert str(exc_info.value).startswith(f"Invalid configuration in {isolated_config}")
