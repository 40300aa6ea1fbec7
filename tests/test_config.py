"""Test configuration loading and precedence"""

import pytest

from flom.core.config import (
    CONFIG_TEMPLATE,
    CliOverrides,
    DefaultConfig,
    EffectiveConfig,
    FileConfig,
    OutputConfig,
    ApiConfig,
    config_path,
    load_config,
    load_config_file,
    parse_bool_literal,
    resolve_config,
    write_config_template,
)
from flom.core.exceptions import ConfigError
from flom.core.platforms import PlatformId, SpecialTarget


def write_config(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfigFile:
    """Test reading config.toml"""

    def test_missing_file_is_empty(self, tmp_path):
        assert load_config_file(tmp_path / "missing.toml") == FileConfig()

    def test_full_file(self, tmp_path):
        path = write_config(tmp_path / "config.toml", """
[api]
odesli_key = "abc123"

[default]
target = "apple-music"
user_country = "jp"

[output]
simple = true
""")
        file_config = load_config_file(path)
        assert file_config.api.odesli_key == "abc123"
        assert file_config.default.target == "apple-music"
        assert file_config.default.user_country == "jp"
        assert file_config.output.simple is True

    def test_partial_file(self, tmp_path):
        path = write_config(tmp_path / "config.toml", '[default]\ntarget = "tidal"\n')
        file_config = load_config_file(path)
        assert file_config.api.odesli_key is None
        assert file_config.output.simple is None

    def test_blank_string_is_absent(self, tmp_path):
        path = write_config(tmp_path / "config.toml", '[api]\nodesli_key = "  "\n')
        assert load_config_file(path).api.odesli_key is None

    def test_invalid_toml(self, tmp_path):
        path = write_config(tmp_path / "config.toml", "[api\nodesli_key = ")
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.message.startswith("failed to parse config")

    def test_wrong_type(self, tmp_path):
        path = write_config(tmp_path / "config.toml", '[output]\nsimple = "yes"\n')
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.message == "'output.simple' must be a boolean"

    def test_section_not_a_table(self, tmp_path):
        path = write_config(tmp_path / "config.toml", 'api = "key"\n')
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_default_path_under_home(self, isolated_environment):
        assert config_path() == isolated_environment / ".flom" / "config.toml"


class TestResolveConfig:
    """Test file < environment < CLI precedence"""

    def test_env_target_overrides_file(self):
        file_config = FileConfig(default=DefaultConfig(target="spotify"))
        config = resolve_config(file_config, {"FLOM_DEFAULT_TARGET": "apple-music"})
        assert config.default_target is PlatformId.APPLE_MUSIC

    def test_file_target_without_env(self):
        file_config = FileConfig(default=DefaultConfig(target="spotify"))
        assert resolve_config(file_config, {}).default_target is PlatformId.SPOTIFY

    def test_no_target_anywhere(self):
        assert resolve_config(FileConfig(), {}).default_target is None

    def test_cli_target_overrides_env(self):
        config = resolve_config(
            FileConfig(default=DefaultConfig(target="spotify")),
            {"FLOM_DEFAULT_TARGET": "apple-music"},
            CliOverrides(target=SpecialTarget.ALL)
        )
        assert config.default_target is SpecialTarget.ALL

    def test_empty_env_value_is_absent(self):
        file_config = FileConfig(default=DefaultConfig(target="deezer"), api=ApiConfig(odesli_key="file-key"))
        config = resolve_config(file_config, {"FLOM_DEFAULT_TARGET": "", "FLOM_ODESLI_KEY": "  "})
        assert config.default_target is PlatformId.DEEZER
        assert config.odesli_key == "file-key"

    def test_env_key_overrides_file(self):
        file_config = FileConfig(api=ApiConfig(odesli_key="file-key"))
        assert resolve_config(file_config, {"FLOM_ODESLI_KEY": "env-key"}).odesli_key == "env-key"

    def test_unknown_target_is_config_error(self):
        with pytest.raises(ConfigError) as exc_info:
            resolve_config(FileConfig(default=DefaultConfig(target="napster")), {})
        assert "default.target" in exc_info.value.message

    @pytest.mark.parametrize("literal,expected", [
        ("true", True), ("TRUE", True), ("1", True),
        ("false", False), ("0", False),
    ])
    def test_simple_literals(self, literal, expected):
        file_config = FileConfig(output=OutputConfig(simple=not expected))
        assert resolve_config(file_config, {"FLOM_OUTPUT_SIMPLE": literal}).simple is expected

    def test_simple_rejects_other_literals(self):
        with pytest.raises(ConfigError):
            resolve_config(FileConfig(), {"FLOM_OUTPUT_SIMPLE": "yes"})

    def test_simple_flag_wins(self):
        config = resolve_config(FileConfig(), {"FLOM_OUTPUT_SIMPLE": "false"}, CliOverrides(simple=True))
        assert config.simple is True

    def test_simple_from_file(self):
        assert resolve_config(FileConfig(output=OutputConfig(simple=True)), {}).simple is True
        assert resolve_config(FileConfig(), {}).simple is False

    def test_user_country(self):
        assert resolve_config(FileConfig(), {}).user_country == "US"
        assert resolve_config(FileConfig(default=DefaultConfig(user_country="gb")), {}).user_country == "GB"
        config = resolve_config(FileConfig(default=DefaultConfig(user_country="gb")), {"FLOM_USER_COUNTRY": "de"})
        assert config.user_country == "DE"


class TestParseBoolLiteral:
    def test_error_names_source(self):
        with pytest.raises(ConfigError) as exc_info:
            parse_bool_literal("on", "FLOM_OUTPUT_SIMPLE")
        assert "FLOM_OUTPUT_SIMPLE" in exc_info.value.message


class TestEffectiveConfig:
    def test_masked_key(self):
        assert EffectiveConfig(odesli_key="abcdefghijkl").masked_key == "********ijkl"
        assert EffectiveConfig(odesli_key="short").masked_key == "*****"
        assert EffectiveConfig().masked_key is None

    def test_frozen(self):
        config = EffectiveConfig()
        with pytest.raises(AttributeError):
            config.simple = True


class TestLoadConfig:
    """Test the full load from disk and environment"""

    def test_reads_home_config_and_env(self, isolated_environment, monkeypatch):
        write_config(isolated_environment / ".flom" / "config.toml", '[api]\nodesli_key = "file-key"\n')
        monkeypatch.setenv("FLOM_DEFAULT_TARGET", "tidal")
        config = load_config(load_env_file=False)
        assert config.odesli_key == "file-key"
        assert config.default_target is PlatformId.TIDAL

    def test_dotenv_file(self, tmp_path, monkeypatch):
        # Registers removal of the variable .env is about to set
        monkeypatch.setenv("FLOM_USER_COUNTRY", "placeholder")
        monkeypatch.delenv("FLOM_USER_COUNTRY")
        (tmp_path / "work" / ".env").write_text("FLOM_USER_COUNTRY=fr\n", encoding="utf-8")
        config = load_config(path=tmp_path / "missing.toml")
        assert config.user_country == "FR"

    def test_dotenv_in_parent_directory_ignored(self, tmp_path):
        (tmp_path / ".env").write_text("FLOM_USER_COUNTRY=fr\n", encoding="utf-8")
        config = load_config(path=tmp_path / "missing.toml")
        assert config.user_country == "US"


class TestWriteConfigTemplate:
    def test_creates_template(self, tmp_path):
        path = write_config_template(tmp_path / "nested" / "config.toml")
        assert path.read_text(encoding="utf-8") == CONFIG_TEMPLATE
        assert load_config_file(path).default.user_country == "US"

    def test_keeps_existing_file(self, tmp_path):
        path = write_config(tmp_path / "config.toml", '[api]\nodesli_key = "keep"\n')
        write_config_template(path)
        assert load_config_file(path).api.odesli_key == "keep"
