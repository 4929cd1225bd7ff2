import pytest

from crud_backend.settings import ConfigError, get_settings, load_config_file, parse_address

_ENV_VARS = [
    "CONFIG_FILE",
    "SERVER_ADDRESS",
    "APP_NAME",
    "APP_VERSION",
    "LOG_LEVEL",
    "LOG_FILE",
    "CORS_ALLOW_ORIGINS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestGetSettings:
    def test_defaults(self):
        s = get_settings()
        assert s.server_address == ":8080"
        assert s.app_name == "CRUD Backend"
        assert s.log_level == "INFO"
        assert s.log_file is None
        assert s.cors_allow_origins == ["*"]

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SERVER_ADDRESS", "127.0.0.1:9000")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
        s = get_settings()
        assert s.server_address == "127.0.0.1:9000"
        assert s.log_level == "DEBUG"
        assert s.cors_allow_origins == ["http://a.test", "http://b.test"]

    def test_yaml_file(self, monkeypatch, tmp_path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text(
            "app:\n"
            "  name: Todo Service\n"
            "  version: 2.0.0\n"
            "server:\n"
            "  address: ':7000'\n"
            "logging:\n"
            "  level: warning\n"
            "  output: logs/app.log\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("CONFIG_FILE", str(cfg))
        s = get_settings()
        assert s.app_name == "Todo Service"
        assert s.app_version == "2.0.0"
        assert s.server_address == ":7000"
        assert s.log_level == "WARNING"
        assert s.log_file == "logs/app.log"

    def test_env_beats_yaml(self, monkeypatch, tmp_path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("server:\n  address: ':7000'\n", encoding="utf-8")
        monkeypatch.setenv("CONFIG_FILE", str(cfg))
        monkeypatch.setenv("SERVER_ADDRESS", ":7001")
        assert get_settings().server_address == ":7001"


class TestLoadConfigFile:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="error reading config file"):
            load_config_file(str(tmp_path / "nope.yaml"))

    def test_malformed_yaml(self, tmp_path):
        cfg = tmp_path / "bad.yaml"
        cfg.write_text("server: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="error parsing config file"):
            load_config_file(str(cfg))

    def test_non_mapping(self, tmp_path):
        cfg = tmp_path / "list.yaml"
        cfg.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config_file(str(cfg))

    def test_empty_file(self, tmp_path):
        cfg = tmp_path / "empty.yaml"
        cfg.write_text("", encoding="utf-8")
        assert load_config_file(str(cfg)) == {}


class TestParseAddress:
    @pytest.mark.parametrize(
        "address, expected",
        [
            (":8080", ("0.0.0.0", 8080)),
            ("localhost:9000", ("localhost", 9000)),
            ("127.0.0.1:80", ("127.0.0.1", 80)),
        ],
    )
    def test_valid(self, address, expected):
        assert parse_address(address) == expected

    @pytest.mark.parametrize("address", ["8080", "host:port", ""])
    def test_invalid(self, address):
        with pytest.raises(ConfigError):
            parse_address(address)
