"""
Tests for configuration loading.

Validates:
- Defaults when config.yaml is missing
- File values merged over defaults per section
- Environment overrides
- FetchSettings validation
"""
import pytest

from springbok_core.config import DEFAULT_CONFIG, FetchSettings, get_fetch_settings, load_config
from springbok_core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv("SPRINGBOK_GENERAL_COURT", raising=False)
    monkeypatch.delenv("SPRINGBOK_OUTPUT_FOLDER", raising=False)


class TestLoadConfig:

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config == DEFAULT_CONFIG

    def test_defaults_not_shared(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))
        config["output"]["folder"] = "elsewhere"
        assert DEFAULT_CONFIG["output"]["folder"] == "output"

    def test_file_merged_over_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("general_court: 192\nfetch:\n  timeout: 5\n")

        config = load_config(str(path))

        assert config["general_court"] == "192"
        assert config["fetch"]["timeout"] == 5
        assert config["fetch"]["max_retries"] == 3
        assert config["output"]["law_folder"] == "modified-laws"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_environment_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SPRINGBOK_GENERAL_COURT", "194")
        monkeypatch.setenv("SPRINGBOK_OUTPUT_FOLDER", "/tmp/markup")

        config = load_config(str(tmp_path / "missing.yaml"))

        assert config["general_court"] == "194"
        assert config["output"]["folder"] == "/tmp/markup"


class TestFetchSettings:

    def test_from_defaults(self):
        assert get_fetch_settings(DEFAULT_CONFIG) == FetchSettings()

    def test_base_url_trailing_slash_removed(self):
        settings = get_fetch_settings({"fetch": {"base_url": "https://example.org/"}})
        assert settings.base_url == "https://example.org"

    def test_missing_section_uses_defaults(self):
        assert get_fetch_settings({}) == FetchSettings()

    @pytest.mark.parametrize("fetch", [
        {"timeout": 0},
        {"max_retries": 0},
        {"max_concurrency": 0},
        {"retry_delay": -1},
        {"timeout": "soon"},
    ])
    def test_invalid_values(self, fetch):
        with pytest.raises(ConfigError):
            get_fetch_settings({"fetch": fetch})
