"""Tests for ingestion settings and host version providers"""

import pytest
from pydantic import ValidationError

from appingest.core.config import IngestionSettings, get_config, reset_config
from appingest.core.packages.exceptions import ConfigurationError
from appingest.core.packages.version import (
    HostVersionProvider,
    SettingsVersionProvider,
    StaticVersionProvider,
    resolve_host_version,
)


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()


class TestIngestionSettings:
    """Defaults, environment overrides and validators"""

    def test_defaults(self):
        settings = IngestionSettings()

        assert settings.manifest_name == "app.json"
        assert settings.source_extension == ".ts"
        assert settings.i18n_directory == "i18n/"
        assert settings.allowed_icon_extensions == [".png", ".jpg", ".jpeg", ".gif"]
        assert settings.max_archive_bytes == 50 * 1024 * 1024
        assert settings.max_manifest_bytes == 100 * 1024

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("APPINGEST_HOST_API_VERSION", "3.1.4")
        monkeypatch.setenv("APPINGEST_MANIFEST_NAME", "rocketlet.json")

        settings = IngestionSettings()

        assert settings.host_api_version == "3.1.4"
        assert settings.manifest_name == "rocketlet.json"

    def test_invalid_host_version(self):
        with pytest.raises(ValidationError, match="host_api_version"):
            IngestionSettings(host_api_version="v2")

    @pytest.mark.parametrize("value", ["i18n", "/i18n/", "i18n//"])
    def test_i18n_directory_normalized(self, value):
        assert IngestionSettings(i18n_directory=value).i18n_directory == "i18n/"

    def test_icon_extensions_normalized(self):
        settings = IngestionSettings(allowed_icon_extensions=["PNG", ".Webp", " "])

        assert settings.allowed_icon_extensions == [".png", ".webp"]

    def test_get_config_is_cached(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("APPINGEST_HOST_API_VERSION", "9.9.9")

        assert get_config() is first
        assert get_config(force_reload=True).host_api_version == "9.9.9"


class TestVersionProviders:
    """Host version resolution"""

    def test_static_provider(self):
        provider = StaticVersionProvider("2.0.0")

        assert isinstance(provider, HostVersionProvider)
        assert resolve_host_version(provider) == "2.0.0"

    def test_settings_provider(self):
        provider = SettingsVersionProvider(IngestionSettings(host_api_version="1.2.3"))

        assert resolve_host_version(provider) == "1.2.3"

    def test_settings_provider_uses_global_config(self, monkeypatch):
        monkeypatch.setenv("APPINGEST_HOST_API_VERSION", "4.5.6")

        assert SettingsVersionProvider().get_api_version() == "4.5.6"

    def test_literal_version(self):
        assert resolve_host_version("1.0.0-rc.1") == "1.0.0-rc.1"

    @pytest.mark.parametrize("bad", ["", "1.0", "latest"])
    def test_invalid_version(self, bad):
        with pytest.raises(ConfigurationError):
            resolve_host_version(StaticVersionProvider(bad))
