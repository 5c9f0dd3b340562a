"""Unit tests for config settings & validation."""

from dataclasses import dataclass, field
from typing import ClassVar

import pytest

from tagged_cache.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    TaggedCacheSettings,
)
from tagged_cache.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)


@dataclass
class AppSettings(Settings):
    _prefix: ClassVar[str] = "APP"

    host: str = "localhost"
    port: int = 8080
    debug: bool = False
    allowed_origins: list[str] = field(default_factory=list)


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"

    api_key: str


_CACHE_VARS = (
    "TAGGED_CACHE_TAG_PREFIX",
    "TAGGED_CACHE_KEY_TAGS_PREFIX",
    "TAGGED_CACHE_DEFAULT_PAGE_LIMIT",
    "TAGGED_CACHE_REDIS_URL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in _CACHE_VARS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_loads_string(self, monkeypatch):
        monkeypatch.setenv("APP_HOST", "example.com")
        assert EnvSettingsLoader().load(AppSettings).host == "example.com"

    def test_loads_int(self, monkeypatch):
        monkeypatch.setenv("APP_PORT", "9000")
        assert EnvSettingsLoader().load(AppSettings).port == 9000

    def test_loads_bool(self, monkeypatch):
        for truthy in ("true", "1", "yes", "on"):
            monkeypatch.setenv("APP_DEBUG", truthy)
            assert EnvSettingsLoader().load(AppSettings).debug is True
        monkeypatch.setenv("APP_DEBUG", "off")
        assert EnvSettingsLoader().load(AppSettings).debug is False

    def test_loads_list(self, monkeypatch):
        monkeypatch.setenv("APP_ALLOWED_ORIGINS", "http://a.com, http://b.com")
        assert EnvSettingsLoader().load(AppSettings).allowed_origins == ["http://a.com", "http://b.com"]

    def test_missing_required_raises(self, monkeypatch):
        monkeypatch.delenv("REQ_API_KEY", raising=False)
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader().load(RequiredSettings)
        assert exc_info.value.setting_name == "REQ_API_KEY"

    def test_bad_int_raises_invalid_value(self, monkeypatch):
        monkeypatch.setenv("APP_PORT", "eighty")
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader().load(AppSettings)
        assert exc_info.value.setting_name == "APP_PORT"


# ---------------------------------------------------------------------------
# TaggedCacheSettings
# ---------------------------------------------------------------------------


class TestTaggedCacheSettings:
    def test_defaults(self):
        settings = TaggedCacheSettings()
        assert settings.tag_prefix == "__tag__:"
        assert settings.key_tags_prefix == "__tags__:"
        assert settings.default_page_limit == 50
        assert settings.redis_url == ""

    def test_loaded_from_env(self, clean_env):
        clean_env.setenv("TAGGED_CACHE_DEFAULT_PAGE_LIMIT", "25")
        clean_env.setenv("TAGGED_CACHE_REDIS_URL", "redis://cache:6379/1")
        settings = EnvSettingsLoader().load(TaggedCacheSettings)
        assert settings.default_page_limit == 25
        assert settings.redis_url == "redis://cache:6379/1"
        assert settings.tag_prefix == "__tag__:"

    def test_empty_prefix_rejected(self):
        with pytest.raises(InvalidSettingValueError):
            TaggedCacheSettings(tag_prefix="")
        with pytest.raises(InvalidSettingValueError):
            TaggedCacheSettings(key_tags_prefix="")

    def test_overlapping_prefixes_rejected(self):
        with pytest.raises(InvalidSettingValueError):
            TaggedCacheSettings(tag_prefix="idx:", key_tags_prefix="idx:")
        with pytest.raises(InvalidSettingValueError):
            TaggedCacheSettings(tag_prefix="idx:", key_tags_prefix="idx:keys:")

    def test_page_limit_must_be_positive(self):
        with pytest.raises(InvalidSettingValueError) as exc_info:
            TaggedCacheSettings(default_page_limit=0)
        assert exc_info.value.setting_name == "default_page_limit"

    def test_invalid_env_value_surfaces_as_config_error(self, clean_env):
        clean_env.setenv("TAGGED_CACHE_DEFAULT_PAGE_LIMIT", "0")
        with pytest.raises(ConfigError):
            EnvSettingsLoader().load(TaggedCacheSettings)


class TestDotenvSettingsLoader:
    def test_loads_from_file(self, tmp_path, clean_env):
        pytest.importorskip("dotenv")
        env_file = tmp_path / ".env"
        env_file.write_text("TAGGED_CACHE_DEFAULT_PAGE_LIMIT=7\n")
        clean_env.setenv("TAGGED_CACHE_DEFAULT_PAGE_LIMIT", "1")
        settings = DotenvSettingsLoader(str(env_file), override=True).load(TaggedCacheSettings)
        assert settings.default_page_limit == 7
