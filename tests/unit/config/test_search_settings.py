"""Unit tests for SearchSettings, loaders and the settings factory."""
from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import ClassVar

import pytest

from ats_search.config import (
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    SearchSettings,
    Settings,
    create_settings,
    load_settings,
)


@dataclasses.dataclass
class ServiceSettings(Settings):
    _prefix: ClassVar[str] = "SVC"

    name: str
    workers: int = 2


class TestSearchSettings:
    def test_defaults(self) -> None:
        settings = SearchSettings()
        assert settings.default_page_size == 20
        assert settings.max_page_size == 100
        assert settings.boolean_expressions is False
        assert settings.sla_threshold_days == 30
        assert settings.sla_at_risk_days == 3

    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_page_size": 0},
            {"default_page_size": 150},
            {"sla_threshold_days": 0},
            {"sla_at_risk_days": 31},
            {"suggestion_limit": 5, "suggestion_scan_limit": 2},
        ],
    )
    def test_validation(self, overrides: dict) -> None:
        with pytest.raises(InvalidSettingValueError):
            SearchSettings(**overrides)


class TestEnvSettingsLoader:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATS_SEARCH_BOOLEAN_EXPRESSIONS", "yes")
        monkeypatch.setenv("ATS_SEARCH_MAX_PAGE_SIZE", "250")
        monkeypatch.setenv("ATS_SEARCH_DATABASE_URL", "postgresql+asyncpg://db/ats")
        values = EnvSettingsLoader().values(SearchSettings)
        assert values == {
            "boolean_expressions": True,
            "max_page_size": 250,
            "database_url": "postgresql+asyncpg://db/ats",
        }

    @pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
    def test_falsy(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("ATS_SEARCH_LOG_JSON", raw)
        assert EnvSettingsLoader().values(SearchSettings)["log_json"] is False

    def test_bad_bool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATS_SEARCH_LOG_JSON", "maybe")
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().values(SearchSettings)

    def test_bad_int(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATS_SEARCH_MAX_PAGE_SIZE", "lots")
        with pytest.raises(InvalidSettingValueError) as info:
            EnvSettingsLoader().values(SearchSettings)
        assert info.value.setting_name == "ATS_SEARCH_MAX_PAGE_SIZE"


class TestDotenvSettingsLoader:
    def test_reads_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ATS_SEARCH_SLA_THRESHOLD_DAYS", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("ATS_SEARCH_SLA_THRESHOLD_DAYS=45\n")
        try:
            values = DotenvSettingsLoader(str(env_file)).values(SearchSettings)
        finally:
            os.environ.pop("ATS_SEARCH_SLA_THRESHOLD_DAYS", None)
        assert values["sla_threshold_days"] == 45


class TestCreateSettings:
    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATS_SEARCH_DEFAULT_PAGE_SIZE", "10")
        settings = load_settings(overrides={"default_page_size": 25})
        assert settings.default_page_size == 25

    def test_env_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATS_SEARCH_BOOLEAN_EXPRESSIONS", "true")
        assert load_settings().boolean_expressions is True

    def test_no_loaders(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATS_SEARCH_BOOLEAN_EXPRESSIONS", "true")
        assert load_settings(loaders=[]).boolean_expressions is False

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as info:
            create_settings(ServiceSettings)
        assert info.value.setting_name == "name"

    def test_required_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SVC_NAME", "search")
        monkeypatch.setenv("SVC_WORKERS", "4")
        settings = create_settings(ServiceSettings, [EnvSettingsLoader()])
        assert (settings.name, settings.workers) == ("search", 4)

    def test_unknown_override(self) -> None:
        with pytest.raises(ConfigError):
            create_settings(SearchSettings, overrides={"colour": "red"})

    def test_invalid_value_propagates(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            load_settings(loaders=[], overrides={"max_page_size": -1})
