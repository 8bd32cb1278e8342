from dataclasses import FrozenInstanceError

import pytest

from core.config import AppConfig, EmbeddedConfig, Settings


def test_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FILE", "tmp/run.log")

    settings = Settings.from_env()

    assert settings.log_level == "DEBUG"
    assert settings.log_file == "tmp/run.log"


def test_settings_invalid_level_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "loud")
    monkeypatch.delenv("LOG_FILE", raising=False)

    settings = Settings.from_env()

    assert settings.log_level == "INFO"
    assert settings.log_file == "logs/genact.log"


def test_configs_are_immutable() -> None:
    config = AppConfig(modules=("foo",))
    with pytest.raises(FrozenInstanceError):
        config.speed_factor = 2.0  # type: ignore[misc]

    embedded = EmbeddedConfig(modules=("foo",))
    with pytest.raises(FrozenInstanceError):
        embedded.modules = ()  # type: ignore[misc]


def test_embedded_shape_has_no_exit_fields() -> None:
    embedded = EmbeddedConfig(modules=("foo",))

    assert not hasattr(embedded, "exit_after_time")
    assert not hasattr(embedded, "exit_after_modules")
    assert not hasattr(embedded, "print_manpage")
