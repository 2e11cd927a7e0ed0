import logging

import pytest

from multicurve_sensitivities.config import Settings, get_settings


def test_defaults(monkeypatch):
    for key in ("LOG_LEVEL", "MAX_CONDITION_NUMBER", "BOOTSTRAP_ACCURACY", "BOOTSTRAP_MAX_ITER"):
        monkeypatch.delenv(f"MULTICURVE_{key}", raising=False)
    s = Settings()
    assert s.log_level == "INFO"
    assert s.max_condition_number == 1e12
    assert s.bootstrap_accuracy == 1e-12
    assert s.bootstrap_max_iter == 300
    assert s.log_level_int == logging.INFO


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MULTICURVE_LOG_LEVEL", "debug")
    monkeypatch.setenv("MULTICURVE_MAX_CONDITION_NUMBER", "1e8")
    monkeypatch.setenv("MULTICURVE_BOOTSTRAP_MAX_ITER", "50")
    s = Settings()
    assert s.log_level_int == logging.DEBUG
    assert s.max_condition_number == 1e8
    assert s.bootstrap_max_iter == 50


def test_invalid_values_are_rejected(monkeypatch):
    monkeypatch.setenv("MULTICURVE_BOOTSTRAP_MAX_ITER", "many")
    with pytest.raises(ValueError, match="MULTICURVE_BOOTSTRAP_MAX_ITER"):
        Settings()

    monkeypatch.setenv("MULTICURVE_BOOTSTRAP_MAX_ITER", "10")
    monkeypatch.setenv("MULTICURVE_MAX_CONDITION_NUMBER", "-1")
    with pytest.raises(ValueError):
        Settings()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
