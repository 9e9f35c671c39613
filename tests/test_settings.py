"""Tests for environment-driven settings and policy validation."""

import pytest

from periodization.config.settings import OverloadPolicy, Settings
from periodization.schemas.overload import LoadPhase


def test_defaults():
    config = Settings()

    assert config.history_window_days == 7
    assert config.readiness.recovery == 0.40
    assert config.overload.risk_confidence == 0.85
    assert config.phase.high_fatigue == 70.0
    assert [step.above for step in config.load_management.steps] == [80.0, 60.0, 40.0]
    assert config.load_management.fallback_phase == LoadPhase.PROGRESSION


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PERIODIZATION_HISTORY_WINDOW_DAYS", "14")
    monkeypatch.setenv("PERIODIZATION_OVERLOAD__RISK_CONFIDENCE", "0.7")

    config = Settings()

    assert config.history_window_days == 14
    assert config.overload.risk_confidence == 0.7


def test_invalid_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("PERIODIZATION_LOG_LEVEL", "chatty")

    assert Settings().log_level == "INFO"


def test_risk_thresholds_must_decrease():
    with pytest.raises(ValueError):
        OverloadPolicy(critical_threshold=50.0, high_threshold=60.0)


def test_env_overrides_phase_and_load_policies(monkeypatch):
    monkeypatch.setenv("PERIODIZATION_PHASE__HIGH_FATIGUE", "65")
    monkeypatch.setenv("PERIODIZATION_LOAD_MANAGEMENT__POOR_SESSION_SLEEP", "6.5")
    monkeypatch.setenv(
        "PERIODIZATION_LOAD_MANAGEMENT__STEPS",
        '[{"above": 70, "phase": "deload", "reduction_pct": 35, "duration_weeks": 3}]',
    )

    config = Settings()

    assert config.phase.high_fatigue == 65.0
    assert config.phase.elevated_fatigue == 60.0
    assert config.load_management.poor_session_sleep == 6.5
    (step,) = config.load_management.steps
    assert (step.above, step.phase, step.reduction_pct, step.duration_weeks) == (70.0, LoadPhase.DELOAD, 35.0, 3)
