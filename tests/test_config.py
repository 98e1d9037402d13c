"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from daylog.config import Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SIMILARITY_THRESHOLD", raising=False)
    settings = Settings(_env_file=None)
    assert settings.similarity_threshold == 0.6
    assert settings.repeat_min_matches == 2
    assert settings.chart_label_density == "half"
    assert settings.body_weight_lbs is None


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIMILARITY_THRESHOLD", "0.75")
    monkeypatch.setenv("BODY_WEIGHT_LBS", "165")
    monkeypatch.setenv("BODY_COMPOSITION", "female")
    settings = Settings(_env_file=None)
    assert settings.similarity_threshold == 0.75
    burn_settings = settings.calorie_burn_settings()
    assert burn_settings.body_weight_lbs == 165
    assert burn_settings.body_composition == "female"


def test_settings_reject_invalid_values() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, similarity_threshold=1.5)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, chart_label_density="tiny")
