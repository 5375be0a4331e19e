"""Unit tests for settings → strain config wiring."""

import pytest

from app.core.config import Settings
from app.equilibrium.accumulator import DEFAULT_STRAIN_CONFIG


class TestSettings:
    def test_defaults_build_default_strain_config(self):
        assert Settings().strain_config() == DEFAULT_STRAIN_CONFIG

    def test_overrides(self):
        cfg = Settings(STRAIN_BAND=0.2, STRAIN_MIN_ACTIVATION_MS=0).strain_config()
        assert cfg.band == 0.2
        assert cfg.min_activation_ms == 0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STRAIN_MIN_DOMINANCE_MS", "1000")
        assert Settings().strain_config().min_dominance_ms == 1000

    def test_inverted_rates_are_a_configuration_error(self):
        with pytest.raises(ValueError, match="decay_per_ms"):
            Settings(STRAIN_DECAY_PER_MS=1.0, STRAIN_ACCUMULATE_PER_MS=0.5).strain_config()
