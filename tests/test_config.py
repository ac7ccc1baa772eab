"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from microbench.config import LoggingConfig, MicrobenchSettings, load_config
from microbench.sampling import ClockSkewPolicy
from pydantic import ValidationError


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "microbench.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoggingConfig:
    def test_level_normalized(self) -> None:
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValidationError, match="unknown log level"):
            LoggingConfig(level="chatty")


class TestLoadConfig:
    def test_defaults_when_empty(self, tmp_path: Path) -> None:
        settings = load_config(_write(tmp_path, ""))
        assert settings.sampling.time_budget_ms == 300
        assert settings.sampling.min_samples == 210
        assert settings.continue_on_error is False

    def test_reads_namespaced_section(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "microbench:\n"
            "  sampling:\n"
            "    time_budget_ms: 50\n"
            "    min_samples: 20\n"
            "    max_samples: 10000\n"
            "    clock_skew: resample\n"
            "  logging:\n"
            "    level: warning\n",
        )
        settings = load_config(path)
        assert settings.sampling.time_budget_ms == 50
        assert settings.sampling.min_samples == 20
        assert settings.sampling.max_samples == 10_000
        assert settings.sampling.clock_skew is ClockSkewPolicy.resample
        assert settings.logging.level == "WARNING"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write(tmp_path, "sampling:\n  min_samples: 20\n")
        monkeypatch.setenv("MICROBENCH_SAMPLING__MIN_SAMPLES", "40")
        monkeypatch.setenv("MICROBENCH_CONTINUE_ON_ERROR", "true")

        settings = load_config(path)
        assert settings.sampling.min_samples == 40
        assert settings.continue_on_error is True

    def test_env_override_keeps_other_file_keys(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = _write(tmp_path, "sampling:\n  time_budget_ms: 50\n  min_samples: 20\n")
        monkeypatch.setenv("MICROBENCH_SAMPLING__MIN_SAMPLES", "40")

        settings = load_config(path)
        assert settings.sampling.min_samples == 40
        assert settings.sampling.time_budget_ms == 50

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="top-level mapping"):
            load_config(_write(tmp_path, "- 1\n- 2\n"))

    def test_invalid_policy_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "sampling:\n  min_samples: 10\n  max_samples: 5\n")
        with pytest.raises(ValidationError):
            load_config(path)


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MICROBENCH_SAMPLING__TIME_BUDGET_MS", "12.5")
    settings = MicrobenchSettings()
    assert settings.sampling.time_budget_ms == 12.5
