"""Tests for pydantic-settings-backed tracer configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from packages.tracer_shared.config import load_settings, params_from_properties


def test_load_settings_uses_precedence_cascade(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Init params override env, env overrides YAML, YAML overrides defaults."""
    config_file = tmp_path / "tracer.yaml"
    config_file.write_text(
        "\n".join(
            [
                "logging:",
                "  level: WARNING",
                "workload:",
                "  user_count: 7",
                "  purpose_count: 9",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("TRACER_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv("TRACER_WORKLOAD__PURPOSE_COUNT", "11")

    settings = load_settings(
        cli_params={"logging": {"level": "DEBUG"}},
        config_path=config_file,
    )

    assert settings.logging.level == "DEBUG"
    assert settings.workload.user_count == 7
    assert settings.workload.purpose_count == 11
    assert settings.workload.record_count == 1000


def test_load_settings_uses_model_defaults_when_sources_missing(
    tmp_path: Path,
) -> None:
    """Settings fall back to model defaults when env and YAML are absent."""
    settings = load_settings(config_path=tmp_path / "tracer.yaml")

    assert settings.logging.service == "ycsb-tracer"
    assert settings.workload.user_count == 100
    assert settings.workload.purpose_count == 100
    assert settings.workload.objection_start == 0
    assert settings.trace.mock_values is False
    assert settings.trace.file == Path("ycsb-trace.txt")


def test_params_from_properties_maps_harness_names(tmp_path: Path) -> None:
    """Harness properties land in their nested settings sections."""
    params = params_from_properties(
        {
            "tracer.file": " /tmp/run.trace ",
            "mockvalues": "TRUE",
            "usercount": "12",
            "recordcount": "500",
            "objectionstart": "25",
            "fieldcount": "10",
        }
    )

    assert params == {
        "trace": {"file": "/tmp/run.trace", "mock_values": True},
        "workload": {"user_count": "12", "record_count": "500", "objection_start": "25"},
    }

    settings = load_settings(cli_params=params, config_path=tmp_path / "tracer.yaml")
    assert settings.workload.user_count == 12
    assert settings.workload.record_count == 500
    assert settings.trace.file == Path("/tmp/run.trace")


def test_params_from_properties_parses_mockvalues_like_java() -> None:
    """Only ``true`` enables mock values."""
    assert params_from_properties({"mockvalues": "yes"}) == {
        "trace": {"mock_values": False}
    }


def test_load_settings_rejects_zero_counts(tmp_path: Path) -> None:
    """Counts used as moduli must be positive."""
    with pytest.raises(ValidationError):
        load_settings(
            cli_params={"workload": {"user_count": 0}},
            config_path=tmp_path / "tracer.yaml",
        )


def test_load_settings_rejects_blank_trace_file(tmp_path: Path) -> None:
    """The trace file path must not be blank."""
    with pytest.raises(ValidationError):
        load_settings(
            cli_params={"trace": {"file": "  "}},
            config_path=tmp_path / "tracer.yaml",
        )


def test_settings_are_immutable(tmp_path: Path) -> None:
    """Settings are fixed for the lifetime of a session."""
    settings = load_settings(config_path=tmp_path / "tracer.yaml")

    with pytest.raises(ValidationError):
        settings.workload.user_count = 5  # type: ignore[misc]
