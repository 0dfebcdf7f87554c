"""Load and validate YAML run configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from equalpay.core.errors import InvalidParameters
from equalpay.core.parameters import CalibrationParams, SolverSettings

_TOP_LEVEL_KEYS = {"calibration", "solver", "output"}


class RunConfig(BaseModel):
    """Resolved run configuration from YAML."""

    name: str
    calibration: CalibrationParams = Field(default_factory=CalibrationParams)
    solver: SolverSettings = Field(default_factory=SolverSettings)
    output_path: Path | None = None

    model_config = ConfigDict(frozen=True)


def _mapping(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key) or {}
    if not isinstance(value, dict):
        raise InvalidParameters(f"'{key}' must be a mapping")
    return value


def _build(model: type[BaseModel], values: dict[str, Any], section: str) -> Any:
    try:
        return model(**values)
    except ValidationError as exc:
        raise InvalidParameters(f"Invalid '{section}' section: {exc}") from exc


def load_run_config(config_path: Path | str) -> RunConfig:
    """Read a run configuration file.

    Relative output paths are resolved against the directory holding the
    YAML file.

    Raises:
        InvalidParameters: If the file is unreadable or malformed, or any value violates
            the calibration or solver invariants.
    """
    config_path = Path(config_path)
    try:
        payload = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise InvalidParameters(f"Cannot read run configuration {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise InvalidParameters(f"Malformed run configuration {config_path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise InvalidParameters("Run configuration YAML must define a top-level mapping")

    unknown = set(payload) - _TOP_LEVEL_KEYS
    if unknown:
        raise InvalidParameters(f"Unknown configuration sections: {sorted(unknown)}")

    calibration = _build(CalibrationParams, _mapping(payload, "calibration"), "calibration")
    solver = _build(SolverSettings, _mapping(payload, "solver"), "solver")

    output_cfg = _mapping(payload, "output")
    output_path: Path | None = None
    if output_cfg.get("path"):
        output_path = Path(str(output_cfg["path"]))
        if not output_path.is_absolute():
            output_path = (config_path.parent / output_path).resolve()

    return RunConfig(
        name=config_path.stem,
        calibration=calibration,
        solver=solver,
        output_path=output_path,
    )
