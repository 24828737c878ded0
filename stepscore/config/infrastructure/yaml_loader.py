"""YAML config loader: parses, interpolates env vars, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from stepscore.config.domain.config import ExperimentConfig
from stepscore.config.domain.observer import ConfigObserver
from stepscore.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from stepscore.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns an ExperimentConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> ExperimentConfig:
        """
        Load, interpolate, validate, and return an ExperimentConfig.

        Raises:
            ConfigLoadError: if the file does not exist or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the schema is violated.
        """
        raw = _parse_yaml(path=path)
        missing = collect_missing_vars(raw)
        if missing:
            raise MissingEnvVarsError(missing)
        cfg = _build_config(resolved=interpolate(raw))
        if cfg.execution.sandbox:
            self._observer.config_sandbox_warning(name=cfg.name)
        self._observer.config_loaded(name=cfg.name, version=cfg.version)
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc


def _build_config(resolved: Any) -> ExperimentConfig:
    if not isinstance(resolved, dict):
        raise ConfigValidationError("top-level document must be a mapping")
    try:
        return ExperimentConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc
