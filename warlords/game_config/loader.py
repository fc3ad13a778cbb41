"""
Loader - Reads and writes configuration and snapshot JSON files.

Files are parsed with the pydantic schemas, converted to engine
dataclasses and validated before they are handed out.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any
import json
import logging

from pydantic import ValidationError

from ..engine_core.state import GameState
from .definitions import GameConfig
from .schemas import GameConfigFile, GameStateFile
from .validation import (
    ConfigValidationError,
    StateValidationError,
    validate_config,
    validate_state,
)


logger = logging.getLogger(__name__)


def _schema_errors(error: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}"
        for detail in error.errors()
    ]


def parse_config(data: str | bytes | dict[str, Any]) -> GameConfig:
    """
    Build and validate a GameConfig from JSON text or a decoded dict.

    Raises ConfigValidationError on schema or structural errors.
    """
    try:
        if isinstance(data, dict):
            document = GameConfigFile.model_validate(data)
        else:
            document = GameConfigFile.model_validate_json(data)
    except ValidationError as e:
        raise ConfigValidationError(_schema_errors(e)) from e

    config = document.to_config()
    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("Config: %s", warning)
    if not result.valid:
        raise ConfigValidationError(result.errors)
    return config


def parse_state(
    data: str | bytes | dict[str, Any],
    config: GameConfig | None = None,
) -> GameState:
    """
    Build and validate a GameState from JSON text or a decoded dict.

    Raises StateValidationError on schema or invariant errors.
    """
    try:
        if isinstance(data, dict):
            document = GameStateFile.model_validate(data)
        else:
            document = GameStateFile.model_validate_json(data)
    except ValidationError as e:
        raise StateValidationError(_schema_errors(e)) from e

    state = document.to_state()
    result = validate_state(state, config)
    for warning in result.warnings:
        logger.warning("State: %s", warning)
    if not result.valid:
        raise StateValidationError(result.errors)
    return state


def load_config(path: str | Path) -> GameConfig:
    """Load a configuration file."""
    logger.info("Loading config from %s", path)
    return parse_config(Path(path).read_text(encoding="utf-8"))


def load_state(path: str | Path, config: GameConfig | None = None) -> GameState:
    """Load a snapshot file."""
    logger.info("Loading state from %s", path)
    return parse_state(Path(path).read_text(encoding="utf-8"), config)


def dump_config(config: GameConfig) -> dict[str, Any]:
    """Configuration as a JSON-ready dict with camelCase keys."""
    return GameConfigFile.from_config(config).model_dump(by_alias=True, mode="json")


def dump_state(state: GameState) -> dict[str, Any]:
    """Snapshot as a JSON-ready dict with camelCase keys."""
    return GameStateFile.from_state(state).model_dump(by_alias=True, mode="json")


def save_config(config: GameConfig, path: str | Path):
    Path(path).write_text(json.dumps(dump_config(config), indent=2), encoding="utf-8")


def save_state(state: GameState, path: str | Path):
    Path(path).write_text(json.dumps(dump_state(state), indent=2), encoding="utf-8")
