"""Game configuration - card/pile registry, file schemas and loading."""

from .definitions import (
    GameConfig,
    CardDefinition,
    PileDefinition,
    TableauDefinition,
    InitialMove,
)
from .validation import (
    validate_config,
    validate_state,
    ValidationResult,
    ConfigValidationError,
    StateValidationError,
)
from .loader import (
    load_config,
    load_state,
    parse_config,
    parse_state,
    dump_config,
    dump_state,
    save_config,
    save_state,
)

__all__ = [
    "GameConfig",
    "CardDefinition",
    "PileDefinition",
    "TableauDefinition",
    "InitialMove",
    "validate_config",
    "validate_state",
    "ValidationResult",
    "ConfigValidationError",
    "StateValidationError",
    "load_config",
    "load_state",
    "parse_config",
    "parse_state",
    "dump_config",
    "dump_state",
    "save_config",
    "save_state",
]
