"""Builder module: construct evaluators from YAML configuration."""

from .config_loader import (
    build_evaluator_from_config,
    load_yaml,
    parse_components,
    parse_executor,
    parse_potential,
)

__all__ = [
    "build_evaluator_from_config",
    "load_yaml",
    "parse_components",
    "parse_executor",
    "parse_potential",
]
