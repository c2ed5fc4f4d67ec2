"""
Configuration loader for YAML-based energy evaluation setup.

Builds potentials, component partitions and executors from a
configuration dictionary (typically loaded from YAML).

Example config:
    potential:
      type: composite
      n_components: 2
      pairs:
        - {epsilon: 1.0, sigma: 1.0}
        - {epsilon: 0.5, sigma: 1.1}
        - {epsilon: 0.2, sigma: 1.2}
    components:
      counts: [4, 12]
      frozen: [false, true]
    parallel:
      workers: 4
      chunk_size: 4096
"""
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from energyeval.core.schemas import EnergyConfig
from energyeval.energy import EnergyEvaluator
from energyeval.partition import validate_frozen_mask
from energyeval.potential import (
    CompositeLJParameters,
    LJParameters,
    PotentialEnergy,
    ase_lennard_jones,
)
from energyeval.summation import PairExecutor, SerialExecutor, ThreadedExecutor
from energyeval.summation.executor import DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        path: Path to YAML file.

    Returns:
        Dictionary with configuration (empty for an empty file).
    """
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _parse_lj(pot_config: Dict[str, Any]) -> LJParameters:
    """Parse one LJ parameter set."""
    return LJParameters(
        epsilon=float(pot_config.get("epsilon", 1.0)),
        sigma=float(pot_config.get("sigma", 1.0)),
        cutoff=float(pot_config.get("cutoff", math.inf)),
        shift=bool(pot_config.get("shift", False)),
    )


def parse_potential(config: Dict[str, Any]) -> PotentialEnergy:
    """
    Parse potential from config.

    Supported types: ``lj`` (alias ``lennard_jones``), ``composite``
    and ``ase_lj``.

    Raises:
        ValueError: For unknown potential types.
    """
    pot_config = config.get("potential", {}) or {}
    pot_type = str(pot_config.get("type", "lj")).lower()

    if pot_type == "lj" or pot_type == "lennard_jones":
        return _parse_lj(pot_config)
    elif pot_type == "composite":
        pairs = [_parse_lj(p) for p in pot_config.get("pairs", [])]
        return CompositeLJParameters.from_upper_triangle(
            int(pot_config.get("n_components", 1)), pairs
        )
    elif pot_type == "ase_lj":
        return ase_lennard_jones(
            epsilon=float(pot_config.get("epsilon", 1.0)),
            sigma=float(pot_config.get("sigma", 1.0)),
            cutoff=float(pot_config.get("cutoff", 3.0)),
        )
    else:
        raise ValueError(f"Unknown potential type: {pot_type}")


def parse_components(
    config: Dict[str, Any], n_atoms: Optional[int] = None
) -> Tuple[List[int], List[bool]]:
    """
    Parse component counts and frozen mask from config.

    Missing counts default to a single component of ``n_atoms``
    particles; a missing frozen mask defaults to all components free.

    Raises:
        ValueError: If counts are missing and ``n_atoms`` is unknown.
        ConfigurationMismatch: If a frozen flag is not a boolean.
    """
    comp_config = config.get("components", {}) or {}
    counts = comp_config.get("counts")
    if counts is None:
        if n_atoms is None:
            raise ValueError("components.counts is required when n_atoms is unknown")
        counts = [n_atoms]
    counts = [int(c) for c in counts]
    frozen = comp_config.get("frozen")
    if frozen is None:
        frozen = [False] * len(counts)
    return counts, validate_frozen_mask(frozen)


def parse_executor(config: Dict[str, Any]) -> PairExecutor:
    """Parse reduction executor from config."""
    par_config = config.get("parallel", {}) or {}
    workers = int(par_config.get("workers", 1))
    chunk_size = int(par_config.get("chunk_size", DEFAULT_CHUNK_SIZE))
    if workers > 1:
        return ThreadedExecutor(max_workers=workers, chunk_size=chunk_size)
    return SerialExecutor(chunk_size=chunk_size)


def build_evaluator_from_config(
    config: Union[Dict[str, Any], EnergyConfig],
) -> EnergyEvaluator:
    """
    Build an EnergyEvaluator from a configuration.

    Args:
        config: Configuration dictionary or EnergyConfig.

    Returns:
        EnergyEvaluator with the configured potential and executor.
    """
    if isinstance(config, EnergyConfig):
        config = config.to_dict()
    potential = parse_potential(config)
    executor = parse_executor(config)
    logger.debug(
        f"Built evaluator: potential={potential.get_name()}, "
        f"executor={executor.get_name()}"
    )
    return EnergyEvaluator(potential, executor)
