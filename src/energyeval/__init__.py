"""
energyeval - Pairwise energy decomposition for particle simulations.

Evaluates Lennard-Jones (or external ASE calculator) energies of
periodic particle systems split into frozen and free components:

- Minimum-image distances for orthorhombic cells with per-axis periodicity
- Scalar and per-component-pair (composite) LJ parameters
- Frozen, interacting, single-site and total energy queries
- Serial or thread-pool reductions over independent pairs
- YAML configuration and a small command line front end
"""

__version__ = "0.1.0"
__author__ = "energyeval Team"

from .core import (
    BackendFailure,
    ConfigurationMismatch,
    EnergyEvalError,
    ParticleSystem,
    UnsupportedGeometry,
    as_system,
)
from .boundary import pbc_distance
from .potential import (
    ASECalculator,
    CompositeLJParameters,
    LJParameters,
    ase_lennard_jones,
)
from .partition import component_of, split_components
from .summation import SerialExecutor, ThreadedExecutor
from .energy import (
    EnergyEvaluator,
    frozen_energy,
    interacting_energy,
    single_site_energy,
    total_energy,
)

__all__ = [
    "ParticleSystem",
    "as_system",
    "pbc_distance",
    "LJParameters",
    "CompositeLJParameters",
    "ASECalculator",
    "ase_lennard_jones",
    "component_of",
    "split_components",
    "SerialExecutor",
    "ThreadedExecutor",
    "EnergyEvaluator",
    "frozen_energy",
    "interacting_energy",
    "single_site_energy",
    "total_energy",
    "EnergyEvalError",
    "ConfigurationMismatch",
    "UnsupportedGeometry",
    "BackendFailure",
]
