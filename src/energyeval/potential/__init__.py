"""
Potential module.

Potential descriptors dispatched over by the energy engine:
- Pairwise: LJParameters (one parameter set for the whole system)
- Composite: CompositeLJParameters (per-component-pair matrix)
- External: ASECalculator (opaque whole-system backend)
"""

from .composite_potential import CompositeLJParameters
from .external import ASECalculator, ase_lennard_jones
from .pairwise import LJParameters
from .potential_energy import ExternalPotential, PairPotential, PotentialEnergy

__all__ = [
    # Base classes
    "PotentialEnergy",
    "PairPotential",
    "ExternalPotential",
    # Pairwise
    "LJParameters",
    # Composite
    "CompositeLJParameters",
    # External
    "ASECalculator",
    "ase_lennard_jones",
]
