"""External (non-decomposable) energy backends."""

from .ase_calculator import ASECalculator, ase_lennard_jones

__all__ = ["ASECalculator", "ase_lennard_jones"]
