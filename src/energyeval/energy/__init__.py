"""
Energy module.

Frozen / interacting / single-site / total energy queries over a
component partition.
"""

from .decomposition import (
    EnergyEvaluator,
    frozen_energy,
    interacting_energy,
    single_site_energy,
    total_energy,
)

__all__ = [
    "EnergyEvaluator",
    "frozen_energy",
    "interacting_energy",
    "single_site_energy",
    "total_energy",
]
