"""
Boundary condition module.

Minimum-image strategies and geometry validation:
- PeriodicBoundaryCondition: Fully periodic (bulk systems)
- OpenBoundaryCondition: No boundaries (clusters, gas phase)
- MixedBoundaryCondition: Per-dimension settings (surfaces, slabs)
- pbc_distance: Scalar minimum-image distance between two points
"""
from typing import Sequence

from .boundary_condition import BoundaryCondition
from .geometry import (
    box_lengths_from_cell,
    check_periodic_lengths,
    check_periodicity,
    pbc_distance,
)
from .mixed_bc import MixedBoundaryCondition
from .open_bc import OpenBoundaryCondition
from .periodic_bc import PeriodicBoundaryCondition


def boundary_from_periodicity(flags: Sequence[bool]) -> BoundaryCondition:
    """
    Pick the boundary strategy matching per-axis periodicity flags.

    Args:
        flags: Three booleans, one per axis.

    Returns:
        Periodic, Open or Mixed boundary condition.
    """
    dims = check_periodicity(flags)
    if dims.all():
        return PeriodicBoundaryCondition()
    if not dims.any():
        return OpenBoundaryCondition()
    return MixedBoundaryCondition(tuple(dims))


__all__ = [
    "BoundaryCondition",
    "PeriodicBoundaryCondition",
    "OpenBoundaryCondition",
    "MixedBoundaryCondition",
    "boundary_from_periodicity",
    "box_lengths_from_cell",
    "check_periodic_lengths",
    "check_periodicity",
    "pbc_distance",
]
