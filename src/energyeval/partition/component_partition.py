"""
Component partition of a particle system.

Component k owns the contiguous index range defined by the cumulative
sums of the per-component counts: component 0 holds indices
[0, n0), component 1 holds [n0, n0 + n1), and so on.
"""
import logging
from typing import List, Sequence

import numpy as np
from numpy.typing import NDArray

from energyeval.core.errors import ConfigurationMismatch
from energyeval.core.system import ParticleSystem

logger = logging.getLogger(__name__)


def component_boundaries(counts: Sequence[int]) -> NDArray[np.intp]:
    """
    Cumulative boundaries [0, n0, n0+n1, ...] of the components.

    Raises:
        ConfigurationMismatch: If any count is negative.
    """
    counts_arr = np.asarray(list(counts), dtype=np.intp)
    if np.any(counts_arr < 0):
        raise ConfigurationMismatch(f"Component counts must be non-negative, got {list(counts)}")
    return np.concatenate(([0], np.cumsum(counts_arr)))


def component_ranges(counts: Sequence[int]) -> List[range]:
    """Half-open global index range of each component."""
    cuts = component_boundaries(counts)
    return [range(int(cuts[k]), int(cuts[k + 1])) for k in range(len(cuts) - 1)]


def validate_counts(system: ParticleSystem, counts: Sequence[int]) -> None:
    """
    Check that the counts cover the system exactly.

    Raises:
        ConfigurationMismatch: If counts are negative or do not sum to
            the particle count.
    """
    total = int(component_boundaries(counts)[-1])
    if total != system.n_atoms:
        raise ConfigurationMismatch(
            f"Sum of component counts ({total}) does not match "
            f"number of particles ({system.n_atoms})"
        )


def validate_frozen_mask(frozen: Sequence) -> List[bool]:
    """
    Check that every frozen flag is a real boolean.

    Returns:
        The flags as a list of Python bools.

    Raises:
        ConfigurationMismatch: If a flag is not ``bool`` or ``numpy.bool_``
            (a quoted YAML "false" would otherwise count as frozen).
    """
    flags = list(frozen)
    for k, flag in enumerate(flags):
        if not isinstance(flag, (bool, np.bool_)):
            raise ConfigurationMismatch(
                f"Frozen flag for component {k} must be a boolean, "
                f"got {flag!r} ({type(flag).__name__})"
            )
    return [bool(flag) for flag in flags]


def split_components(
    system: ParticleSystem, counts: Sequence[int]
) -> List[ParticleSystem]:
    """
    Split a system into contiguous component views.

    Args:
        system: System to split.
        counts: Number of particles in each component.

    Returns:
        One ParticleSystem per component, in order. Each view keeps
        the parent's cell and periodicity, and its ``offset`` maps
        local indices back to the parent.

    Raises:
        ConfigurationMismatch: If the counts do not cover the system.
    """
    validate_counts(system, counts)
    return [system.subsystem(r.start, r.stop) for r in component_ranges(counts)]


def component_of(global_index: int, counts: Sequence[int]) -> int:
    """
    Component owning a global particle index.

    Args:
        global_index: Index into the full system.
        counts: Number of particles in each component.

    Returns:
        Component index (0-based).

    Raises:
        IndexError: If the index lies outside every component.

    Example:
        >>> component_of(4, [2, 3, 1])
        1
    """
    cuts = component_boundaries(counts)
    if not 0 <= global_index < cuts[-1]:
        raise IndexError(
            f"Index {global_index} out of range for {int(cuts[-1])} particles"
        )
    # searchsorted(side="right") - 1 skips empty components at a shared boundary
    return int(np.searchsorted(cuts, global_index, side="right")) - 1


def component_labels(counts: Sequence[int]) -> NDArray[np.intp]:
    """
    Component index of every particle.

    Returns:
        (N,) array with ``labels[i] == component_of(i, counts)``.
    """
    cuts = component_boundaries(counts)
    return np.repeat(np.arange(len(cuts) - 1, dtype=np.intp), np.diff(cuts))
