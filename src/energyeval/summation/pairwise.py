"""
Pairwise summation primitives.

Intra-component, inter-component and single-site sums of pair
energies under the minimum-image convention. All functions are pure:
they read the systems and parameters and return one scalar.
"""
import math
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from energyeval.core.system import ParticleSystem
from energyeval.partition import component_labels, validate_counts
from energyeval.potential import LJParameters, PairPotential

from .executor import PairExecutor, SerialExecutor


def _executor(executor: Optional[PairExecutor]) -> PairExecutor:
    return executor if executor is not None else SerialExecutor()


def _distances(
    geometry: ParticleSystem,
    positions_i: NDArray[np.floating],
    positions_j: NDArray[np.floating],
) -> NDArray[np.floating]:
    return geometry.boundary_condition.compute_distances(
        positions_i, positions_j, geometry.box_lengths
    )


def intra_component_energy(
    component: ParticleSystem,
    params: LJParameters,
    executor: Optional[PairExecutor] = None,
) -> float:
    """
    Energy of all unordered pairs i < j inside one component.

    Args:
        component: Component (or whole system) to sum over.
        params: Parameter set used for every pair.
        executor: Reduction executor (serial by default).

    Returns:
        Intra-component energy; 0.0 without iterating when the
        component has fewer than 2 particles.
    """
    n = component.n_atoms
    if n < 2:
        return 0.0

    i_idx, j_idx = np.triu_indices(n, k=1)
    positions = component.positions

    def kernel(start: int, stop: int) -> float:
        r = _distances(
            component, positions[i_idx[start:stop]], positions[j_idx[start:stop]]
        )
        return math.fsum(np.atleast_1d(params.pair_energy(r)))

    return _executor(executor).map_reduce(kernel, len(i_idx))


def inter_component_energy(
    comp_a: ParticleSystem,
    comp_b: ParticleSystem,
    params: LJParameters,
    executor: Optional[PairExecutor] = None,
    boundary_from: Optional[ParticleSystem] = None,
) -> float:
    """
    Energy of the full cross product of two disjoint components.

    Args:
        comp_a: First component.
        comp_b: Second component.
        params: Parameter set used for every pair.
        executor: Reduction executor (serial by default).
        boundary_from: System whose box and periodicity are used
            (defaults to ``comp_a``).

    Returns:
        Sum over every (a, b) pair, each counted once.
    """
    n_a, n_b = comp_a.n_atoms, comp_b.n_atoms
    if n_a == 0 or n_b == 0:
        return 0.0

    geometry = boundary_from if boundary_from is not None else comp_a
    pos_a, pos_b = comp_a.positions, comp_b.positions

    def kernel(start: int, stop: int) -> float:
        flat = np.arange(start, stop)
        r = _distances(geometry, pos_a[flat // n_b], pos_b[flat % n_b])
        return math.fsum(np.atleast_1d(params.pair_energy(r)))

    return _executor(executor).map_reduce(kernel, n_a * n_b)


def single_site_sum(
    index: int,
    system: ParticleSystem,
    potential: PairPotential,
    executor: Optional[PairExecutor] = None,
    counts: Optional[Sequence[int]] = None,
) -> float:
    """
    Energy between particle ``index`` and every other particle.

    Without ``counts`` every pair uses ``potential.params_for(0, 0)``.
    With ``counts`` each other particle's component selects the entry
    ``(component of index, component of other)``.

    Args:
        index: Local index of the site in ``system``.
        system: System containing the site.
        potential: Pair potential (scalar or composite).
        executor: Reduction executor (serial by default).
        counts: Optional component counts for ``system``.

    Returns:
        Single-site energy.

    Raises:
        IndexError: If ``index`` is out of range.
    """
    n = system.n_atoms
    if not 0 <= index < n:
        raise IndexError(f"Index {index} out of range for {n} particles")

    if counts is None:
        labels = np.zeros(n, dtype=np.intp)
    else:
        validate_counts(system, counts)
        labels = component_labels(counts)
    from_comp = int(labels[index])
    others = np.delete(np.arange(n), index)
    site = system.positions[index]

    def kernel(start: int, stop: int) -> float:
        idx = others[start:stop]
        r = _distances(system, site, system.positions[idx])
        chunk_labels = labels[idx]
        partial = []
        for to_comp in np.unique(chunk_labels):
            params = potential.params_for(from_comp, int(to_comp))
            partial.extend(np.atleast_1d(params.pair_energy(r[chunk_labels == to_comp])))
        return math.fsum(partial)

    return _executor(executor).map_reduce(kernel, len(others))


def site_to_system_energy(
    position: NDArray[np.floating],
    other: ParticleSystem,
    params: LJParameters,
    boundary_from: ParticleSystem,
    executor: Optional[PairExecutor] = None,
) -> float:
    """
    Energy between one point and every particle of another system.

    Used for the fixed-surface term of a single-site energy, where the
    site belongs to ``boundary_from`` and ``other`` is the surface.

    Args:
        position: (3,) site position.
        other: System whose particles interact with the site.
        params: Parameter set used for every pair.
        boundary_from: System providing box and periodicity.
        executor: Reduction executor (serial by default).

    Returns:
        Sum of pair energies.
    """
    site = np.asarray(position, dtype=np.float64)

    def kernel(start: int, stop: int) -> float:
        r = _distances(boundary_from, site, other.positions[start:stop])
        return math.fsum(np.atleast_1d(params.pair_energy(r)))

    return _executor(executor).map_reduce(kernel, other.n_atoms)
