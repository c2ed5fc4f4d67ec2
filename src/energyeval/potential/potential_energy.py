"""
Abstract base classes for potential descriptors.

A potential is either decomposable into pair contributions
(PairPotential) or an opaque whole-system energy function
(ExternalPotential). The energy engine dispatches on this split.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

if TYPE_CHECKING:
    from energyeval.core import ParticleSystem
    from .pairwise import LJParameters


class PotentialEnergy(ABC):
    """Common base for every potential descriptor."""

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this potential."""
        pass


class PairPotential(PotentialEnergy):
    """
    Potential made of independent pair contributions.

    Subclasses map a component pair to the parameter set used for
    every particle pair between (or within) those components. The
    summation layer only ever sees :class:`LJParameters`.
    """

    @abstractmethod
    def params_for(self, comp_i: int, comp_j: int) -> "LJParameters":
        """
        Parameter set for pairs between components ``comp_i`` and ``comp_j``.

        ``comp_i == comp_j`` selects the intra-component parameters.
        """
        pass

    @abstractmethod
    def check_components(self, n_components: int) -> None:
        """
        Validate that this potential can serve ``n_components`` components.

        Raises:
            ConfigurationMismatch: If the component count is incompatible.
        """
        pass

    @property
    def requires_components(self) -> bool:
        """Whether energy queries need explicit component counts."""
        return False


class ExternalPotential(PotentialEnergy):
    """
    Opaque whole-system energy backend.

    Offers no per-pair or per-component decomposition; the energy
    engine falls back to documented placeholder behaviour for frozen
    and single-site queries.
    """

    @abstractmethod
    def total_energy(self, system: "ParticleSystem") -> float:
        """
        Evaluate the potential energy of the whole system.

        Raises:
            BackendFailure: If the backend fails or returns a non-number.
        """
        pass


def _as_float_or_array(values: NDArray[np.floating]) -> Union[float, NDArray[np.floating]]:
    """Return a Python float for 0-d results, the array otherwise."""
    if np.ndim(values) == 0:
        return float(values)
    return values


def as_distances(r: ArrayLike) -> NDArray[np.floating]:
    """Convert distances to a float64 array."""
    return np.asarray(r, dtype=np.float64)
