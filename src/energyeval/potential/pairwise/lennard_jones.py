"""
Lennard-Jones pair parameters.

The classic 12-6 Lennard-Jones potential, applied uniformly to every
pair of a system.
"""
import logging
import math
from typing import Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..potential_energy import PairPotential, _as_float_or_array, as_distances

logger = logging.getLogger(__name__)


class LJParameters(PairPotential):
    """
    Lennard-Jones 12-6 parameter set.

    U(r) = 4ε[(σ/r)¹² - (σ/r)⁶]

    where:
        - ε (epsilon): Depth of the potential well
        - σ (sigma): Distance at which U(r) = 0
        - r: Interparticle distance

    The minimum of U(r) is at r_min = 2^(1/6) * σ ≈ 1.122 * σ
    with value U_min = -ε.

    The cutoff is given in units of σ and defaults to infinity, in
    which case every pair contributes the raw LJ value. A finite
    cutoff truncates pairs beyond ``cutoff * sigma``; ``shift=True``
    additionally subtracts U(cutoff * sigma) so the energy is
    continuous there.

    Attributes:
        epsilon: Well depth ε (eV).
        sigma: Zero-crossing distance σ (Å).
        cutoff: Cutoff in units of σ.
        shift: Whether the energy is shifted to zero at the cutoff.

    Example:
        >>> lj = LJParameters(epsilon=1.0, sigma=1.0)
        >>> lj.pair_energy(1.0)
        0.0
    """

    def __init__(
        self,
        epsilon: float,
        sigma: float,
        cutoff: float = math.inf,
        shift: bool = False,
    ) -> None:
        """
        Initialize Lennard-Jones parameters.

        Args:
            epsilon: Well depth ε (energy units).
            sigma: Zero-crossing distance σ (length units).
            cutoff: Cutoff radius in units of σ (default: no cutoff).
            shift: If True, shift potential so U(cutoff) = 0.

        Raises:
            ValueError: For negative epsilon or non-positive sigma/cutoff.
        """
        if epsilon < 0:
            raise ValueError(f"Epsilon must be non-negative, got {epsilon}")
        if sigma <= 0:
            raise ValueError(f"Sigma must be positive, got {sigma}")
        if cutoff <= 0:
            raise ValueError(f"Cutoff must be positive, got {cutoff}")

        self.epsilon = float(epsilon)
        self.sigma = float(sigma)
        self.cutoff = float(cutoff)
        self.shift = bool(shift)

        if shift and math.isfinite(self.cutoff):
            sr_cut = 1.0 / self.cutoff
            self._energy_shift = 4.0 * self.epsilon * (sr_cut**12 - sr_cut**6)
        else:
            self._energy_shift = 0.0

        logger.debug(
            f"LJParameters initialized with epsilon={self.epsilon}, "
            f"sigma={self.sigma}, cutoff={self.cutoff}, shift={self.shift}"
        )

    @property
    def cutoff_radius(self) -> float:
        """Cutoff as an absolute distance (cutoff * sigma)."""
        return self.cutoff * self.sigma

    def pair_energy(
        self, r: Union[float, ArrayLike]
    ) -> Union[float, NDArray[np.floating]]:
        """
        Compute LJ energy at distance(s) r.

        The energy is undefined for coincident particles: r = 0 yields
        NaN (inf - inf) without a floating point warning.

        Args:
            r: Scalar distance or array of distances.

        Returns:
            Pair energy, a float for scalar input and an array otherwise.
        """
        r = as_distances(r)
        with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
            sr6 = (self.sigma / r) ** 6
            energy = 4.0 * self.epsilon * (sr6 * sr6 - sr6) - self._energy_shift
        if math.isfinite(self.cutoff):
            energy = np.where(r > self.cutoff_radius, 0.0, energy)
        return _as_float_or_array(energy)

    def params_for(self, comp_i: int, comp_j: int) -> "LJParameters":
        """A single parameter set serves every component pair."""
        return self

    def check_components(self, n_components: int) -> None:
        """Any number of components is accepted."""
        return None

    def get_name(self) -> str:
        """Return potential name with parameters."""
        return f"LJ(ε={self.epsilon}, σ={self.sigma}, rc={self.cutoff}σ)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LJParameters):
            return NotImplemented
        return (
            self.epsilon == other.epsilon
            and self.sigma == other.sigma
            and self.cutoff == other.cutoff
            and self.shift == other.shift
        )

    def __hash__(self) -> int:
        return hash((self.epsilon, self.sigma, self.cutoff, self.shift))

    def __repr__(self) -> str:
        return (
            f"LJParameters(epsilon={self.epsilon}, sigma={self.sigma}, "
            f"cutoff={self.cutoff}, shift={self.shift})"
        )
