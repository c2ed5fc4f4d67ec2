"""
ASE calculator backend.

Wraps any ``ase.calculators.calculator.Calculator`` as an opaque
whole-system energy function. Energies are returned in eV, the ASE
convention.
"""
import logging
import math
from typing import TYPE_CHECKING, Any

from energyeval.core.errors import BackendFailure

from ..potential_energy import ExternalPotential

if TYPE_CHECKING:
    from energyeval.core import ParticleSystem

logger = logging.getLogger(__name__)


class ASECalculator(ExternalPotential):
    """
    Light-weight wrapper around an ASE calculator.

    The wrapped calculator is attached to a fresh ``ase.Atoms`` copy of
    the system on every evaluation. Calculators cache results and are
    stateful, so a single ASECalculator must not be evaluated from
    several threads at once without external locking.

    Attributes:
        calc: The wrapped ASE calculator.

    Example:
        >>> from ase.calculators.lj import LennardJones
        >>> pot = ASECalculator(LennardJones(epsilon=1.0, sigma=1.0, rc=3.0))
        >>> energy = pot.total_energy(system)
    """

    def __init__(self, calc: Any) -> None:
        """
        Args:
            calc: ASE calculator instance.
        """
        self.calc = calc
        logger.debug(f"ASECalculator wrapping {type(calc).__name__}")

    def total_energy(self, system: "ParticleSystem") -> float:
        """
        Evaluate the total potential energy with the wrapped calculator.

        Args:
            system: System to evaluate.

        Returns:
            Potential energy in eV.

        Raises:
            BackendFailure: If the calculator raises or returns a value
                that is not a finite number.
        """
        atoms = system.to_ase()
        atoms.calc = self.calc
        try:
            raw = atoms.get_potential_energy()
        except Exception as exc:
            raise BackendFailure(
                f"{type(self.calc).__name__} failed to evaluate energy: {exc}"
            ) from exc

        try:
            energy = float(raw)
        except (TypeError, ValueError) as exc:
            raise BackendFailure(
                f"{type(self.calc).__name__} returned non-numeric energy {raw!r}"
            ) from exc
        if not math.isfinite(energy):
            raise BackendFailure(
                f"{type(self.calc).__name__} returned non-finite energy {energy}"
            )
        return energy

    def get_name(self) -> str:
        """Return backend name."""
        return f"ASE({type(self.calc).__name__})"


def ase_lennard_jones(
    epsilon: float = 1.0,
    sigma: float = 1.0,
    cutoff: float = 3.0,
) -> ASECalculator:
    """
    Create an ASE Lennard-Jones calculator wrapped as ASECalculator.

    Args:
        epsilon: Well depth (eV).
        sigma: Zero-crossing distance (Å).
        cutoff: Cutoff in units of sigma; ASE takes ``rc = cutoff * sigma``.

    Returns:
        ASECalculator around ``ase.calculators.lj.LennardJones``.
    """
    from ase.calculators.lj import LennardJones

    if not math.isfinite(cutoff) or cutoff <= 0:
        raise ValueError(
            f"ASE Lennard-Jones needs a finite positive cutoff, got {cutoff}"
        )
    return ASECalculator(LennardJones(epsilon=epsilon, sigma=sigma, rc=cutoff * sigma))
