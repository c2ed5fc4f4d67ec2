"""
Energy decomposition over frozen and free components.

The EnergyEvaluator combines a potential descriptor, the component
partition and the pairwise summation primitives into four queries:

- frozen_energy: pairs where both particles are in frozen components
- interacting_energy: pairs with at least one free particle
- single_site_energy: one particle against everything else
- total_energy: all pairs

For LJ potentials ``frozen_energy + interacting_energy == total_energy``
for any partition. External calculators cannot be decomposed; their
frozen and single-site queries return documented placeholder values.
"""
import logging
from typing import Any, List, Optional, Sequence, Tuple

from energyeval.core.errors import ConfigurationMismatch
from energyeval.core.system import ParticleSystem, as_system
from energyeval.partition import (
    component_of,
    split_components,
    validate_counts,
    validate_frozen_mask,
)
from energyeval.potential import ExternalPotential, PairPotential, PotentialEnergy
from energyeval.summation import (
    PairExecutor,
    SerialExecutor,
    inter_component_energy,
    intra_component_energy,
    single_site_sum,
    site_to_system_energy,
)

logger = logging.getLogger(__name__)


class EnergyEvaluator:
    """
    Evaluates decomposed pairwise energies of a system.

    The evaluator is stateless apart from its potential and executor
    and can be shared between queries. With an ASECalculator potential
    it must not be used from several threads at once.

    Attributes:
        potential: Potential descriptor (LJ, composite LJ or external).
        executor: Reduction executor for the pair sums.

    Example:
        >>> from energyeval import EnergyEvaluator, LJParameters
        >>> evaluator = EnergyEvaluator(LJParameters(epsilon=1.0, sigma=1.0))
        >>> e_frozen = evaluator.frozen_energy(atoms, [2, 3, 1], [True, False, True])
        >>> e_free = evaluator.interacting_energy(atoms, [2, 3, 1], [True, False, True])
    """

    def __init__(
        self,
        potential: PotentialEnergy,
        executor: Optional[PairExecutor] = None,
    ) -> None:
        """
        Initialize evaluator.

        Args:
            potential: Potential descriptor.
            executor: Reduction executor. Default: SerialExecutor.
        """
        if not isinstance(potential, PotentialEnergy):
            raise TypeError(
                f"Expected a PotentialEnergy, got {type(potential).__name__}"
            )
        self.potential = potential
        self.executor = executor if executor is not None else SerialExecutor()

    # ------------------------------------------------------------------ #
    #  Validation
    # ------------------------------------------------------------------ #

    def _components(
        self,
        system: ParticleSystem,
        counts: Sequence[int],
        frozen: Sequence[bool],
        surface: Optional[Any] = None,
    ) -> Tuple[List[ParticleSystem], List[bool]]:
        """Validate everything, then split (and append the surface)."""
        counts = list(counts)
        frozen = validate_frozen_mask(frozen)
        if len(counts) != len(frozen):
            raise ConfigurationMismatch.lengths(
                "component counts", len(counts), "frozen mask", len(frozen)
            )
        if surface is not None:
            surface = as_system(surface)
            counts_all = counts + [surface.n_atoms]
            frozen_all = frozen + [True]
        else:
            counts_all, frozen_all = counts, frozen
        if isinstance(self.potential, PairPotential):
            self.potential.check_components(len(counts_all))
        validate_counts(system, counts)

        components = split_components(system, counts)
        if surface is not None:
            components.append(surface)
        return components, frozen_all

    # ------------------------------------------------------------------ #
    #  Pair sums over selected component pairs
    # ------------------------------------------------------------------ #

    def _sum_components(
        self,
        system: ParticleSystem,
        components: List[ParticleSystem],
        frozen: List[bool],
        want_frozen: bool,
    ) -> float:
        """
        Sum intra and inter terms selected by the frozen mask.

        ``want_frozen`` selects frozen-frozen terms; otherwise every
        term touching at least one free component is selected.
        """
        potential = self.potential
        energy = 0.0
        n = len(components)

        for i in range(n):
            if frozen[i] == want_frozen and components[i].n_atoms > 1:
                energy += intra_component_energy(
                    components[i], potential.params_for(i, i), self.executor
                )

        for i in range(n):
            for j in range(i + 1, n):
                both_frozen = frozen[i] and frozen[j]
                if both_frozen == want_frozen:
                    energy += inter_component_energy(
                        components[i],
                        components[j],
                        potential.params_for(i, j),
                        self.executor,
                        boundary_from=system,
                    )
        return energy

    # ------------------------------------------------------------------ #
    #  Queries
    # ------------------------------------------------------------------ #

    def frozen_energy(
        self,
        system: Any,
        counts: Sequence[int],
        frozen: Sequence[bool],
    ) -> float:
        """
        Energy of pairs where both particles belong to frozen components.

        Intra energy of every frozen component with at least 2 particles
        plus inter energy of every unordered pair of distinct frozen
        components. Frozen particles do not move, so this is typically
        computed once per configuration.

        Args:
            system: ParticleSystem or ase.Atoms.
            counts: Number of particles in each component.
            frozen: Whether each component is frozen.

        Returns:
            Frozen energy (eV). Always 0.0 for external calculators.

        Raises:
            ConfigurationMismatch: If counts, frozen mask and potential
                disagree.
        """
        system = as_system(system)
        if isinstance(self.potential, ExternalPotential):
            logger.debug(
                "frozen_energy: external calculator cannot separate frozen "
                "pairs; returning placeholder 0.0"
            )
            return 0.0

        components, frozen_list = self._components(system, counts, frozen)
        logger.debug(
            f"frozen_energy: counts={list(counts)}, frozen={frozen_list}, "
            f"potential={self.potential.get_name()}"
        )
        return self._sum_components(system, components, frozen_list, want_frozen=True)

    def interacting_energy(
        self,
        system: Any,
        counts: Optional[Sequence[int]] = None,
        frozen: Optional[Sequence[bool]] = None,
        surface: Optional[Any] = None,
    ) -> float:
        """
        Energy of pairs with at least one particle in a free component.

        Intra energy of every free component with at least 2 particles
        plus inter energy of every unordered pair of components where at
        least one is free. A ``surface`` is appended as one extra,
        always-frozen component (the last slot of a composite matrix).

        Without counts and frozen mask the whole system is treated as a
        single free component.

        Args:
            system: ParticleSystem or ase.Atoms.
            counts: Number of particles in each component.
            frozen: Whether each component is frozen.
            surface: Optional fixed surface (ParticleSystem or ase.Atoms).

        Returns:
            Interacting energy (eV). For external calculators, the
            whole-system energy with counts/frozen/surface ignored.

        Raises:
            ConfigurationMismatch: If only one of counts/frozen is given
                or they disagree with each other or the potential.
        """
        system = as_system(system)
        if isinstance(self.potential, ExternalPotential):
            logger.debug(
                "interacting_energy: external calculator evaluates the whole "
                "system; component partition ignored"
            )
            return self.potential.total_energy(system)

        if counts is None and frozen is None:
            counts, frozen = [system.n_atoms], [False]
        elif counts is None or frozen is None:
            raise ConfigurationMismatch(
                "Component counts and frozen mask must be given together"
            )

        components, frozen_list = self._components(system, counts, frozen, surface)
        logger.debug(
            f"interacting_energy: counts={list(counts)}, frozen={frozen_list}, "
            f"surface={surface is not None}, potential={self.potential.get_name()}"
        )
        return self._sum_components(system, components, frozen_list, want_frozen=False)

    def single_site_energy(
        self,
        index: int,
        system: Any,
        counts: Optional[Sequence[int]] = None,
        surface: Optional[Any] = None,
    ) -> float:
        """
        Energy between particle ``index`` and every other particle.

        With a composite potential the entry for (component of index,
        component of other) is used for each pair, and ``counts`` is
        required. A ``surface`` adds the interaction with every surface
        particle using the last matrix slot.

        Args:
            index: Global index of the site.
            system: ParticleSystem or ase.Atoms.
            counts: Number of particles in each component.
            surface: Optional fixed surface.

        Returns:
            Single-site energy (eV). For external calculators, the
            whole-system energy, a coarse placeholder rather than a
            per-particle decomposition.

        Raises:
            ConfigurationMismatch: If counts disagree with the system or
                the potential.
            IndexError: If ``index`` is out of range.
        """
        system = as_system(system)
        if not 0 <= index < system.n_atoms:
            raise IndexError(
                f"Index {index} out of range for {system.n_atoms} particles"
            )
        if isinstance(self.potential, ExternalPotential):
            logger.debug(
                "single_site_energy: external calculator has no per-site "
                "decomposition; returning whole-system energy as placeholder"
            )
            return self.potential.total_energy(system)

        potential = self.potential
        if surface is not None:
            surface = as_system(surface)
        if counts is not None:
            counts = list(counts)
            n_slots = len(counts) + (1 if surface is not None else 0)
            potential.check_components(n_slots)
            validate_counts(system, counts)
            from_comp = component_of(index, counts)
        elif potential.requires_components:
            raise ConfigurationMismatch(
                f"{potential.get_name()} requires component counts"
            )
        else:
            n_slots = 1 + (1 if surface is not None else 0)
            from_comp = 0

        energy = single_site_sum(index, system, potential, self.executor, counts)
        if surface is not None:
            surface_comp = n_slots - 1
            energy += site_to_system_energy(
                system.positions[index],
                surface,
                potential.params_for(from_comp, surface_comp),
                boundary_from=system,
                executor=self.executor,
            )
        return energy

    def total_energy(
        self,
        system: Any,
        counts: Optional[Sequence[int]] = None,
    ) -> float:
        """
        Total pairwise energy of the system.

        Equals ``frozen_energy + interacting_energy`` for any frozen mask.

        Args:
            system: ParticleSystem or ase.Atoms.
            counts: Number of particles in each component; required for
                composite potentials.

        Returns:
            Total energy (eV).
        """
        system = as_system(system)
        if isinstance(self.potential, ExternalPotential):
            return self.potential.total_energy(system)

        if counts is None:
            if self.potential.requires_components:
                raise ConfigurationMismatch(
                    f"{self.potential.get_name()} requires component counts"
                )
            counts = [system.n_atoms]
        counts = list(counts)
        all_frozen = [True] * len(counts)
        components, frozen_list = self._components(system, counts, all_frozen)
        return self._sum_components(system, components, frozen_list, want_frozen=True)


# ---------------------------------------------------------------------- #
#  Functional interface
# ---------------------------------------------------------------------- #


def frozen_energy(
    system: Any,
    potential: PotentialEnergy,
    counts: Sequence[int],
    frozen: Sequence[bool],
    executor: Optional[PairExecutor] = None,
) -> float:
    """Frozen energy; see :meth:`EnergyEvaluator.frozen_energy`."""
    return EnergyEvaluator(potential, executor).frozen_energy(system, counts, frozen)


def interacting_energy(
    system: Any,
    potential: PotentialEnergy,
    counts: Optional[Sequence[int]] = None,
    frozen: Optional[Sequence[bool]] = None,
    surface: Optional[Any] = None,
    executor: Optional[PairExecutor] = None,
) -> float:
    """Interacting energy; see :meth:`EnergyEvaluator.interacting_energy`."""
    return EnergyEvaluator(potential, executor).interacting_energy(
        system, counts, frozen, surface
    )


def single_site_energy(
    index: int,
    system: Any,
    potential: PotentialEnergy,
    counts: Optional[Sequence[int]] = None,
    surface: Optional[Any] = None,
    executor: Optional[PairExecutor] = None,
) -> float:
    """Single-site energy; see :meth:`EnergyEvaluator.single_site_energy`."""
    return EnergyEvaluator(potential, executor).single_site_energy(
        index, system, counts, surface
    )


def total_energy(
    system: Any,
    potential: PotentialEnergy,
    counts: Optional[Sequence[int]] = None,
    executor: Optional[PairExecutor] = None,
) -> float:
    """Total energy; see :meth:`EnergyEvaluator.total_energy`."""
    return EnergyEvaluator(potential, executor).total_energy(system, counts)
