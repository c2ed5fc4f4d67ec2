"""
Read-only particle system consumed by the energy engine.

This module provides the ParticleSystem dataclass: positions, an
orthorhombic cell, per-axis periodicity and species labels. Components
are contiguous views of a parent system that remember their offset so
local indices can be mapped back to global ones.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from energyeval.boundary import (
    BoundaryCondition,
    boundary_from_periodicity,
    box_lengths_from_cell,
    check_periodic_lengths,
    check_periodicity,
)


@dataclass(eq=False)
class ParticleSystem:
    """
    Snapshot of a particle configuration.

    Attributes:
        positions: (N, 3) particle positions in Å.
        cell: (3, 3) cell matrix; only the diagonal is used.
        pbc: (3,) periodicity flags, strictly boolean. Any sequence of
            three booleans is accepted and stored as a bool array.
        symbols: (N,) species labels.
        offset: Global index of local particle 0 (non-zero for components).

    Note:
        The energy engine never mutates a ParticleSystem. Components
        returned by :meth:`subsystem` share the cell and pbc arrays of
        their parent.

    Example:
        >>> import numpy as np
        >>> system = ParticleSystem(
        ...     positions=np.zeros((2, 3)),
        ...     cell=np.eye(3) * 10.0,
        ...     pbc=(True, True, True),
        ... )
        >>> system.n_atoms
        2
    """
    positions: NDArray[np.floating]
    cell: NDArray[np.floating]
    pbc: NDArray[np.bool_] = (True, True, True)
    symbols: Optional[Sequence[str]] = None
    offset: int = 0
    _box_lengths: NDArray[np.floating] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate arrays and geometry after initialization."""
        self.positions = np.asarray(self.positions, dtype=np.float64)
        if self.positions.size == 0:
            self.positions = self.positions.reshape(0, 3)
        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            raise ValueError(
                f"Positions must be (N, 3) array, got shape {self.positions.shape}"
            )

        self.cell = np.asarray(self.cell, dtype=np.float64)
        if self.cell.shape == (3,):
            self.cell = np.diag(self.cell)
        self.pbc = check_periodicity(self.pbc)
        self._box_lengths = box_lengths_from_cell(self.cell)
        check_periodic_lengths(self._box_lengths, self.pbc)

        if self.symbols is None:
            self.symbols = np.full(len(self.positions), "X", dtype=object)
        else:
            self.symbols = np.asarray(self.symbols, dtype=object)
        if self.symbols.shape != (len(self.positions),):
            raise ValueError(
                f"Symbols length {len(self.symbols)} must match "
                f"number of positions {len(self.positions)}"
            )
        if self.offset < 0:
            raise ValueError(f"Offset must be non-negative, got {self.offset}")

    @property
    def n_atoms(self) -> int:
        """Return the number of particles."""
        return self.positions.shape[0]

    def __len__(self) -> int:
        return self.n_atoms

    @property
    def box_lengths(self) -> NDArray[np.floating]:
        """(3,) orthorhombic box lengths (diagonal of the cell)."""
        return self._box_lengths

    @property
    def periodicity(self) -> NDArray[np.bool_]:
        """(3,) periodicity flags."""
        return self.pbc

    @property
    def cell_vectors(self) -> NDArray[np.floating]:
        """(3, 3) cell matrix, one lattice vector per row."""
        return self.cell

    @property
    def boundary_condition(self) -> BoundaryCondition:
        """Minimum-image strategy matching the periodicity flags."""
        return boundary_from_periodicity(self.pbc)

    def position(self, index: int) -> NDArray[np.floating]:
        """Return the (3,) position of local particle ``index``."""
        return self.positions[index]

    def species(self, index: int) -> str:
        """Return the species label of local particle ``index``."""
        return str(self.symbols[index])

    def global_index(self, index: int) -> int:
        """Map a local index to the index in the parent system."""
        if not 0 <= index < self.n_atoms:
            raise IndexError(
                f"Index {index} out of range for {self.n_atoms} particles"
            )
        return self.offset + index

    def subsystem(self, start: int, stop: int) -> "ParticleSystem":
        """
        Contiguous view over local particles ``[start, stop)``.

        Args:
            start: First local index (inclusive).
            stop: Last local index (exclusive).

        Returns:
            ParticleSystem sharing cell and pbc, with offset shifted.
        """
        if not 0 <= start <= stop <= self.n_atoms:
            raise IndexError(
                f"Range [{start}, {stop}) out of bounds for "
                f"{self.n_atoms} particles"
            )
        return ParticleSystem(
            positions=self.positions[start:stop],
            cell=self.cell,
            pbc=tuple(self.pbc),
            symbols=self.symbols[start:stop],
            offset=self.offset + start,
        )

    @classmethod
    def from_ase(cls, atoms: Any) -> "ParticleSystem":
        """
        Build a ParticleSystem from an ``ase.Atoms`` object.

        Args:
            atoms: ase.Atoms instance.

        Returns:
            ParticleSystem with the same positions, cell, pbc and symbols.
        """
        return cls(
            positions=atoms.get_positions(),
            cell=np.asarray(atoms.get_cell()),
            pbc=tuple(bool(flag) for flag in atoms.get_pbc()),
            symbols=atoms.get_chemical_symbols(),
        )

    def to_ase(self):
        """
        Convert to an ``ase.Atoms`` object.

        Returns:
            ase.Atoms with positions, cell, pbc and symbols copied.
        """
        from ase import Atoms

        return Atoms(
            symbols=[str(s) for s in self.symbols],
            positions=self.positions.copy(),
            cell=self.cell.copy(),
            pbc=self.pbc.copy(),
        )

    def __repr__(self) -> str:
        """Return string representation of the system."""
        species: List[str] = sorted({str(s) for s in self.symbols})
        return (
            f"ParticleSystem(n_atoms={self.n_atoms}, "
            f"species={species}, "
            f"box={self._box_lengths}, "
            f"pbc={self.pbc.tolist()}, "
            f"offset={self.offset})"
        )


def as_system(obj: Any) -> ParticleSystem:
    """
    Coerce an ``ase.Atoms`` or ParticleSystem into a ParticleSystem.

    Args:
        obj: ParticleSystem or ase.Atoms.

    Returns:
        ParticleSystem (the same object if already one).

    Raises:
        TypeError: For any other type.
    """
    if isinstance(obj, ParticleSystem):
        return obj
    from ase import Atoms

    if isinstance(obj, Atoms):
        return ParticleSystem.from_ase(obj)
    raise TypeError(
        f"Expected ParticleSystem or ase.Atoms, got {type(obj).__name__}"
    )
