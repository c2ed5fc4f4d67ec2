"""
Composite Lennard-Jones parameters.

A symmetric per-component-pair matrix of LJ parameter sets: entry
(i, j) is used for every pair between components i and j, entry
(i, i) for pairs inside component i.
"""
import logging
from typing import List, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from energyeval.core.errors import ConfigurationMismatch

from .pairwise import LJParameters
from .potential_energy import PairPotential

logger = logging.getLogger(__name__)


class CompositeLJParameters(PairPotential):
    """
    Per-component-pair LJ parameters (Composite Pattern).

    The matrix dimension C must equal the number of components passed
    at query time, including an optional surface which always takes
    the last slot.

    Attributes:
        lj_param_sets: (C, C) object array of LJParameters.

    Example:
        >>> aa = LJParameters(epsilon=1.0, sigma=1.0)
        >>> ab = LJParameters(epsilon=0.5, sigma=1.2)
        >>> bb = LJParameters(epsilon=0.2, sigma=1.5)
        >>> ljs = CompositeLJParameters.from_upper_triangle(2, [aa, ab, bb])
        >>> ljs.params_for(1, 0) is ab
        True
    """

    def __init__(self, matrix: Sequence[Sequence[LJParameters]]) -> None:
        """
        Initialize from a square, symmetric matrix of parameter sets.

        Args:
            matrix: C x C nested sequence of LJParameters.

        Raises:
            ConfigurationMismatch: If the matrix is empty, not square,
                not symmetric or holds something other than LJParameters.
        """
        rows: List[List[LJParameters]] = [list(row) for row in matrix]
        n = len(rows)
        if n == 0:
            raise ConfigurationMismatch("Composite matrix must not be empty")
        for i, row in enumerate(rows):
            if len(row) != n:
                raise ConfigurationMismatch.lengths(
                    f"composite matrix row {i}", len(row), "composite matrix", n
                )
            for j, params in enumerate(row):
                if not isinstance(params, LJParameters):
                    raise ConfigurationMismatch(
                        f"Composite matrix entry ({i}, {j}) must be "
                        f"LJParameters, got {type(params).__name__}"
                    )
        for i in range(n):
            for j in range(i + 1, n):
                if rows[i][j] != rows[j][i]:
                    raise ConfigurationMismatch(
                        f"Composite matrix is not symmetric: entry ({i}, {j}) "
                        f"{rows[i][j]!r} differs from ({j}, {i}) {rows[j][i]!r}"
                    )

        self.lj_param_sets: NDArray[np.object_] = np.empty((n, n), dtype=object)
        for i in range(n):
            for j in range(n):
                self.lj_param_sets[i, j] = rows[i][j]

        logger.debug(f"CompositeLJParameters initialized with {n} components")

    @classmethod
    def from_upper_triangle(
        cls, n_components: int, params: Sequence[LJParameters]
    ) -> "CompositeLJParameters":
        """
        Build the symmetric matrix from its upper triangle.

        Args:
            n_components: Matrix dimension C.
            params: C(C+1)/2 parameter sets in row-major order of the
                upper triangle: (0,0), (0,1), ..., (0,C-1), (1,1), ...

        Returns:
            CompositeLJParameters.

        Raises:
            ConfigurationMismatch: If the number of entries is wrong.
        """
        expected = n_components * (n_components + 1) // 2
        if len(params) != expected:
            raise ConfigurationMismatch.lengths(
                "upper-triangle parameter list",
                len(params),
                f"C(C+1)/2 for C={n_components}",
                expected,
            )
        matrix: List[List] = [[None] * n_components for _ in range(n_components)]
        k = 0
        for i in range(n_components):
            for j in range(i, n_components):
                matrix[i][j] = params[k]
                matrix[j][i] = params[k]
                k += 1
        return cls(matrix)

    @property
    def n_components(self) -> int:
        """Matrix dimension C."""
        return self.lj_param_sets.shape[0]

    @property
    def requires_components(self) -> bool:
        return True

    def params_for(self, comp_i: int, comp_j: int) -> LJParameters:
        """Return entry (comp_i, comp_j) of the parameter matrix."""
        return self.lj_param_sets[comp_i, comp_j]

    def pair_energy_between(
        self, comp_i: int, comp_j: int, r: Union[float, ArrayLike]
    ) -> Union[float, NDArray[np.floating]]:
        """
        LJ energy at distance(s) r for a pair from components i and j.

        Args:
            comp_i: Component of the first particle.
            comp_j: Component of the second particle.
            r: Scalar distance or array of distances.

        Returns:
            Pair energy.
        """
        return self.params_for(comp_i, comp_j).pair_energy(r)

    def pair_energy(self, r):
        """Undefined without a component pair; use pair_energy_between."""
        raise TypeError(
            "CompositeLJParameters needs a component pair; "
            "use pair_energy_between(comp_i, comp_j, r)"
        )

    def check_components(self, n_components: int) -> None:
        """
        Validate the component count against the matrix dimension.

        Raises:
            ConfigurationMismatch: If ``n_components`` differs from C.
        """
        if n_components != self.n_components:
            raise ConfigurationMismatch(
                f"Number of components ({n_components}) does not match "
                f"composite potential dimension ({self.n_components})"
            )

    def get_name(self) -> str:
        """Return composite name with its dimension."""
        return f"CompositeLJ({self.n_components}x{self.n_components})"
