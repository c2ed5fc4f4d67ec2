"""
Open boundary condition implementation.

Non-periodic boundaries for isolated clusters and gas-phase molecules.
"""
import numpy as np
from numpy.typing import NDArray

from .boundary_condition import BoundaryCondition


class OpenBoundaryCondition(BoundaryCondition):
    """
    Open boundaries (no periodicity).

    Displacement vectors pass through unchanged, so distances are
    plain Euclidean distances.
    """

    @property
    def periodic_dims(self) -> NDArray[np.bool_]:
        return np.zeros(3, dtype=bool)

    def apply_minimum_image(
        self,
        vector: NDArray[np.floating],
        box: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        """No modification for open boundaries; ``box`` is ignored."""
        return np.asarray(vector, dtype=np.float64)

    def get_name(self) -> str:
        """Return 'Open' as the boundary condition name."""
        return "Open"
