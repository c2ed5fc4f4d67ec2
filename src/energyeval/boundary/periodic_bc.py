"""
Periodic boundary condition implementation.

Fully periodic boundaries in all three dimensions, typical for
bulk simulations.
"""
import numpy as np
from numpy.typing import NDArray

from .boundary_condition import BoundaryCondition


class PeriodicBoundaryCondition(BoundaryCondition):
    """
    Fully periodic boundaries in all dimensions.

    Example:
        >>> import numpy as np
        >>> bc = PeriodicBoundaryCondition()
        >>> box = np.array([10.0, 10.0, 10.0])
        >>> bc.apply_minimum_image(np.array([8.0, 0.0, 0.0]), box)
        array([-2.,  0.,  0.])
    """

    @property
    def periodic_dims(self) -> NDArray[np.bool_]:
        return np.ones(3, dtype=bool)

    def apply_minimum_image(
        self,
        vector: NDArray[np.floating],
        box: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        """
        Map all displacement vectors to the range [-box/2, box/2].

        Args:
            vector: (..., 3) displacement vectors.
            box: (3,) box lengths.

        Returns:
            Corrected vectors.
        """
        vector = np.asarray(vector, dtype=np.float64)
        box = np.asarray(box, dtype=np.float64)

        # vector - box * round(vector / box) maps to [-box/2, box/2]
        return vector - box * np.round(vector / box)

    def get_name(self) -> str:
        """Return 'Periodic' as the boundary condition name."""
        return "Periodic"
