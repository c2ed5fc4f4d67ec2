"""
Mixed boundary condition implementation.

Each dimension can be either periodic or open, which is what a
system's per-axis periodicity flags describe (e.g. a slab with a
frozen substrate, periodic in XY and open in Z).
"""
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .boundary_condition import BoundaryCondition
from .geometry import check_periodicity


class MixedBoundaryCondition(BoundaryCondition):
    """
    Mixed boundaries with different conditions per dimension.

    Attributes:
        periodic_dims: Boolean array indicating which dimensions are periodic.

    Example:
        >>> import numpy as np
        >>> bc = MixedBoundaryCondition(periodic_dims=(True, True, False))
        >>> box = np.array([10.0, 10.0, 50.0])
        >>> bc.apply_minimum_image(np.array([8.0, 0.0, 30.0]), box)
        array([-2.,  0., 30.])
    """

    def __init__(self, periodic_dims: Sequence[bool]) -> None:
        """
        Initialize mixed boundary condition.

        Args:
            periodic_dims: (x_periodic, y_periodic, z_periodic).

        Raises:
            UnsupportedGeometry: If the flags are not three booleans.
        """
        self._periodic_dims = check_periodicity(periodic_dims)

    @property
    def periodic_dims(self) -> NDArray[np.bool_]:
        return self._periodic_dims

    def apply_minimum_image(
        self,
        vector: NDArray[np.floating],
        box: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        """
        Apply minimum image only in periodic dimensions.

        Args:
            vector: (..., 3) displacement vectors.
            box: (3,) box lengths.

        Returns:
            Corrected vectors with minimum image in periodic dimensions.
        """
        vector = np.asarray(vector, dtype=np.float64)
        box = np.asarray(box, dtype=np.float64)

        # Make a copy to avoid modifying input
        result = vector.copy()
        for dim in range(3):
            if self._periodic_dims[dim]:
                result[..., dim] -= box[dim] * np.round(result[..., dim] / box[dim])

        return result

    def get_name(self) -> str:
        """
        Return descriptive name showing which dimensions are periodic.

        Returns:
            String like "Mixed(XY periodic)" or "Mixed(Z periodic)".
        """
        dim_names = ["X", "Y", "Z"]
        periodic_names = [dim_names[i] for i in range(3) if self._periodic_dims[i]]

        if not periodic_names:
            return "Mixed(none periodic)"
        elif len(periodic_names) == 3:
            return "Mixed(all periodic)"
        else:
            return f"Mixed({''.join(periodic_names)} periodic)"
