"""
Abstract base class for boundary conditions.

This module provides the BoundaryCondition ABC that defines
the interface for all minimum-image strategies.
"""
from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray


class BoundaryCondition(ABC):
    """
    Abstract base for boundary conditions (Strategy Pattern).

    BoundaryCondition defines how displacement vectors are mapped to
    their minimum image. Different implementations (Periodic, Open,
    Mixed) are interchangeable.

    Design Notes:
        - BoundaryCondition is STATELESS - it does NOT own the box.
        - The box lengths are passed in from the ParticleSystem.
        - Only orthorhombic boxes are handled; the box is the (3,)
          diagonal of the cell.

    Example:
        >>> from energyeval.boundary import PeriodicBoundaryCondition
        >>> bc = PeriodicBoundaryCondition()
        >>> r = bc.compute_distances(pos_i, pos_j, box)
    """

    @property
    @abstractmethod
    def periodic_dims(self) -> NDArray[np.bool_]:
        """(3,) boolean array of periodic axes."""
        pass

    @abstractmethod
    def apply_minimum_image(
        self,
        vector: NDArray[np.floating],
        box: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        """
        Apply minimum image convention to displacement vectors.

        Args:
            vector: (..., 3) displacement vectors r_j - r_i.
            box: (3,) box lengths.

        Returns:
            Corrected vectors with minimum image applied.

        Example:
            >>> # If box = [10, 10, 10] and vector = [8, 0, 0]
            >>> # The minimum image is [-2, 0, 0] (across boundary)
            >>> corrected = bc.apply_minimum_image(vector, box)
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """
        Get human-readable name of this boundary condition.

        Returns:
            Name string (e.g., "Periodic", "Open", "Mixed(XY periodic)").
        """
        pass

    def compute_distance_vectors(
        self,
        positions_i: NDArray[np.floating],
        positions_j: NDArray[np.floating],
        box: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        """
        Compute displacement vectors with minimum image convention.

        Args:
            positions_i: (..., 3) positions of atoms i.
            positions_j: (..., 3) positions of atoms j.
            box: (3,) box lengths.

        Returns:
            Vectors from i to j with minimum image applied.
        """
        dr = np.asarray(positions_j, dtype=np.float64) - np.asarray(
            positions_i, dtype=np.float64
        )
        return self.apply_minimum_image(dr, box)

    def compute_distances(
        self,
        positions_i: NDArray[np.floating],
        positions_j: NDArray[np.floating],
        box: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        """
        Compute scalar distances with minimum image convention.

        Args:
            positions_i: (..., 3) positions of atoms i.
            positions_j: (..., 3) positions of atoms j.
            box: (3,) box lengths.

        Returns:
            Scalar distances |r_j - r_i| with minimum image applied.
        """
        dr = self.compute_distance_vectors(positions_i, positions_j, box)
        return np.linalg.norm(dr, axis=-1)
