"""
Cell and periodicity validation plus the scalar minimum-image distance.

Only orthorhombic cells are supported: the box lengths are the diagonal
of the cell matrix and any off-diagonal entry is rejected.
"""
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from energyeval.core.errors import UnsupportedGeometry

# Off-diagonal cell entries below this are treated as zero.
ORTHORHOMBIC_TOL = 1e-10


def check_periodicity(flags: Sequence) -> NDArray[np.bool_]:
    """
    Validate per-axis periodicity flags.

    Args:
        flags: Three flags, one per axis.

    Returns:
        (3,) boolean array.

    Raises:
        UnsupportedGeometry: If there are not exactly three flags or any
            flag is not a boolean.
    """
    flags = list(flags)
    if len(flags) != 3:
        raise UnsupportedGeometry(
            f"Periodicity needs exactly 3 flags, got {len(flags)}"
        )
    for axis, flag in enumerate(flags):
        if not isinstance(flag, (bool, np.bool_)):
            raise UnsupportedGeometry(
                f"Periodicity flag for axis {axis} must be a boolean, "
                f"got {flag!r} ({type(flag).__name__})"
            )
    return np.array(flags, dtype=bool)


def check_periodic_lengths(box_lengths: ArrayLike, periodic: Sequence) -> None:
    """
    Reject periodic axes without a positive box length.

    Args:
        box_lengths: (3,) box lengths.
        periodic: (3,) validated periodicity flags.

    Raises:
        UnsupportedGeometry: If a periodic axis has length <= 0.
    """
    box = np.asarray(box_lengths, dtype=np.float64)
    for axis in range(3):
        if periodic[axis] and not box[axis] > 0:
            raise UnsupportedGeometry(
                f"Axis {axis} is periodic but has box length {box[axis]}"
            )


def box_lengths_from_cell(cell: ArrayLike) -> NDArray[np.floating]:
    """
    Extract orthorhombic box lengths from a 3x3 cell matrix.

    Args:
        cell: (3, 3) cell matrix, one lattice vector per row.

    Returns:
        (3,) diagonal of the cell.

    Raises:
        UnsupportedGeometry: If the cell has non-zero off-diagonal terms.
    """
    cell = np.asarray(cell, dtype=np.float64)
    if cell.shape != (3, 3):
        raise UnsupportedGeometry(f"Cell must be (3, 3), got shape {cell.shape}")
    off_diagonal = cell - np.diag(np.diag(cell))
    if np.any(np.abs(off_diagonal) > ORTHORHOMBIC_TOL):
        raise UnsupportedGeometry(
            "Only orthorhombic cells are supported; "
            f"cell has off-diagonal terms:\n{cell}"
        )
    return np.diag(cell).copy()


def pbc_distance(
    pos1: ArrayLike,
    pos2: ArrayLike,
    box_lengths: ArrayLike,
    periodic: Sequence,
) -> float:
    """
    Minimum-image distance between two points in an orthorhombic box.

    Per axis, d = |pos1 - pos2|. Periodic axes contribute
    min(d, L - d)**2 (with d first reduced modulo L), open axes d**2.

    Args:
        pos1: (3,) first position.
        pos2: (3,) second position.
        box_lengths: (3,) box lengths L.
        periodic: Three booleans, one per axis.

    Returns:
        Distance in length units.

    Raises:
        UnsupportedGeometry: For invalid flags or a periodic axis whose
            box length is not positive.

    Example:
        >>> pbc_distance([0, 0, 0], [0, 0, 9.5], [10, 10, 10], [True] * 3)
        0.5
    """
    flags = check_periodicity(periodic)
    box = np.asarray(box_lengths, dtype=np.float64)
    check_periodic_lengths(box, flags)
    d = np.abs(np.asarray(pos1, dtype=np.float64) - np.asarray(pos2, dtype=np.float64))

    distsq = 0.0
    for axis in range(3):
        if flags[axis]:
            da = d[axis] % box[axis]
            distsq += min(da, box[axis] - da) ** 2
        else:
            distsq += d[axis] ** 2
    return float(np.sqrt(distsq))
