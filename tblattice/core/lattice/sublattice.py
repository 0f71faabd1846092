"""
Sublattice records and onsite energy normalization.

A sublattice is one site of the unit cell. Its onsite energy is a square
matrix whose size is the number of orbitals on that site.
"""

import numpy as np
from dataclasses import dataclass
from typing import Union

from ..exceptions import StructureError
from ...utils.constants import MAX_DIM, ZERO_TOLERANCE


OnsiteEnergy = Union[float, complex, np.ndarray, list]


@dataclass(frozen=True, eq=False)
class Sublattice:
    """
    Site within the unit cell.

    Attributes
    ----------
    position : np.ndarray, shape (3,)
        Cartesian offset from the unit cell origin
    energy : np.ndarray, shape (norb, norb)
        Onsite energy matrix (complex)
    unique_id : int
        Dense identifier assigned at registration
    alias_id : int
        Identifier of the sublattice this one is equivalent to.
        Equals ``unique_id`` unless the sublattice is an alias.
    """
    position: np.ndarray
    energy: np.ndarray
    unique_id: int
    alias_id: int

    @property
    def num_orbitals(self) -> int:
        return self.energy.shape[0]

    @property
    def is_alias(self) -> bool:
        return self.unique_id != self.alias_id


def to_position(position, what: str = "Position") -> np.ndarray:
    """
    Convert a 1-3 component position to a 3-component float array.

    Missing components are zero.
    """
    vector = np.atleast_1d(np.asarray(position, dtype=float))
    if vector.ndim != 1 or vector.size > MAX_DIM:
        raise StructureError(
            f"{what} must have at most {MAX_DIM} components, got shape {vector.shape}"
        )

    padded = np.zeros(MAX_DIM)
    padded[:vector.size] = vector
    return padded


def is_zero(array: np.ndarray) -> bool:
    """Check that every element is zero within ``ZERO_TOLERANCE``."""
    return bool(np.all(np.abs(array) <= ZERO_TOLERANCE))


def make_onsite_matrix(onsite_energy: OnsiteEnergy) -> np.ndarray:
    """
    Normalize an onsite energy to a validated square complex matrix.

    Parameters
    ----------
    onsite_energy : scalar, 1-D array or 2-D array
        - scalar: single orbital, promoted to a 1x1 matrix
        - vector: one real energy per orbital, promoted to a diagonal matrix
        - matrix: general square matrix

    Returns
    -------
    matrix : np.ndarray, shape (norb, norb), complex

    Raises
    ------
    StructureError
        If the matrix is not square, has a complex main diagonal,
        or is neither upper triangular nor Hermitian.

    Notes
    -----
    An upper triangular matrix only lists the terms above the diagonal.
    The lower half is implied by hermiticity when the Hamiltonian is built.
    """
    energy = np.asarray(onsite_energy)
    if energy.ndim == 0:
        matrix = energy.astype(complex).reshape(1, 1)
    elif energy.ndim == 1:
        matrix = np.diag(energy.astype(complex))
    else:
        matrix = energy.astype(complex)

    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.size == 0:
        raise StructureError(
            "The onsite hopping term must be a real vector or a square matrix, "
            f"got shape {energy.shape}"
        )

    if not is_zero(np.diagonal(matrix).imag):
        raise StructureError("The main diagonal of the onsite hopping term must be real")

    is_upper_triangular = is_zero(np.tril(matrix, k=-1))
    is_hermitian = np.array_equal(matrix, matrix.conj().T)
    if not is_upper_triangular and not is_hermitian:
        raise StructureError("The onsite hopping matrix must be upper triangular or Hermitian")

    return matrix
