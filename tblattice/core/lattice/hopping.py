"""
Hopping families and hopping terms.

A hopping family is a named energy matrix shared by any number of bonds.
Each bond is a directed ``HoppingTerm`` stored once; its reverse direction
is implied and only materialized when the lattice is compiled.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple, Union

from ..exceptions import StructureError
from ...utils.constants import MAX_DIM


HoppingEnergy = Union[float, complex, np.ndarray, list]
Index3D = Tuple[int, int, int]


class HoppingTerm(NamedTuple):
    """
    Directed bond from ``from_id`` in cell 0 to ``to_id`` in cell ``relative_index``.
    """
    relative_index: Index3D
    from_id: int
    to_id: int

    def conjugate(self) -> 'HoppingTerm':
        """The same bond seen from the destination site."""
        return HoppingTerm(negate(self.relative_index), self.to_id, self.from_id)


@dataclass(eq=False)
class HoppingFamily:
    """
    Named hopping energy and the bonds which use it.

    Attributes
    ----------
    energy : np.ndarray, shape (norb_from, norb_to)
        Hopping energy matrix (complex)
    family_id : int
        Dense identifier assigned at registration
    terms : List[HoppingTerm]
        Bonds registered with this energy, in insertion order
    """
    energy: np.ndarray
    family_id: int
    terms: List[HoppingTerm] = field(default_factory=list)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.energy.shape

    def __repr__(self) -> str:
        rows, cols = self.shape
        return (f"HoppingFamily(id={self.family_id}, shape=({rows}, {cols}), "
                f"terms={len(self.terms)})")


def negate(index: Index3D) -> Index3D:
    return tuple(-i for i in index)


def to_relative_index(relative_index) -> Index3D:
    """
    Convert a 1-3 component integer index to a 3-tuple.

    Raises
    ------
    StructureError
        If the index has too many components or non-integer values.
    """
    index = np.atleast_1d(np.asarray(relative_index))
    if index.ndim != 1 or index.size > MAX_DIM:
        raise StructureError(
            f"Relative index must have at most {MAX_DIM} components, got {relative_index!r}"
        )
    if index.size and not np.issubdtype(index.dtype, np.integer):
        if not np.all(np.mod(index, 1) == 0):
            raise StructureError(
                f"Relative index must contain integers, got {relative_index!r}"
            )

    padded = [0] * MAX_DIM
    for i, value in enumerate(index):
        padded[i] = int(value)
    return tuple(padded)


def make_hopping_matrix(energy: HoppingEnergy) -> np.ndarray:
    """
    Normalize a hopping energy to a complex matrix.

    Parameters
    ----------
    energy : scalar or 2-D array
        A scalar is a 1x1 hopping between single-orbital sites. A matrix has
        one row per orbital of the source sublattice and one column per
        orbital of the destination.

    Returns
    -------
    matrix : np.ndarray, complex

    Raises
    ------
    StructureError
        If the energy is neither a scalar nor a non-empty 2-D array.
    """
    array = np.asarray(energy)
    if array.ndim == 0:
        return array.astype(complex).reshape(1, 1)

    if array.ndim != 2 or array.size == 0:
        raise StructureError(
            f"Hopping energy must be a scalar or a matrix, got shape {array.shape}"
        )
    return array.astype(complex)
