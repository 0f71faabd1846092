"""
Tight-binding lattice definition.

A ``Lattice`` holds primitive vectors, named sublattices with onsite energies
and named hopping families with their bonds. Bonds are addressed by sublattice
name and relative unit cell index, and each physical bond is stored once.
``optimized_structure()`` compiles this sparse description into the dense,
id-indexed form consumed by solvers.
"""

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

import numpy as np
from scipy import linalg

from .hopping import (
    HoppingEnergy,
    HoppingFamily,
    HoppingTerm,
    Index3D,
    make_hopping_matrix,
    to_relative_index,
)
from .sublattice import OnsiteEnergy, Sublattice, is_zero, make_onsite_matrix, to_position
from ..exceptions import (
    CapacityError,
    DuplicateHoppingError,
    HoppingError,
    NamingError,
    NotFoundError,
    OffsetError,
    StructureError,
)
from ..structure import CompiledHopping, OptimizedLatticeStructure, Site
from ...utils.constants import MAX_DIM, MAX_HOPPINGS, MAX_OFFSET, MAX_SUBLATTICES

logger = logging.getLogger(__name__)


class Lattice:
    """
    Crystal lattice for tight-binding models.

    The lattice is built in stages: primitive vectors at construction, then
    sublattices, then hopping energies and hopping terms. Registries are
    append-only; nothing is ever removed or modified after registration.

    Parameters
    ----------
    a1, a2, a3 : array_like
        Primitive vectors with 1-3 components each. ``a2`` and ``a3`` are
        optional and ignored when zero, so the number of vectors kept sets
        the dimensionality of the lattice.
    offset : array_like, optional
        Shift of the lattice origin, see ``set_offset()``
    min_neighbors : int, optional
        Minimum number of neighbors a site must keep when a solver trims
        dangling sites (default: 1)

    Examples
    --------
    Square lattice with one orbital per site:

    >>> lattice = Lattice(a1=[1, 0], a2=[0, 1])
    >>> lattice.add_sublattice('A', [0, 0], onsite_energy=0.0)
    0
    >>> lattice.register_hopping_energy('t', -1.0)
    0
    >>> lattice.add_hopping([1, 0], 'A', 'A', 't')
    >>> lattice.add_hopping([0, 1], 'A', 'A', 't')
    >>> structure = lattice.optimized_structure()
    >>> len(structure[0].hoppings)
    4

    Notes
    -----
    A bond from A in cell 0 to B in cell d is the same bond as B in cell 0
    to A in cell -d. Only one of the two may be registered; the compiled
    structure lists both.
    """

    def __init__(self,
                 a1,
                 a2=None,
                 a3=None,
                 offset=None,
                 min_neighbors: int = 1):
        first = to_position(a1, "Primitive vector a1")
        if not np.any(first):
            raise StructureError("Primitive vector a1 must not be zero")

        vectors = [first]
        for label, vector in (("a2", a2), ("a3", a3)):
            if vector is None:
                continue
            vector = to_position(vector, f"Primitive vector {label}")
            if np.any(vector):
                vectors.append(vector)

        self._vectors = np.array(vectors)
        self._offset = np.zeros(MAX_DIM)
        self._min_neighbors = int(min_neighbors)

        self._sublattices: Dict[str, Sublattice] = {}
        self._sublattice_names: List[str] = []
        self._hoppings: Dict[str, HoppingFamily] = {}
        self._hopping_names: List[str] = []

        if offset is not None:
            self.set_offset(offset)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def ndim(self) -> int:
        """Number of primitive vectors (1, 2 or 3)."""
        return len(self._vectors)

    @property
    def vectors(self) -> np.ndarray:
        """Primitive vectors, shape (ndim, 3)."""
        return self._vectors.copy()

    @property
    def offset(self) -> np.ndarray:
        """Cartesian shift of the lattice origin, shape (3,)."""
        return self._offset.copy()

    @property
    def min_neighbors(self) -> int:
        return self._min_neighbors

    def calc_position(self, index, sublattice_name: str = "") -> np.ndarray:
        """
        Cartesian position of a unit cell or of a site within it.

        Parameters
        ----------
        index : array_like
            Unit cell index (n1, n2, n3). Components beyond ``ndim`` are
            ignored and the index is not bounds checked.
        sublattice_name : str, optional
            Add this sublattice's position. An empty name gives the unit
            cell origin.

        Returns
        -------
        position : np.ndarray, shape (3,)
            offset + sum_i index[i] * a_i (+ sublattice position)
        """
        cell = to_position(index, "Unit cell index")
        position = self._offset.copy()
        for i in range(self.ndim):
            position += cell[i] * self._vectors[i]

        if sublattice_name:
            position += self.sublattice(sublattice_name).position
        return position

    def translate_coordinates(self, position) -> np.ndarray:
        """
        Convert a Cartesian position to fractional lattice coordinates.

        Parameters
        ----------
        position : array_like
            Cartesian position with 1-3 components

        Returns
        -------
        fractional : np.ndarray, shape (3,)
            Coefficients v such that position = sum_i v[i] * a_i, solved in the
            first ``ndim`` Cartesian components. Entries beyond ``ndim`` are 0.
        """
        size = self.ndim
        # Columns are the primitive vectors truncated to `size` components
        matrix = self._vectors[:, :size].T
        target = to_position(position)[:size]

        solution, _, _, _ = linalg.lstsq(matrix, target)

        fractional = np.zeros(MAX_DIM)
        fractional[:size] = solution
        return fractional

    def set_offset(self, position) -> None:
        """
        Move the lattice origin.

        Raises
        ------
        OffsetError
            If the shift exceeds half (up to ``MAX_OFFSET``) of a primitive
            vector in any direction. A larger shift would make it ambiguous
            which unit cell a boundary site belongs to.
        """
        fractional = self.translate_coordinates(position)
        if np.any(np.abs(fractional) > MAX_OFFSET):
            raise OffsetError(
                "Lattice origin must not be moved by more than half the length of "
                f"a primitive lattice vector: offset {np.asarray(position).tolist()} "
                f"is {fractional[:self.ndim].tolist()} in lattice coordinates"
            )
        self._offset = to_position(position)

    def with_offset(self, position) -> 'Lattice':
        """Copy of this lattice with a different offset; ``self`` is unchanged."""
        new_lattice = self._clone()
        new_lattice.set_offset(position)
        return new_lattice

    def with_min_neighbors(self, number: int) -> 'Lattice':
        """Copy of this lattice with a different ``min_neighbors``; ``self`` is unchanged."""
        new_lattice = self._clone()
        new_lattice._min_neighbors = int(number)
        return new_lattice

    def reciprocal_vectors(self) -> np.ndarray:
        """
        Reciprocal lattice vectors.

        Returns
        -------
        vectors : np.ndarray, shape (ndim, 3)
            b_j such that a_i . b_j = 2 pi delta_ij
        """
        return 2 * np.pi * linalg.pinv(self._vectors).T

    def unit_cell_volume(self) -> float:
        """Length, area or volume of the primitive cell, depending on ``ndim``."""
        gram = self._vectors @ self._vectors.T
        return float(np.sqrt(abs(np.linalg.det(gram))))

    # ------------------------------------------------------------------
    # Sublattices
    # ------------------------------------------------------------------

    @property
    def nsub(self) -> int:
        """Number of registered sublattices, aliases included."""
        return len(self._sublattices)

    @property
    def sublattices(self) -> Mapping[str, Sublattice]:
        """Read-only view of the sublattice registry, in registration order."""
        return MappingProxyType(self._sublattices)

    @property
    def sub_name_map(self) -> Dict[str, int]:
        """Sublattice name -> unique id."""
        return {name: sub.unique_id for name, sub in self._sublattices.items()}

    def register_sublattice(self, name: str) -> int:
        """
        Validate a new sublattice name and return the id it would receive.

        Nothing is stored; ``add_sublattice()`` and ``add_alias()`` do that.

        Raises
        ------
        NamingError
            If the name is not a string, is blank or is already registered
        CapacityError
            If the id range is exhausted
        """
        if not isinstance(name, str):
            raise NamingError(f"Sublattice name must be a string, got {type(name).__name__}")
        if not name:
            raise NamingError("Sublattice name can't be blank")

        if len(self._sublattices) > MAX_SUBLATTICES:
            raise CapacityError(
                f"Exceeded maximum number of unique sublattices: {MAX_SUBLATTICES}"
            )

        if name in self._sublattices:
            raise NamingError(f"Sublattice '{name}' already exists")

        return len(self._sublattices)

    def add_sublattice(self,
                       name: str,
                       position,
                       onsite_energy: OnsiteEnergy = 0.0) -> int:
        """
        Add a sublattice.

        Parameters
        ----------
        name : str
            Unique name
        position : array_like
            Cartesian position within the unit cell (1-3 components)
        onsite_energy : scalar, 1-D or 2-D array_like, optional
            Scalar for a single orbital, a real vector for a diagonal onsite
            matrix, or a square matrix. A matrix must have a real diagonal and
            be either Hermitian or upper triangular. Default is 0.

        Returns
        -------
        unique_id : int
            Id of the new sublattice (number of sublattices before the call)

        Raises
        ------
        StructureError
            Invalid onsite matrix or position
        NamingError, CapacityError
            See ``register_sublattice()``
        """
        energy = make_onsite_matrix(onsite_energy)
        energy.setflags(write=False)
        site_position = to_position(position)
        site_position.setflags(write=False)

        unique_id = self.register_sublattice(name)
        self._store_sublattice(name, Sublattice(site_position, energy, unique_id, unique_id))
        logger.debug("Added sublattice '%s' (id=%d, orbitals=%d)", name, unique_id, energy.shape[0])
        return unique_id

    def add_alias(self, alias_name: str, original_name: str, position) -> int:
        """
        Add a sublattice equivalent to an existing one at a new position.

        The alias shares the original's onsite energy and takes the original's
        unique id as its alias id. It gets its own unique id so that its bonds
        are kept apart.

        Returns
        -------
        unique_id : int
            Id of the alias

        Raises
        ------
        NotFoundError
            If ``original_name`` is not registered
        """
        original = self.sublattice(original_name)
        site_position = to_position(position)
        site_position.setflags(write=False)

        unique_id = self.register_sublattice(alias_name)
        self._store_sublattice(
            alias_name,
            Sublattice(site_position, original.energy, unique_id, original.unique_id)
        )
        logger.debug("Added alias '%s' of '%s' (id=%d, alias_id=%d)",
                     alias_name, original_name, unique_id, original.unique_id)
        return unique_id

    def add_sublattices(self, *sublattices: Tuple) -> List[int]:
        """
        Add several sublattices.

        Parameters
        ----------
        *sublattices : tuple
            ``(name, position)`` or ``(name, position, onsite_energy)``,
            added in order

        Returns
        -------
        ids : List[int]
        """
        return [self.add_sublattice(*spec) for spec in sublattices]

    def add_aliases(self, *aliases: Tuple) -> List[int]:
        """Add several aliases given as ``(alias_name, original_name, position)`` tuples."""
        return [self.add_alias(*spec) for spec in aliases]

    def sublattice(self, key: Union[str, int]) -> Sublattice:
        """
        Look up a sublattice by name or by unique id.

        Raises
        ------
        NotFoundError
            If no sublattice matches
        """
        if isinstance(key, str):
            try:
                return self._sublattices[key]
            except KeyError:
                raise NotFoundError(f"There is no sublattice named '{key}'") from None

        if 0 <= key < len(self._sublattice_names):
            return self._sublattices[self._sublattice_names[key]]
        raise NotFoundError(f"There is no sublattice with ID = {key}")

    def _store_sublattice(self, name: str, sublattice: Sublattice) -> None:
        self._sublattices[name] = sublattice
        self._sublattice_names.append(name)

    # ------------------------------------------------------------------
    # Hoppings
    # ------------------------------------------------------------------

    @property
    def nhop(self) -> int:
        """Number of registered hopping families."""
        return len(self._hoppings)

    @property
    def hoppings(self) -> Mapping[str, HoppingFamily]:
        """Read-only view of the hopping registry, in registration order."""
        return MappingProxyType(self._hoppings)

    @property
    def hop_name_map(self) -> Dict[str, int]:
        """Hopping family name -> id."""
        return {name: family.family_id for name, family in self._hoppings.items()}

    def register_hopping_energy(self, name: str, energy: HoppingEnergy) -> int:
        """
        Register a named hopping energy.

        Parameters
        ----------
        name : str
            Unique hopping family name
        energy : scalar or 2-D array_like
            Hopping energy; may be complex

        Returns
        -------
        family_id : int

        Raises
        ------
        StructureError
            If the energy is not a scalar or matrix
        NamingError
            If the name is blank or already registered
        CapacityError
            If the id range is exhausted
        """
        matrix = make_hopping_matrix(energy)
        return self._register_hopping_matrix(name, matrix)

    def register_hopping_energies(self, mapping: Mapping[str, HoppingEnergy]) -> List[int]:
        """Register every ``name: energy`` pair of ``mapping`` in order."""
        return [self.register_hopping_energy(name, energy) for name, energy in mapping.items()]

    def add_hopping(self,
                    relative_index,
                    from_sub: Union[str, int],
                    to_sub: Union[str, int],
                    hopping: Union[str, HoppingEnergy]) -> None:
        """
        Add a bond between two sublattices.

        Parameters
        ----------
        relative_index : array_like of int
            Unit cell of ``to_sub`` relative to the cell of ``from_sub``
            (1-3 components)
        from_sub, to_sub : str or int
            Sublattice names or unique ids
        hopping : str or scalar or 2-D array_like
            Name of a registered hopping family, or a raw energy. A raw energy
            reuses the first family with an identical matrix, otherwise an
            anonymous family is registered for it.

        Raises
        ------
        HoppingError
            If ``from_sub == to_sub`` and the relative index is zero; such a
            term belongs in the onsite energy
        NotFoundError
            Unknown sublattice or hopping family
        StructureError
            The energy matrix does not match the orbital counts of the two
            sublattices
        DuplicateHoppingError
            The bond, or its reverse, is already registered

        Notes
        -----
        Nothing is registered unless every check passes, including the
        anonymous family for a raw energy.
        """
        if isinstance(hopping, str):
            self._check_zero_hopping(relative_index, from_sub, to_sub)
            term = self._make_term(relative_index, from_sub, to_sub, hopping)
            self._hoppings[hopping].terms.append(term)
            logger.debug("Added hopping %s '%s' -> '%s' to family '%s'",
                         term.relative_index, from_sub, to_sub, hopping)
            return

        self._check_zero_hopping(relative_index, from_sub, to_sub)
        matrix = make_hopping_matrix(hopping)

        family_name = self._find_family_by_energy(matrix)
        if family_name is not None:
            self.add_hopping(relative_index, from_sub, to_sub, family_name)
            return

        family_name = f"__anonymous__{len(self._hoppings)}"
        term = self._make_term(relative_index, from_sub, to_sub, family_name, matrix)
        self._register_hopping_matrix(family_name, matrix)
        self._hoppings[family_name].terms.append(term)
        logger.debug("Added hopping %s '%s' -> '%s' to new family '%s'",
                     term.relative_index, from_sub, to_sub, family_name)

    def add_hoppings(self, *hoppings: Tuple) -> None:
        """
        Add several bonds.

        Parameters
        ----------
        *hoppings : tuple
            ``(relative_index, from_sub, to_sub, hopping)``, added in order
        """
        for spec in hoppings:
            self.add_hopping(*spec)

    def hopping_family(self, key: Union[str, int]) -> HoppingFamily:
        """
        Look up a hopping family by name or by id.

        Raises
        ------
        NotFoundError
            If no family matches
        """
        if isinstance(key, str):
            try:
                return self._hoppings[key]
            except KeyError:
                raise NotFoundError(f"There is no hopping named '{key}'") from None

        if 0 <= key < len(self._hopping_names):
            return self._hoppings[self._hopping_names[key]]
        raise NotFoundError(f"There is no hopping with ID = {key}")

    def _register_hopping_matrix(self, name: str, matrix: np.ndarray) -> int:
        if not isinstance(name, str):
            raise NamingError(f"Hopping name must be a string, got {type(name).__name__}")
        if not name:
            raise NamingError("Hopping name can't be blank")

        if len(self._hoppings) > MAX_HOPPINGS:
            raise CapacityError(
                f"Exceeded maximum number of unique hoppings energies: {MAX_HOPPINGS}"
            )

        if name in self._hoppings:
            raise NamingError(f"Hopping '{name}' already exists")

        matrix.setflags(write=False)
        family_id = len(self._hoppings)
        self._hoppings[name] = HoppingFamily(matrix, family_id)
        self._hopping_names.append(name)
        logger.debug("Registered hopping '%s' (id=%d, shape=%s)", name, family_id, matrix.shape)
        return family_id

    def _find_family_by_energy(self, matrix: np.ndarray) -> Optional[str]:
        for name, family in self._hoppings.items():
            if np.array_equal(family.energy, matrix):
                return name
        return None

    @staticmethod
    def _check_zero_hopping(relative_index, from_sub: str, to_sub: str) -> None:
        if from_sub == to_sub and not any(to_relative_index(relative_index)):
            raise HoppingError(
                f"Hoppings from/to the same sublattice ('{from_sub}') must have a "
                "non-zero relative index in at least one direction. "
                "Don't define onsite energy here."
            )

    def _make_term(self,
                   relative_index,
                   from_sub: str,
                   to_sub: str,
                   family_name: str,
                   matrix: Optional[np.ndarray] = None) -> HoppingTerm:
        """
        Validate a bond against the registries and build its term.

        Without ``matrix`` the energy of the registered family ``family_name`` is used.
        """
        index: Index3D = to_relative_index(relative_index)
        source = self.sublattice(from_sub)
        target = self.sublattice(to_sub)
        # 'A' and 0 may name the same sublattice
        self._check_zero_hopping(index, self._sublattice_names[source.unique_id],
                                 self._sublattice_names[target.unique_id])
        if matrix is None:
            matrix = self.hopping_family(family_name).energy

        rows, cols = matrix.shape
        if source.num_orbitals != rows or target.num_orbitals != cols:
            raise StructureError(
                f"Hopping size mismatch: from '{from_sub}' ({source.num_orbitals}) "
                f"to '{to_sub}' ({target.num_orbitals}) with matrix "
                f"'{family_name}' ({rows}, {cols})"
            )

        candidate = HoppingTerm(index, source.unique_id, target.unique_id)
        for name, family in self._hoppings.items():
            for term in family.terms:
                if candidate == term or candidate == term.conjugate():
                    raise DuplicateHoppingError(
                        f"The specified hopping already exists: {index} from "
                        f"'{from_sub}' to '{to_sub}' collides with {term.relative_index} "
                        f"from id {term.from_id} to id {term.to_id} in hopping '{name}'"
                    )
        return candidate

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def optimized_structure(self) -> OptimizedLatticeStructure:
        """
        Compile the registries into an id-indexed structure.

        Returns
        -------
        structure : OptimizedLatticeStructure
            One site per sublattice id. Every registered term (d, A, B) in
            family F yields (d, B, F, False) on site A and (-d, A, F, True)
            on site B.
        """
        sites: List[Optional[Site]] = [None] * self.nsub
        for sub in self._sublattices.values():
            sites[sub.unique_id] = Site(position=sub.position.copy(), alias=sub.alias_id)

        for family in self._hoppings.values():
            for term in family.terms:
                # The other site sees the bond with the opposite relative index
                sites[term.from_id].hoppings.append(
                    CompiledHopping(term.relative_index, term.to_id, family.family_id, False)
                )
                conjugate = term.conjugate()
                sites[term.to_id].hoppings.append(
                    CompiledHopping(conjugate.relative_index, term.from_id, family.family_id, True)
                )

        structure = OptimizedLatticeStructure(sites)
        logger.debug("Compiled %r", structure)
        return structure

    def max_hoppings(self) -> int:
        """
        Upper bound on matrix elements per Hamiltonian row, for preallocation.

        For each site: off-diagonal onsite terms (orbitals - 1) plus the column
        count of every incident hopping family. Returns the largest value.
        """
        result = 0
        for site in self.optimized_structure():
            count = self.sublattice(site.alias).num_orbitals - 1
            for hopping in site.hoppings:
                count += self.hopping_family(hopping.family_id).shape[1]
            result = max(result, count)
        return result

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def has_onsite_energy(self) -> bool:
        """True if any sublattice has a nonzero onsite diagonal."""
        return any(not is_zero(np.diagonal(sub.energy)) for sub in self._sublattices.values())

    def has_multiple_orbitals(self) -> bool:
        """True if any sublattice has more than one orbital."""
        return any(sub.num_orbitals != 1 for sub in self._sublattices.values())

    def has_complex_hoppings(self) -> bool:
        """True if any hopping energy has a nonzero imaginary part."""
        return any(not is_zero(family.energy.imag) for family in self._hoppings.values())

    # ------------------------------------------------------------------

    def _clone(self) -> 'Lattice':
        new_lattice = type(self).__new__(type(self))
        new_lattice._vectors = self._vectors.copy()
        new_lattice._offset = self._offset.copy()
        new_lattice._min_neighbors = self._min_neighbors
        # Sublattice records and energy arrays are immutable, term lists are not
        new_lattice._sublattices = dict(self._sublattices)
        new_lattice._sublattice_names = list(self._sublattice_names)
        new_lattice._hoppings = {
            name: replace(family, terms=list(family.terms))
            for name, family in self._hoppings.items()
        }
        new_lattice._hopping_names = list(self._hopping_names)
        return new_lattice

    def __repr__(self) -> str:
        return (f"Lattice(ndim={self.ndim}, sublattices={self.nsub}, "
                f"hoppings={self.nhop})")
