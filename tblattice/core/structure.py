"""
Compiled lattice structure handed to solvers.

``OptimizedLatticeStructure`` is the id-indexed view of a ``Lattice``:
one ``Site`` per sublattice id, each listing every incident bond in both
directions. It is a plain value built by ``Lattice.optimized_structure()``
and holds no reference back to the lattice that produced it.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Tuple


class CompiledHopping(NamedTuple):
    """
    One direction of a bond, as seen from the site that owns it.

    Attributes
    ----------
    relative_index : Tuple[int, int, int]
        Unit cell of the neighbor relative to the owning site's cell
    neighbor : int
        Sublattice id of the neighbor
    family_id : int
        Id of the hopping family providing the energy matrix
    is_conjugate : bool
        True if this entry is the reverse of the registered term, in which
        case the solver must use the conjugate transpose of the energy.
    """
    relative_index: Tuple[int, int, int]
    neighbor: int
    family_id: int
    is_conjugate: bool


@dataclass(eq=False)
class Site:
    """Compiled sublattice: position, alias id and neighbor list."""
    position: np.ndarray
    alias: int
    hoppings: List[CompiledHopping] = field(default_factory=list)


class OptimizedLatticeStructure:
    """
    Dense, id-indexed array of compiled sites.

    Parameters
    ----------
    sites : List[Site]
        Site records ordered by sublattice id

    Examples
    --------
    >>> from tblattice.core.lattice import square
    >>> structure = square().optimized_structure()
    >>> len(structure)
    1
    >>> len(structure[0].hoppings)
    4
    """

    def __init__(self, sites: List[Site]):
        self.sites = sites

    @property
    def num_hoppings(self) -> int:
        """Total number of compiled entries (two per registered term)."""
        return sum(len(site.hoppings) for site in self.sites)

    def neighbors(self, site_id: int) -> List[int]:
        """Neighbor sublattice ids of ``site_id``, one per compiled entry."""
        return [hopping.neighbor for hopping in self.sites[site_id].hoppings]

    def __len__(self) -> int:
        return len(self.sites)

    def __getitem__(self, site_id: int) -> Site:
        return self.sites[site_id]

    def __iter__(self) -> Iterator[Site]:
        return iter(self.sites)

    def __repr__(self) -> str:
        return (f"OptimizedLatticeStructure(sites={len(self)}, "
                f"hoppings={self.num_hoppings})")
