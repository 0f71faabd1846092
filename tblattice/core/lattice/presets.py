"""
Preset lattices for common tight-binding models.

Every factory returns a fully built ``Lattice`` with one orbital per site,
an onsite energy ``onsite`` and a single hopping family named 't' holding
the nearest-neighbor bonds:
- chain: 1D, 2 neighbors per site
- square: 2D, 4 neighbors per site
- cubic: 3D, 6 neighbors per site
- triangular: 2D hexagonal Bravais lattice, 6 neighbors per site
- honeycomb: 2D, two sublattices (A, B), 3 neighbors per site
"""

import numpy as np
from typing import Callable, Dict

from .base import Lattice


def chain(a: float = 1.0, t: float = -1.0, onsite: float = 0.0) -> Lattice:
    """
    Linear chain with lattice constant ``a``.

    Examples
    --------
    >>> lattice = chain(a=2.0)
    >>> lattice.ndim
    1
    """
    _check_lattice_constant(a)
    lattice = Lattice(a1=[a])
    lattice.add_sublattice('A', [0], onsite)
    lattice.register_hopping_energy('t', t)
    lattice.add_hopping([1], 'A', 'A', 't')
    return lattice


def square(a: float = 1.0, t: float = -1.0, onsite: float = 0.0) -> Lattice:
    """
    Square Bravais lattice.

    Geometry
    --------
    a1 = a * [1, 0]
    a2 = a * [0, 1]
    Bonds (1, 0) and (0, 1); the reverse bonds are implied.
    """
    _check_lattice_constant(a)
    lattice = Lattice(a1=[a, 0], a2=[0, a])
    lattice.add_sublattice('A', [0, 0], onsite)
    lattice.register_hopping_energy('t', t)
    lattice.add_hoppings(
        ([1, 0], 'A', 'A', 't'),
        ([0, 1], 'A', 'A', 't'),
    )
    return lattice


def cubic(a: float = 1.0, t: float = -1.0, onsite: float = 0.0) -> Lattice:
    """Simple cubic lattice with axial nearest-neighbor bonds."""
    _check_lattice_constant(a)
    lattice = Lattice(a1=[a, 0, 0], a2=[0, a, 0], a3=[0, 0, a])
    lattice.add_sublattice('A', [0, 0, 0], onsite)
    lattice.register_hopping_energy('t', t)
    lattice.add_hoppings(
        ([1, 0, 0], 'A', 'A', 't'),
        ([0, 1, 0], 'A', 'A', 't'),
        ([0, 0, 1], 'A', 'A', 't'),
    )
    return lattice


def triangular(a: float = 1.0, t: float = -1.0, onsite: float = 0.0) -> Lattice:
    """
    Triangular (hexagonal) Bravais lattice.

    Geometry
    --------
    a1 = a * [1, 0]
    a2 = a * [1/2, √3/2]

    Forward nearest-neighbor bonds at distance a:
        (1, 0)  -> a1
        (0, 1)  -> a2
        (-1, 1) -> a2 - a1
    """
    _check_lattice_constant(a)
    lattice = Lattice(a1=[a, 0], a2=[a / 2, a * np.sqrt(3) / 2])
    lattice.add_sublattice('A', [0, 0], onsite)
    lattice.register_hopping_energy('t', t)
    lattice.add_hoppings(
        ([1, 0], 'A', 'A', 't'),
        ([0, 1], 'A', 'A', 't'),
        ([-1, 1], 'A', 'A', 't'),
    )
    return lattice


def honeycomb(a: float = 1.0, t: float = -1.0, onsite: float = 0.0) -> Lattice:
    """
    Honeycomb lattice (graphene geometry).

    Geometry
    --------
    a1 = a * [1, 0]
    a2 = a * [1/2, √3/2]
    A at [0, -a_cc/2], B at [0, a_cc/2] with a_cc = a/√3

    Each A site bonds to the B sites in cells (0, 0), (1, -1) and (0, -1).

    Notes
    -----
    For graphene use a = 0.246 nm and t = -2.8 eV.
    """
    _check_lattice_constant(a)
    a_cc = a / np.sqrt(3)
    lattice = Lattice(a1=[a, 0], a2=[a / 2, a * np.sqrt(3) / 2])
    lattice.add_sublattices(
        ('A', [0, -a_cc / 2], onsite),
        ('B', [0, a_cc / 2], onsite),
    )
    lattice.register_hopping_energy('t', t)
    lattice.add_hoppings(
        ([0, 0], 'A', 'B', 't'),
        ([1, -1], 'A', 'B', 't'),
        ([0, -1], 'A', 'B', 't'),
    )
    return lattice


def _check_lattice_constant(a: float) -> None:
    if a <= 0:
        raise ValueError("Lattice constant must be positive")


# Lattice registry for config-based construction
LATTICE_REGISTRY: Dict[str, Callable[..., Lattice]] = {
    'chain': chain,
    'square': square,
    'cubic': cubic,
    'triangular': triangular,
    'honeycomb': honeycomb,
}


def create_lattice(lattice_type: str, **kwargs) -> Lattice:
    """
    Factory function to create lattices from string names.

    Parameters
    ----------
    lattice_type : str
        Type of lattice ('chain', 'square', 'cubic', 'triangular', 'honeycomb')
    **kwargs
        Passed to the preset (a, t, onsite)

    Returns
    -------
    lattice : Lattice

    Examples
    --------
    >>> lattice = create_lattice('honeycomb', a=0.246, t=-2.8)
    >>> lattice.nsub
    2

    Raises
    ------
    ValueError
        If lattice_type is not recognized
    """
    if lattice_type not in LATTICE_REGISTRY:
        available = ', '.join(LATTICE_REGISTRY.keys())
        raise ValueError(f"Unknown lattice type '{lattice_type}'. "
                         f"Available types: {available}")

    return LATTICE_REGISTRY[lattice_type](**kwargs)
