"""
Lattice definition module.

This module provides the ``Lattice`` builder, its registry records and a set
of preset lattices.

Available presets:
- chain, square, cubic: Bravais lattices with axial bonds
- triangular: Hexagonal Bravais lattice
- honeycomb: Two-sublattice graphene geometry
"""

from .base import Lattice
from .sublattice import Sublattice
from .hopping import HoppingFamily, HoppingTerm
from .presets import (
    chain,
    square,
    cubic,
    triangular,
    honeycomb,
    LATTICE_REGISTRY,
    create_lattice
)

__all__ = [
    'Lattice',
    'Sublattice',
    'HoppingFamily',
    'HoppingTerm',
    'chain',
    'square',
    'cubic',
    'triangular',
    'honeycomb',
    'LATTICE_REGISTRY',
    'create_lattice',
]
