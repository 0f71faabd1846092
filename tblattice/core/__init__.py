"""
Core domain models for the tblattice package.

This module contains the fundamental abstractions:
- Lattice: primitive vectors, sublattices and hopping registries
- OptimizedLatticeStructure: compiled, id-indexed sites handed to solvers
- Exceptions raised while defining a lattice
"""

from .lattice import (
    Lattice,
    Sublattice,
    HoppingFamily,
    HoppingTerm,
    chain,
    square,
    cubic,
    triangular,
    honeycomb,
    LATTICE_REGISTRY,
    create_lattice
)

from .structure import CompiledHopping, Site, OptimizedLatticeStructure

from .exceptions import (
    LatticeError,
    StructureError,
    NamingError,
    NotFoundError,
    CapacityError,
    HoppingError,
    DuplicateHoppingError,
    OffsetError,
)

__all__ = [
    # Lattice
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

    # Compiled structure
    'CompiledHopping',
    'Site',
    'OptimizedLatticeStructure',

    # Errors
    'LatticeError',
    'StructureError',
    'NamingError',
    'NotFoundError',
    'CapacityError',
    'HoppingError',
    'DuplicateHoppingError',
    'OffsetError',
]
