"""
tblattice: Tight-binding lattice definitions

A Python package for describing crystal lattices for tight-binding models and
compiling them into the id-indexed structure a Hamiltonian solver consumes.

Main Components
---------------
core : Lattice builder, compiled structure, errors
utils : Constants and logging setup

Quick Start
-----------
>>> from tblattice import Lattice
>>>
>>> # Square lattice, one orbital per site
>>> lattice = Lattice(a1=[1, 0, 0], a2=[0, 1, 0])
>>> lattice.add_sublattice('A', [0, 0, 0], onsite_energy=0.0)
0
>>> lattice.register_hopping_energy('t', -1.0)
0
>>> lattice.add_hopping([1, 0, 0], 'A', 'A', 't')
>>>
>>> structure = lattice.optimized_structure()
>>> structure[0].hoppings
[CompiledHopping(relative_index=(1, 0, 0), neighbor=0, family_id=0, is_conjugate=False), CompiledHopping(relative_index=(-1, 0, 0), neighbor=0, family_id=0, is_conjugate=True)]
"""

__version__ = "0.1.0"

# High-level API exports
from .core import (
    # Lattice
    Lattice,
    create_lattice,

    # Compiled structure
    CompiledHopping,
    OptimizedLatticeStructure,

    # Errors
    LatticeError,
)

__all__ = [
    '__version__',
    'Lattice',
    'create_lattice',
    'CompiledHopping',
    'OptimizedLatticeStructure',
    'LatticeError',
]
