"""
Basic lattices demo

This example builds a few lattices with the Lattice builder and prints the
compiled structure a Hamiltonian solver would receive:
- Square lattice with a single orbital
- Graphene (honeycomb preset)
- Two-orbital chain with a matrix hopping
"""

import numpy as np

from tblattice import Lattice, create_lattice
from tblattice.utils import setup_logging


def print_structure(lattice: Lattice):
    names = {sub_id: name for name, sub_id in lattice.sub_name_map.items()}
    families = {family_id: name for name, family_id in lattice.hop_name_map.items()}

    structure = lattice.optimized_structure()
    print(f"\n{lattice} -> {structure}")
    for sub_id, site in enumerate(structure):
        print(f"  site {names[sub_id]} (alias of {names[site.alias]}) at {site.position}")
        for hopping in site.hoppings:
            direction = "conj" if hopping.is_conjugate else "fwd "
            print(f"    [{direction}] {hopping.relative_index} -> {names[hopping.neighbor]} "
                  f"via '{families[hopping.family_id]}'")

    print(f"  max_hoppings = {lattice.max_hoppings()}")
    print(f"  onsite={lattice.has_onsite_energy()}, "
          f"multi-orbital={lattice.has_multiple_orbitals()}, "
          f"complex={lattice.has_complex_hoppings()}")


def example_square():
    """Example 1: Square lattice built by hand."""
    print("=" * 60)
    print("Example 1: Square lattice")
    print("=" * 60)

    lattice = Lattice(a1=[1, 0, 0], a2=[0, 1, 0])
    lattice.add_sublattice('A', [0, 0, 0], onsite_energy=0.0)
    lattice.register_hopping_energy('t', -1.0)
    lattice.add_hoppings(
        ([1, 0, 0], 'A', 'A', 't'),
        ([0, 1, 0], 'A', 'A', 't'),
    )
    print_structure(lattice)


def example_graphene():
    """Example 2: Graphene from the preset registry."""
    print("=" * 60)
    print("Example 2: Graphene")
    print("=" * 60)

    lattice = create_lattice('honeycomb', a=0.246, t=-2.8)
    print_structure(lattice)

    shifted = lattice.with_offset([0.1, 0, 0])
    print(f"\nShifted origin: {shifted.offset}, original: {lattice.offset}")


def example_two_orbital_chain():
    """Example 3: Two orbitals per site with complex hopping."""
    print("=" * 60)
    print("Example 3: Two-orbital chain")
    print("=" * 60)

    lattice = Lattice(a1=[1])
    lattice.add_sublattice('A', [0], [[0.5, 0.1], [0.1, -0.5]])
    lattice.add_hopping([1], 'A', 'A', np.array([[-1.0, 0.2j], [0.2j, -1.0]]))
    print_structure(lattice)


if __name__ == "__main__":
    setup_logging("INFO")
    example_square()
    example_graphene()
    example_two_orbital_chain()
