"""
Unit tests for Lattice geometry.

Tests:
- Primitive vector handling
- Cartesian positions of cells and sites
- Fractional coordinates and offset validation
- Derived lattices (with_offset, with_min_neighbors)
"""

import numpy as np
import pytest
from tblattice.core import Lattice, OffsetError, StructureError


def hexagonal():
    return Lattice(a1=[1, 0], a2=[0.5, np.sqrt(3) / 2])


class TestLatticeVectors:
    """Test primitive vector handling."""

    def test_two_dimensional(self):
        """Test 2D lattice keeps two padded vectors."""
        lattice = Lattice(a1=[1, 0], a2=[0, 1])

        assert lattice.ndim == 2
        assert np.allclose(lattice.vectors, [[1, 0, 0], [0, 1, 0]])

    def test_zero_vectors_are_skipped(self):
        """Test that zero a2/a3 do not add dimensions."""
        assert Lattice(a1=[1, 0, 0], a2=[0, 0, 0]).ndim == 1
        assert Lattice(a1=[1, 0, 0], a3=[0, 0, 2]).ndim == 2
        assert Lattice(a1=[1, 0, 0], a2=[0, 1, 0], a3=[0, 0, 1]).ndim == 3

    def test_zero_a1_raises(self):
        """Test that a zero first vector is rejected."""
        with pytest.raises(StructureError, match="must not be zero"):
            Lattice(a1=[0, 0])

    def test_too_many_components_raises(self):
        """Test that 4D vectors are rejected."""
        with pytest.raises(StructureError, match="at most 3 components"):
            Lattice(a1=[1, 0, 0, 0])

    def test_vectors_property_is_a_copy(self):
        """Test that modifying returned vectors does not affect the lattice."""
        lattice = Lattice(a1=[1, 0])
        vectors = lattice.vectors
        vectors[0, 0] = 5.0

        assert np.allclose(lattice.vectors, [[1, 0, 0]])

    def test_unit_cell_volume(self):
        """Test length, area and volume of the primitive cell."""
        assert np.isclose(Lattice(a1=[2]).unit_cell_volume(), 2.0)
        assert np.isclose(Lattice(a1=[2, 0], a2=[0, 2]).unit_cell_volume(), 4.0)
        assert np.isclose(hexagonal().unit_cell_volume(), np.sqrt(3) / 2)
        assert np.isclose(
            Lattice(a1=[1, 0, 0], a2=[0, 1, 0], a3=[0, 0, 3]).unit_cell_volume(), 3.0
        )

    def test_reciprocal_vectors(self):
        """Test reciprocal lattice vectors satisfy a·b = 2π δ."""
        lattice = hexagonal()
        a = lattice.vectors
        b = lattice.reciprocal_vectors()

        assert b.shape == (2, 3)
        assert np.allclose(a @ b.T, 2 * np.pi * np.eye(2))


class TestCalcPosition:
    """Test Cartesian positions."""

    def test_unit_cell_origin(self):
        """Test position of a unit cell without sublattice."""
        lattice = hexagonal()

        assert np.allclose(lattice.calc_position([1, 1]), [1.5, np.sqrt(3) / 2, 0])
        assert np.allclose(lattice.calc_position([0, 0]), [0, 0, 0])

    def test_with_sublattice(self):
        """Test that the sublattice position is added."""
        lattice = hexagonal()
        lattice.add_sublattice('B', [0, 0.5])

        position = lattice.calc_position([1, 0], 'B')
        assert np.allclose(position, [1.0, 0.5, 0.0])

    def test_extra_index_components_ignored(self):
        """Test that index components beyond ndim do not contribute."""
        lattice = Lattice(a1=[1, 0], a2=[0, 1])

        assert np.allclose(lattice.calc_position([1, 0, 5]), [1, 0, 0])

    def test_offset_is_added(self):
        """Test that the lattice offset shifts every position."""
        lattice = Lattice(a1=[1, 0], a2=[0, 1])
        lattice.set_offset([0.2, 0])

        assert np.allclose(lattice.calc_position([0, 0]), [0.2, 0, 0])
        assert np.allclose(lattice.calc_position([1, 2]), [1.2, 2, 0])


class TestTranslateCoordinates:
    """Test Cartesian → fractional conversion."""

    def test_primitive_vectors(self):
        """Test that primitive vectors map to unit coordinates."""
        lattice = hexagonal()

        assert np.allclose(lattice.translate_coordinates([1, 0]), [1, 0, 0])
        assert np.allclose(lattice.translate_coordinates([0.5, np.sqrt(3) / 2]), [0, 1, 0])

    def test_roundtrip(self):
        """Test that fractional coordinates reproduce the position."""
        lattice = hexagonal()

        for position in ([1.0, 0.5], [2.3, 1.7], [-1.5, 2.0]):
            fractional = lattice.translate_coordinates(position)
            assert np.allclose(lattice.calc_position(fractional)[:2], position)

    def test_unused_dimensions_are_zero(self):
        """Test that components beyond ndim are ignored and returned as zero."""
        lattice = Lattice(a1=[2, 0], a2=[0, 2])
        fractional = lattice.translate_coordinates([1, 1, 7])

        assert np.allclose(fractional, [0.5, 0.5, 0])

    def test_one_dimensional(self):
        """Test 1D lattice."""
        lattice = Lattice(a1=[2])

        assert np.allclose(lattice.translate_coordinates([0.5]), [0.25, 0, 0])


class TestOffset:
    """Test offset validation."""

    @pytest.mark.parametrize("position", [
        [0.5, 0.0],
        [-0.5, 0.5],
        [0.54, -0.54],
        [0.0, 0.0],
    ])
    def test_accepts_small_offsets(self, position):
        """Test offsets within 0.55 lattice units are accepted."""
        lattice = Lattice(a1=[1, 0], a2=[0, 1])
        lattice.set_offset(position)

        assert np.allclose(lattice.offset[:2], position)

    @pytest.mark.parametrize("position", [
        [0.56, 0.0],
        [0.0, -0.6],
        [1.0, 1.0],
    ])
    def test_rejects_large_offsets(self, position):
        """Test offsets beyond 0.55 lattice units are rejected."""
        lattice = Lattice(a1=[1, 0], a2=[0, 1])

        with pytest.raises(OffsetError, match="must not be moved"):
            lattice.set_offset(position)

    def test_bound_is_in_lattice_units(self):
        """Test that the bound scales with the primitive vectors."""
        lattice = Lattice(a1=[2, 0], a2=[0, 2])
        lattice.set_offset([1.0, -1.0])

        with pytest.raises(OffsetError):
            lattice.set_offset([1.2, 0])

    def test_rejected_offset_keeps_previous(self):
        """Test that a failed set_offset leaves the offset unchanged."""
        lattice = Lattice(a1=[1, 0], a2=[0, 1])
        lattice.set_offset([0.1, 0.1])

        with pytest.raises(OffsetError):
            lattice.set_offset([0.9, 0])

        assert np.allclose(lattice.offset, [0.1, 0.1, 0])

    def test_offset_error_is_value_error(self):
        """Test that callers can catch the builtin exception."""
        lattice = Lattice(a1=[1])

        with pytest.raises(ValueError):
            lattice.set_offset([0.7])

    def test_constructor_offset(self):
        """Test offset passed at construction is validated."""
        lattice = Lattice(a1=[1, 0], a2=[0, 1], offset=[0.25, 0])
        assert np.allclose(lattice.offset, [0.25, 0, 0])

        with pytest.raises(OffsetError):
            Lattice(a1=[1, 0], a2=[0, 1], offset=[0.75, 0])


class TestDerivedLattices:
    """Test with_offset and with_min_neighbors."""

    def make_lattice(self):
        lattice = Lattice(a1=[1, 0], a2=[0, 1])
        lattice.add_sublattice('A', [0, 0])
        lattice.register_hopping_energy('t', -1.0)
        lattice.add_hopping([1, 0], 'A', 'A', 't')
        return lattice

    def test_with_offset_returns_modified_copy(self):
        """Test that the copy has the new offset and the original does not."""
        lattice = self.make_lattice()
        shifted = lattice.with_offset([0.3, 0])

        assert np.allclose(shifted.offset, [0.3, 0, 0])
        assert np.allclose(lattice.offset, [0, 0, 0])
        assert shifted.sub_name_map == lattice.sub_name_map

    def test_with_offset_invalid(self):
        """Test that an invalid offset raises and leaves the original intact."""
        lattice = self.make_lattice()

        with pytest.raises(OffsetError):
            lattice.with_offset([0.8, 0])

        assert np.allclose(lattice.offset, [0, 0, 0])

    def test_with_min_neighbors(self):
        """Test min_neighbors copy."""
        lattice = self.make_lattice()
        derived = lattice.with_min_neighbors(3)

        assert derived.min_neighbors == 3
        assert lattice.min_neighbors == 1

    def test_mutating_copy_does_not_affect_original(self):
        """Test that registries are not shared between copies."""
        lattice = self.make_lattice()
        derived = lattice.with_min_neighbors(2)

        derived.add_sublattice('B', [0.5, 0.5])
        derived.add_hopping([0, 1], 'A', 'A', 't')
        derived.register_hopping_energy('t2', -0.5)

        assert lattice.nsub == 1
        assert lattice.nhop == 1
        assert len(lattice.hoppings['t'].terms) == 1
        assert len(derived.hoppings['t'].terms) == 2

    def test_mutating_original_does_not_affect_copy(self):
        """Test value semantics in the other direction."""
        lattice = self.make_lattice()
        derived = lattice.with_offset([0.1, 0.1])

        lattice.add_hopping([0, 1], 'A', 'A', 't')

        assert len(derived.hoppings['t'].terms) == 1


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
