"""
Errors raised while defining a lattice.

Every error is a model-definition mistake reported synchronously by the
registration call that detected it. The failing call never modifies the
lattice. Each class also derives from the closest builtin so callers can
catch ``ValueError`` or ``LookupError`` without importing this module.
"""


class LatticeError(Exception):
    """Base class for all lattice definition errors."""


class StructureError(LatticeError, ValueError):
    """An energy matrix, vector or index has the wrong shape or structure."""


class NamingError(LatticeError, ValueError):
    """A sublattice or hopping name is blank or already registered."""


class NotFoundError(LatticeError, LookupError):
    """No sublattice or hopping family matches the requested name or id."""


class CapacityError(LatticeError, OverflowError):
    """A registry would exceed the range of its identifier type."""


class HoppingError(LatticeError, ValueError):
    """A hopping term is not a valid bond."""


class DuplicateHoppingError(HoppingError):
    """The hopping term, or its conjugate, is already registered."""


class OffsetError(LatticeError, ValueError):
    """The lattice origin is shifted too far from the primitive cell."""
