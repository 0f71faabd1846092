"""
Shared utilities: constants and logging setup.
"""

from .constants import (
    SUB_ID_DTYPE,
    HOP_ID_DTYPE,
    MAX_SUBLATTICES,
    MAX_HOPPINGS,
    MAX_DIM,
    MAX_OFFSET,
    ZERO_TOLERANCE,
)
from .logging import setup_logging

__all__ = [
    'SUB_ID_DTYPE',
    'HOP_ID_DTYPE',
    'MAX_SUBLATTICES',
    'MAX_HOPPINGS',
    'MAX_DIM',
    'MAX_OFFSET',
    'ZERO_TOLERANCE',
    'setup_logging',
]
