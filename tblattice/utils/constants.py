"""
Package-wide constants.

Identifier dtypes mirror what the downstream solver uses to index sites and
hopping families, so the registries refuse to grow past what those types can
represent.
"""

import numpy as np

# Sublattice ids
SUB_ID_DTYPE = np.int8
# Hopping family ids
HOP_ID_DTYPE = np.int16

# Largest id each registry may hand out
MAX_SUBLATTICES = int(np.iinfo(SUB_ID_DTYPE).max)
MAX_HOPPINGS = int(np.iinfo(HOP_ID_DTYPE).max)

MAX_DIM = 3

# Largest allowed shift of the lattice origin, in fractional coordinates
MAX_OFFSET = 0.55

# Absolute tolerance used by "is this zero" checks
ZERO_TOLERANCE = 1e-12
