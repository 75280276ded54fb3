"""
Defines types commonly used in equilpy.
"""

from typing import Sequence, Union

import numpy as np

__all__ = [
    "number",
    "VectorLike",
]

number = Union[float, int]
"""Type for numbers."""

VectorLike = Union[np.ndarray, Sequence[float]]
"""Type for 1D numerical input which is converted to a float array internally."""
