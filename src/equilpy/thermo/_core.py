"""This private module contains central assumptions and data for the entire
thermodynamic subpackage.

Changes here should be done with much care.

"""

from __future__ import annotations

import equilpy as ep

__all__ = [
    "R_IDEAL_MOL",
]


NUMBA_CACHE: bool = True
"""Flag to instruct the numba compiler to cache (!and use cached!) functions.

This might cause some confusion in the developing process due to some lack in numba's
caching functionality.
(Does not recognize changes in nested functions and hence does not trigger
re-compilation).

Use with care.

Note:
    Functions which are generated at runtime (e.g. lambdified symbolic expressions) are
    never cached, since they have no source file.

See Also:
    https://numba.readthedocs.io/en/stable/user/jit.html#cache

"""

NUMBA_FAST_MATH: bool = (
    str(ep.config.get("numba", {}).get("fastmath", "false")).strip().lower() == "true"
)
"""Flag to instruct the numba compiler to use it's ``fastmath`` functions.

To be used with care, due to loss in precision. Off by default, can be switched on in
the ``[numba]`` section of ``equilpy.cfg`` with ``fastmath = true``.

See Also:
    https://numba.readthedocs.io/en/stable/reference/jit-compilation.html#numba.jit

"""

R_IDEAL_MOL: float = 8.31446261815324
"""Universal gas constant in ``[J / K mol]``."""
