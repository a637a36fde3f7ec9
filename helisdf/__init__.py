"""
helisdf: Signed Distance Functions for threaded parts
=====================================================

Solids are described implicitly: every node exposes ``evaluate(p)`` (signed
distance, negative inside) and ``bounding_box()`` (a conservative
:class:`~helisdf.box.Box`).  Nodes are built once, never mutated, and can be
evaluated on large numpy point batches from any number of threads.

Subpackages
-----------
- :mod:`helisdf.sdf2d`: 2-D primitives, operators and the polygon builder
- :mod:`helisdf.sdf3d`: 3-D primitives, operators, screw mapping and parts
- :mod:`helisdf.threads`: standard thread profiles and the thread database
- :mod:`helisdf.grid`: grid sampling
- :mod:`helisdf.benchmark`: evaluation speed measurement

Logging goes to the ``helisdf`` logger hierarchy, which carries a
``NullHandler``; configure handlers in the application.
"""

import logging

from .box import Box
from .errors import HelisdfError, InvalidParameterError, UnknownThreadError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Box",
    "HelisdfError",
    "InvalidParameterError",
    "UnknownThreadError",
    "__version__",
]
