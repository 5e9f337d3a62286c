"""
hedigraph: a half-edge (DCEL) diagram for geometric algorithms in Python.

This package provides a mutable half-edge graph in which every directed
edge knows its twin and its successor around the face to its left, as used
by incremental Voronoi-diagram construction and similar algorithms.

Available components:
- diagram: HalfEdgeDiagram with topology queries and mutations
- storage: generation-tagged vertex/edge arenas
- faces: append-only face table
- iterator: restartable face boundary iterator
- validation: whole-diagram invariant checks
- arrays: numpy/scipy views of the topology
"""

import logging

__version__ = "0.1.0"

# Array views
from .arrays import (
    TopologyArrays,
    adjacency_matrix,
    topology_arrays,
)

# The diagram
from .diagram import DEFAULT_MAX_STEPS, HalfEdgeDiagram

# Errors and warnings
from .errors import (
    CorruptionError,
    DanglingFaceWarning,
    PreconditionError,
    StaleHandleError,
    TopologyError,
)
from .faces import FaceTable
from .iterator import BoundaryIterator
from .storage import GraphStorage

# Shared types
from .types import (
    EdgeData,
    EdgeHandle,
    EdgePayload,
    Face,
    FaceData,
    FacePayload,
    VertexData,
    VertexHandle,
    VertexPayload,
)

# Validation utilities
from .validation import (
    ValidationError,
    check_faces,
    check_invariants,
    validate_max_steps,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Diagram
    "HalfEdgeDiagram",
    "DEFAULT_MAX_STEPS",
    "BoundaryIterator",
    "FaceTable",
    "GraphStorage",
    # Shared types
    "Face",
    "VertexHandle",
    "EdgeHandle",
    "VertexPayload",
    "EdgePayload",
    "FacePayload",
    "VertexData",
    "EdgeData",
    "FaceData",
    # Errors
    "TopologyError",
    "PreconditionError",
    "CorruptionError",
    "StaleHandleError",
    "DanglingFaceWarning",
    # Validation
    "ValidationError",
    "validate_max_steps",
    "check_invariants",
    "check_faces",
    # Array views
    "TopologyArrays",
    "topology_arrays",
    "adjacency_matrix",
]
