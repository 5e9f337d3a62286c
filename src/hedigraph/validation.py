"""
Validation utilities for half-edge diagrams.

Provides validators for diagram settings, which raise ValidationError on
invalid input, and whole-diagram invariant checks, which report every
broken twin/next/face link found.
"""

from __future__ import annotations

import logging
from numbers import Integral
from typing import TYPE_CHECKING, Any

import numpy as np

from .arrays import TopologyArrays, topology_arrays
from .errors import CorruptionError

if TYPE_CHECKING:
    from .diagram import HalfEdgeDiagram

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when a diagram setting is invalid."""

    pass


def validate_max_steps(max_steps: Any) -> int:
    """
    Validate the boundary walk step limit.

    Args:
        max_steps: Maximum number of steps of a walk

    Returns:
        Validated step limit

    Raises:
        ValidationError: If max_steps is not an int >= 1
    """
    if isinstance(max_steps, bool) or not isinstance(max_steps, Integral):
        raise ValidationError(f"max_steps must be an int, got {type(max_steps).__name__}")
    if max_steps < 1:
        raise ValidationError(f"max_steps must be >= 1, got {max_steps}")
    return int(max_steps)


def check_invariants(diagram: HalfEdgeDiagram, strict: bool = True) -> list[str]:
    """
    Check the twin/next/face invariants of every edge and face.

    Args:
        diagram: Diagram to check
        strict: If True, raises on any issue. If False, returns the issues.

    Returns:
        List of issue descriptions (empty for a consistent diagram)

    Raises:
        CorruptionError: If strict=True and issues are found
    """
    arrays = topology_arrays(diagram)
    issues = _edge_issues(arrays) + _face_issues(diagram, arrays)

    if strict and issues:
        msg = "Invalid half-edge diagram:\n" + "\n".join(issues)
        logger.error("%s", msg)
        raise CorruptionError(msg, invariant="global")

    return issues


def check_faces(diagram: HalfEdgeDiagram) -> bool:
    """Return True if every face boundary closes and carries its own face id."""
    return not _face_issues(diagram, topology_arrays(diagram))


def _edge_issues(arrays: TopologyArrays) -> list[str]:
    """Vectorised per-edge checks."""
    issues: list[str] = []
    edges = arrays.edges
    rows = np.arange(arrays.num_edges)

    has_twin = arrays.twin >= 0
    twin = np.where(has_twin, arrays.twin, 0)
    for i in np.flatnonzero(~has_twin):
        issues.append(f"Edge {edges[i]!r}: twin is unset or removed")
    for i in np.flatnonzero(has_twin & (arrays.twin[twin] != rows)):
        issues.append(f"Edge {edges[i]!r}: twin {edges[twin[i]]!r} is not twinned back")
    swapped = (arrays.source == arrays.target[twin]) & (arrays.target == arrays.source[twin])
    for i in np.flatnonzero(has_twin & ~swapped):
        issues.append(f"Edge {edges[i]!r}: twin {edges[twin[i]]!r} does not run opposite")

    has_next = arrays.next >= 0
    nxt = np.where(has_next, arrays.next, 0)
    for i in np.flatnonzero(~has_next):
        issues.append(f"Edge {edges[i]!r}: next is unset or removed")
    for i in np.flatnonzero(has_next & (arrays.target != arrays.source[nxt])):
        issues.append(f"Edge {edges[i]!r}: next {edges[nxt[i]]!r} does not start at its target")
    for i in np.flatnonzero(has_next & (arrays.face != arrays.face[nxt])):
        issues.append(
            f"Edge {edges[i]!r}: face {arrays.face[i]} differs from face "
            f"{arrays.face[nxt[i]]} of next {edges[nxt[i]]!r}"
        )

    return issues


def _face_issues(diagram: HalfEdgeDiagram, arrays: TopologyArrays) -> list[str]:
    """Walk every face boundary on the snapshot."""
    issues: list[str] = []
    rows = arrays.edge_rows()
    limit = diagram.max_steps

    for f in diagram.faces.ids():
        rep = diagram.faces[f].edge
        if rep is None:
            continue
        if rep not in rows:
            issues.append(f"Face {f}: representative edge {rep!r} is removed")
            continue

        start = rows[rep]
        current = start
        steps = 0
        while True:
            if arrays.face[current] != f:
                issues.append(
                    f"Face {f}: boundary edge {arrays.edges[current]!r} is on face {arrays.face[current]}"
                )
                break
            current = int(arrays.next[current])
            steps += 1
            if current < 0:
                issues.append(f"Face {f}: boundary is open after {steps} edges")
                break
            if current == start:
                break
            if steps >= limit:
                issues.append(f"Face {f}: boundary did not close within {limit} steps")
                break

    return issues


__all__ = [
    "ValidationError",
    "validate_max_steps",
    "check_invariants",
    "check_faces",
]
