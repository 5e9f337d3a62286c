"""
Common types for half-edge diagrams.

This module provides the handle and payload types shared by every part of
the package:
- VertexHandle / EdgeHandle: opaque, generation-tagged references into
  the diagram's storage
- Face: face identifier (position in the face table)
- VertexPayload / EdgePayload / FacePayload: the minimal fields the core
  reads and writes on caller-supplied payloads
- VertexData / EdgeData / FaceData: default payload implementations
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

# Faces are identified by their position in the face table
Face = int


@dataclass(frozen=True)
class VertexHandle:
    """
    Reference to a vertex in a diagram.

    Attributes:
        slot: Storage slot of the vertex
        generation: Slot generation at creation time; a handle whose
            generation no longer matches its slot is stale
    """

    slot: int
    generation: int = 0

    def __repr__(self) -> str:
        return f"V{self.slot}.{self.generation}"


@dataclass(frozen=True)
class EdgeHandle:
    """
    Reference to a directed edge (half-edge) in a diagram.

    Attributes:
        slot: Storage slot of the edge
        generation: Slot generation at creation time
    """

    slot: int
    generation: int = 0

    def __repr__(self) -> str:
        return f"E{self.slot}.{self.generation}"


class VertexPayload(Protocol):
    """Fields read from vertex payloads (diagnostics only)."""

    index: Any
    type: Any


class EdgePayload(Protocol):
    """Fields read and written on half-edge payloads."""

    twin: Optional[EdgeHandle]
    next: Optional[EdgeHandle]
    face: Optional[Face]
    k: float


class FacePayload(Protocol):
    """Fields read and written on face payloads."""

    edge: Optional[EdgeHandle]
    idx: Optional[Face]


@dataclass
class VertexData:
    """
    Default vertex payload.

    Attributes:
        index: Caller-assigned identifier shown in diagnostics
        type: Caller-defined tag shown in diagnostics
    """

    index: Optional[int] = None
    type: Any = None


@dataclass
class EdgeData:
    """
    Default half-edge payload.

    Attributes:
        twin: Oppositely directed edge on the same vertex pair
        next: Successor edge around the face to the left
        face: Face to the left of this edge
        k: Caller-defined coefficient (e.g. offset direction)
    """

    twin: Optional[EdgeHandle] = None
    next: Optional[EdgeHandle] = None
    face: Optional[Face] = None
    k: float = 0.0


@dataclass
class FaceData:
    """
    Default face payload.

    Attributes:
        edge: Representative edge on the face boundary
        idx: Position of the face in the face table (set on insertion)
    """

    edge: Optional[EdgeHandle] = None
    idx: Optional[Face] = None


__all__ = [
    "Face",
    "VertexHandle",
    "EdgeHandle",
    "VertexPayload",
    "EdgePayload",
    "FacePayload",
    "VertexData",
    "EdgeData",
    "FaceData",
]
