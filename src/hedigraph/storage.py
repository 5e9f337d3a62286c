"""
Vertex and edge storage for half-edge diagrams.

Vertices and directed edges live in generation-tagged arenas: each element
occupies a slot, removed slots go on a free list and are reused, and every
reuse bumps the slot's generation so handles to the old element are
detected as stale. Cross references between elements are handles, never
object references.

This layer is purely structural. It keeps per-vertex incidence lists and
source/target of each edge, but knows nothing about twin, next or face
links.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, Optional, TypeVar

from .errors import PreconditionError, StaleHandleError
from .types import EdgeHandle, VertexHandle

T = TypeVar("T")


class Arena(Generic[T]):
    """
    Slot storage with free-list reuse and generation tags.

    Usage:
        arena = Arena()
        slot, gen = arena.insert(item)
        arena.get(slot, gen)   # -> item
        arena.remove(slot, gen)
        arena.get(slot, gen)   # -> None (stale)
    """

    __slots__ = ("_items", "_generations", "_free", "_count")

    def __init__(self) -> None:
        self._items: list[Optional[T]] = []
        self._generations: list[int] = []
        self._free: list[int] = []
        self._count = 0

    def insert(self, item: T) -> tuple[int, int]:
        """Store item and return its (slot, generation)."""
        if self._free:
            slot = self._free.pop()
            self._generations[slot] += 1
            self._items[slot] = item
        else:
            slot = len(self._items)
            self._items.append(item)
            self._generations.append(0)
        self._count += 1
        return slot, self._generations[slot]

    def get(self, slot: int, generation: int) -> Optional[T]:
        """Return the item at slot, or None if the slot is empty or reused."""
        if 0 <= slot < len(self._items) and self._generations[slot] == generation:
            return self._items[slot]
        return None

    def remove(self, slot: int, generation: int) -> T:
        """Remove and return the item at slot."""
        item = self.get(slot, generation)
        if item is None:
            raise KeyError((slot, generation))
        self._items[slot] = None
        self._free.append(slot)
        self._count -= 1
        return item

    def __iter__(self) -> Iterator[tuple[int, int]]:
        """Iterate (slot, generation) pairs of live items in slot order."""
        for slot, item in enumerate(self._items):
            if item is not None:
                yield slot, self._generations[slot]

    def __len__(self) -> int:
        return self._count


@dataclass
class VertexRecord(Generic[T]):
    """A stored vertex: payload plus ordered incidence sets."""

    props: T
    # dicts keep insertion order, giving deterministic out-edge order
    out_edges: dict[EdgeHandle, None] = field(default_factory=dict)
    in_edges: dict[EdgeHandle, None] = field(default_factory=dict)


@dataclass
class EdgeRecord(Generic[T]):
    """A stored directed edge."""

    source: VertexHandle
    target: VertexHandle
    props: T


class GraphStorage:
    """
    Directed multigraph storage with per-element payloads.

    Handles remain valid while the element is live. Removing an edge
    invalidates only that edge; a vertex can only be removed once it has no
    incident edges left.
    """

    def __init__(self) -> None:
        self._vertices: Arena[VertexRecord[Any]] = Arena()
        self._edges: Arena[EdgeRecord[Any]] = Arena()

    # ------------------------------------------------------------------
    # Record lookup
    # ------------------------------------------------------------------

    def vertex_record(self, v: VertexHandle) -> VertexRecord[Any]:
        """Return the record of a live vertex."""
        record = self._vertices.get(v.slot, v.generation)
        if record is None:
            raise StaleHandleError(f"vertex {v!r} is not in the graph", handles=(v,))
        return record

    def edge_record(self, e: EdgeHandle) -> EdgeRecord[Any]:
        """Return the record of a live edge."""
        record = self._edges.get(e.slot, e.generation)
        if record is None:
            raise StaleHandleError(f"edge {e!r} is not in the graph", handles=(e,))
        return record

    def has_vertex(self, v: VertexHandle) -> bool:
        return self._vertices.get(v.slot, v.generation) is not None

    def contains_edge(self, e: EdgeHandle) -> bool:
        return self._edges.get(e.slot, e.generation) is not None

    # ------------------------------------------------------------------
    # Insertion and removal
    # ------------------------------------------------------------------

    def add_vertex(self, props: Any) -> VertexHandle:
        """Add a vertex carrying props and return its handle."""
        slot, generation = self._vertices.insert(VertexRecord(props))
        return VertexHandle(slot, generation)

    def add_edge(self, source: VertexHandle, target: VertexHandle, props: Any) -> EdgeHandle:
        """Add a directed edge source -> target carrying props."""
        src_record = self.vertex_record(source)
        trg_record = self.vertex_record(target)
        slot, generation = self._edges.insert(EdgeRecord(source, target, props))
        e = EdgeHandle(slot, generation)
        src_record.out_edges[e] = None
        trg_record.in_edges[e] = None
        return e

    def remove_edge(self, e: EdgeHandle) -> Any:
        """Remove an edge and return its payload."""
        record = self.edge_record(e)
        del self.vertex_record(record.source).out_edges[e]
        del self.vertex_record(record.target).in_edges[e]
        self._edges.remove(e.slot, e.generation)
        return record.props

    def remove_vertex(self, v: VertexHandle) -> Any:
        """Remove an isolated vertex and return its payload."""
        record = self.vertex_record(v)
        if record.out_edges or record.in_edges:
            raise PreconditionError(
                f"vertex {v!r} still has {len(record.out_edges) + len(record.in_edges)} "
                "incident edges; clear it first",
                handles=(v,),
                invariant="isolated-vertex",
            )
        self._vertices.remove(v.slot, v.generation)
        return record.props

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def source(self, e: EdgeHandle) -> VertexHandle:
        return self.edge_record(e).source

    def target(self, e: EdgeHandle) -> VertexHandle:
        return self.edge_record(e).target

    def vertices(self) -> list[VertexHandle]:
        return [VertexHandle(slot, gen) for slot, gen in self._vertices]

    def edges(self) -> list[EdgeHandle]:
        return [EdgeHandle(slot, gen) for slot, gen in self._edges]

    def out_edges(self, v: VertexHandle) -> list[EdgeHandle]:
        return list(self.vertex_record(v).out_edges)

    def in_edges(self, v: VertexHandle) -> list[EdgeHandle]:
        return list(self.vertex_record(v).in_edges)

    def out_degree(self, v: VertexHandle) -> int:
        return len(self.vertex_record(v).out_edges)

    def find_edge(self, source: VertexHandle, target: VertexHandle) -> Optional[EdgeHandle]:
        """Return the earliest-added edge source -> target, or None."""
        self.vertex_record(target)  # stale target raises
        for e in self.vertex_record(source).out_edges:
            if self.edge_record(e).target == target:
                return e
        return None

    def num_vertices(self) -> int:
        return len(self._vertices)

    def num_edges(self) -> int:
        return len(self._edges)


__all__ = [
    "Arena",
    "VertexRecord",
    "EdgeRecord",
    "GraphStorage",
]
