"""
Half-edge diagram (doubly connected edge list).

HalfEdgeDiagram owns vertex/edge storage and the face table, and provides
the topology queries and mutations used by geometric algorithms such as
incremental Voronoi construction.

Each directed edge stores, in its payload:
- twin: the oppositely directed edge on the same vertex pair
- next: the edge continuing the boundary of the face to its left (ccw)
- face: the face to its left
- k: a caller-defined coefficient

Each face stores one representative boundary edge. Following ``next``
from that edge visits the whole face boundary and returns to the start.

Between any two public calls the diagram satisfies:
- twin(twin(e)) == e, source(e) == target(twin(e))
- face(e) == face(next(e)), target(e) == source(next(e))
- every face's representative edge is live and lies on that face

Precondition checks are enabled by ``checks`` (default: on unless Python
runs with -O). The traversal guard (``max_steps``) is always on.
"""

from __future__ import annotations

import logging
import warnings
from numbers import Integral
from typing import Any, Callable, Generic, Iterable, NoReturn, Optional, Sequence, TypeVar, Union

from .errors import CorruptionError, DanglingFaceWarning, PreconditionError
from .faces import FaceTable
from .iterator import BoundaryIterator
from .storage import GraphStorage
from .types import EdgeData, EdgeHandle, Face, FaceData, VertexData, VertexHandle
from .validation import validate_max_steps

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 3_000_000

V = TypeVar("V")
E = TypeVar("E")
F = TypeVar("F")


class HalfEdgeDiagram(Generic[V, E, F]):
    """
    A mutable half-edge diagram, generic over vertex/edge/face payloads.

    Payload types must expose the fields in hedigraph.types
    (VertexPayload, EdgePayload, FacePayload). Blank payloads are created
    by the factories.

    Example:
        hedi = HalfEdgeDiagram()
        v0, v1, v2 = (hedi.add_vertex(VertexData(index=i)) for i in range(3))
        e01, e10 = hedi.connect_twins(v0, v1)
        e12, e21 = hedi.connect_twins(v1, v2)
        e20, e02 = hedi.connect_twins(v2, v0)
        inner, outer = hedi.add_face(), hedi.add_face()
        hedi.assemble_face_cycle([e01, e12, e20], inner, 1.0)
        hedi.assemble_face_cycle([e10, e02, e21], outer, 1.0)
        hedi.boundary_vertices(inner)  # [v1, v2, v0]
    """

    def __init__(
        self,
        vertex_factory: Callable[[], V] = VertexData,  # type: ignore[assignment]
        edge_factory: Callable[[], E] = EdgeData,  # type: ignore[assignment]
        face_factory: Callable[[], F] = FaceData,  # type: ignore[assignment]
        *,
        max_steps: int = DEFAULT_MAX_STEPS,
        checks: Optional[bool] = None,
    ) -> None:
        """
        Initialize an empty diagram.

        Args:
            vertex_factory: Creates blank vertex payloads
            edge_factory: Creates blank edge payloads
            face_factory: Creates blank face payloads
            max_steps: Maximum number of steps of a boundary walk before it
                is reported as corrupt
            checks: Enable precondition checks. None follows __debug__.
        """
        self._storage = GraphStorage()
        self.faces: FaceTable[F] = FaceTable(face_factory)
        self._vertex_factory = vertex_factory
        self._edge_factory = edge_factory
        self.max_steps = max_steps
        self.checks = checks  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def max_steps(self) -> int:
        """Upper bound on the length of any boundary walk."""
        return self._max_steps

    @max_steps.setter
    def max_steps(self, value: int) -> None:
        self._max_steps = validate_max_steps(value)

    @property
    def checks(self) -> bool:
        """Whether precondition checks run."""
        return self._checks

    @checks.setter
    def checks(self, value: Optional[bool]) -> None:
        self._checks = __debug__ if value is None else bool(value)

    # ------------------------------------------------------------------
    # Payload access
    # ------------------------------------------------------------------

    def __getitem__(self, key: Union[VertexHandle, EdgeHandle, Face]) -> Any:
        """Return the payload of a vertex, edge or face."""
        if isinstance(key, EdgeHandle):
            return self._storage.edge_record(key).props
        if isinstance(key, VertexHandle):
            return self._storage.vertex_record(key).props
        if isinstance(key, Integral) and not isinstance(key, bool):
            return self.faces[int(key)]
        raise TypeError(f"cannot index a diagram with {type(key).__name__}")

    def is_valid(self, handle: Union[VertexHandle, EdgeHandle]) -> bool:
        """Return True if the handle refers to a live vertex or edge."""
        if isinstance(handle, EdgeHandle):
            return self._storage.contains_edge(handle)
        return self._storage.has_vertex(handle)

    def twin(self, e: EdgeHandle) -> Optional[EdgeHandle]:
        return self._storage.edge_record(e).props.twin

    def next_edge(self, e: EdgeHandle) -> Optional[EdgeHandle]:
        return self._storage.edge_record(e).props.next

    def face_of(self, e: EdgeHandle) -> Optional[Face]:
        return self._storage.edge_record(e).props.face

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_vertex(self, props: Optional[V] = None) -> VertexHandle:
        """Add a vertex (blank if props is None) and return its handle."""
        if props is None:
            props = self._vertex_factory()
        return self._storage.add_vertex(props)

    def add_edge(self, v1: VertexHandle, v2: VertexHandle, props: Optional[E] = None) -> EdgeHandle:
        """Add a directed edge v1 -> v2 (blank if props is None)."""
        if props is None:
            props = self._edge_factory()
        return self._storage.add_edge(v1, v2, props)

    def add_face(self, props: Optional[F] = None) -> Face:
        """Add a face (blank if props is None) and return its id."""
        return self.faces.add(props)

    # ------------------------------------------------------------------
    # Structure queries
    # ------------------------------------------------------------------

    def source(self, e: EdgeHandle) -> VertexHandle:
        return self._storage.source(e)

    def target(self, e: EdgeHandle) -> VertexHandle:
        return self._storage.target(e)

    def vertices(self) -> list[VertexHandle]:
        """Return all vertices."""
        return self._storage.vertices()

    def edges(self) -> list[EdgeHandle]:
        """Return all directed edges."""
        return self._storage.edges()

    def out_edges(self, v: VertexHandle) -> list[EdgeHandle]:
        """Return the edges leaving v, in insertion order."""
        return self._storage.out_edges(v)

    def in_edges(self, v: VertexHandle) -> list[EdgeHandle]:
        """Return the edges arriving at v, in insertion order."""
        return self._storage.in_edges(v)

    def adjacent_vertices(self, v: VertexHandle) -> list[VertexHandle]:
        """Return the target of every out-edge of v."""
        return [self._storage.target(e) for e in self._storage.out_edges(v)]

    def adjacent_faces(self, v: VertexHandle) -> list[Face]:
        """Return the distinct faces of v's out-edges, ascending."""
        faces = {self._storage.edge_record(e).props.face for e in self._storage.out_edges(v)}
        faces.discard(None)
        return sorted(faces)

    def degree(self, v: VertexHandle) -> int:
        """Return the number of out-edges of v."""
        return self._storage.out_degree(v)

    def has_edge(self, v1: VertexHandle, v2: VertexHandle) -> bool:
        """Return True if a directed edge v1 -> v2 exists."""
        return self._storage.find_edge(v1, v2) is not None

    def edge(self, v1: VertexHandle, v2: VertexHandle) -> Optional[EdgeHandle]:
        """Return the edge v1 -> v2, or None if there is none."""
        return self._storage.find_edge(v1, v2)

    def num_vertices(self) -> int:
        return self._storage.num_vertices()

    def num_edges(self, face: Optional[Face] = None) -> int:
        """Return the number of edges in the diagram, or on a face boundary."""
        if face is None:
            return self._storage.num_edges()
        return len(self.boundary_edges(face))

    def num_faces(self) -> int:
        return len(self.faces)

    # ------------------------------------------------------------------
    # Face traversal
    # ------------------------------------------------------------------

    def face_edges_iter(self, face: Face) -> BoundaryIterator:
        """Return a restartable iterator over the boundary edges of face."""
        self.faces[face]  # raises IndexError for unknown faces
        return BoundaryIterator(self, face)

    def boundary_edges(self, face: Face) -> list[EdgeHandle]:
        """
        Return the edges bounding a face.

        The list starts with the face's representative edge and follows
        ``next`` links.

        Raises:
            CorruptionError: If the walk does not close within max_steps
                or reaches an edge without a live next edge
        """
        return list(self.face_edges_iter(face))

    def boundary_vertices(self, face: Face) -> list[VertexHandle]:
        """
        Return the vertices of a face in boundary order.

        The list holds the target of every boundary edge, so it starts with
        the target of the representative edge and ends with its source.
        """
        return [self._storage.target(e) for e in self.face_edges_iter(face)]

    def previous_edge(self, e: EdgeHandle) -> EdgeHandle:
        """
        Return the edge p with next(p) == e.

        Walks the boundary of e's face, so it is linear in the face size.

        Raises:
            CorruptionError: If e's boundary is not a closed cycle
        """
        previous = self._follow_next(e)
        steps = 1
        while self._storage.edge_record(previous).props.next != e:
            previous = self._follow_next(previous)
            steps += 1
            if steps >= self._max_steps:
                self._fail_corrupt(
                    f"no previous edge of {e!r} found within {steps} steps",
                    (e,),
                    "boundary-closure",
                )
        return previous

    # ------------------------------------------------------------------
    # Linking
    # ------------------------------------------------------------------

    def connect_twins(self, v1: VertexHandle, v2: VertexHandle) -> tuple[EdgeHandle, EdgeHandle]:
        """Add edges v1 -> v2 and v2 -> v1, twin them and return both."""
        e1 = self.add_edge(v1, v2)
        e2 = self.add_edge(v2, v1)
        self.link_twins(e1, e2)
        return e1, e2

    add_twin_edges = connect_twins

    def link_twins(self, e1: EdgeHandle, e2: EdgeHandle) -> None:
        """
        Make e1 and e2 twins of each other.

        Raises:
            PreconditionError: If e2 does not run opposite to e1
        """
        if self._checks:
            self._check_twin_endpoints(e1, e2)
        props1, props2 = self[e1], self[e2]
        props1.twin = e2
        props2.twin = e1

    def link_next(self, e1: EdgeHandle, e2: EdgeHandle) -> None:
        """
        Set next(e1) = e2.

        Raises:
            PreconditionError: If e2 does not start where e1 ends
        """
        if self._checks:
            self._check_continuity(e1, e2)
        self[e1].next = e2

    def assemble_face_cycle(self, edges: Iterable[EdgeHandle], face: Face, k: float) -> None:
        """
        Form a closed face boundary e1 -> e2 -> ... -> en -> e1.

        Every edge gets ``face`` and coefficient ``k``, and e1 becomes the
        face's representative edge.

        Raises:
            PreconditionError: If the sequence is empty or not contiguous
        """
        chain = self._as_chain(edges)
        face_props = self.faces[face]
        if self._checks:
            for e1, e2 in zip(chain, chain[1:] + chain[:1]):
                self._check_continuity(e1, e2)

        for e1, e2 in zip(chain, chain[1:] + chain[:1]):
            props = self[e1]
            props.next = e2
            props.face = face
            props.k = k
        face_props.edge = chain[0]

    def assemble_open_chain(
        self,
        edges: Iterable[EdgeHandle],
        face: Optional[Face] = None,
        k: Optional[float] = None,
    ) -> None:
        """
        Link e1 -> e2 -> ... -> en without closing the chain.

        Args:
            edges: Edges in boundary order
            face: If given, every edge gets this face and e1 becomes the
                face's representative edge
            k: If given, every edge gets this coefficient

        Raises:
            PreconditionError: If the sequence is empty or not contiguous
        """
        chain = self._as_chain(edges)
        face_props = self.faces[face] if face is not None else None
        if self._checks:
            for e1, e2 in zip(chain, chain[1:]):
                self._check_continuity(e1, e2)

        for e1, e2 in zip(chain, chain[1:]):
            self[e1].next = e2
        if face is not None or k is not None:
            for e in chain:
                props = self[e]
                if face is not None:
                    props.face = face
                if k is not None:
                    props.k = k
        if face_props is not None:
            face_props.edge = chain[0]

    # ------------------------------------------------------------------
    # Splitting
    # ------------------------------------------------------------------

    def split_edge(
        self, v: VertexHandle, e: EdgeHandle
    ) -> tuple[EdgeHandle, EdgeHandle, EdgeHandle, EdgeHandle]:
        """
        Insert vertex v into edge e and its twin.

        ::

                                face
                            e1        e2
            previous -> src  ->  v  ->  trg -> next
                        src  <-  v  <-  trg <- twin_previous
                            te2       te1
                              twin_face

        e and its twin are replaced by e1, e2 (on e's face) and te1, te2
        (on the twin's face). Twins cross: e1 <-> te2 and e2 <-> te1.
        New edges carry the coefficient of the edge they replace.

        Returns:
            (e1, e2, te1, te2)

        Raises:
            PreconditionError: If e has no live twin, the twin does not run
                opposite to e, v is an endpoint of e, or a neighbouring edge
                is on another face
            CorruptionError: If a face boundary around e is not closed
        """
        storage = self._storage
        storage.vertex_record(v)
        props = self[e]
        twin = props.twin
        if twin is None or not storage.contains_edge(twin):
            self._fail_precondition(f"edge {self._describe_edge(e)} has no live twin", (e, twin), "twin-live")
        twin_props = self[twin]
        src, trg = storage.source(e), storage.target(e)
        if self._checks:
            self._check_twin_endpoints(e, twin)
            if v == src or v == trg:
                self._fail_precondition(
                    f"cannot split edge {self._describe_edge(e)} at its own endpoint {self._vertex_label(v)}",
                    (v, e),
                    "split-vertex",
                )

        face = props.face
        twin_face = twin_props.face
        previous = self.previous_edge(e)
        twin_previous = self.previous_edge(twin)
        if self._checks:
            self._check_walk_face(previous, face)
            self._check_walk_face(twin_previous, twin_face)
        nxt = props.next
        twin_nxt = twin_props.next

        e1 = self.add_edge(src, v)
        e2 = self.add_edge(v, trg)
        te1 = self.add_edge(trg, v)
        te2 = self.add_edge(v, src)

        for new in (e1, e2):
            self[new].face = face
            self[new].k = props.k
        for new in (te1, te2):
            self[new].face = twin_face
            self[new].k = twin_props.k

        self[e1].next = e2
        self[e2].next = te1 if nxt == twin else nxt
        self[te1].next = te2
        self[te2].next = e1 if twin_nxt == e else twin_nxt
        if previous != twin:
            self[previous].next = e1
        if twin_previous != e:
            self[twin_previous].next = te1

        # twins cross, see diagram above
        self[e1].twin = te2
        self[te2].twin = e1
        self[e2].twin = te1
        self[te1].twin = e2

        if face is not None and self.faces[face].edge == e:
            self.faces[face].edge = e1
        if twin_face is not None and self.faces[twin_face].edge == twin:
            self.faces[twin_face].edge = te1

        storage.remove_edge(e)
        storage.remove_edge(twin)
        logger.debug("split %r/%r at vertex %s", e, twin, self._vertex_label(v))
        return e1, e2, te1, te2

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def clear_vertex(self, v: VertexHandle) -> None:
        """Remove every edge incident to v, without any link repair."""
        self._storage.vertex_record(v)
        for e in self._storage.in_edges(v) + self._storage.out_edges(v):
            if self._storage.contains_edge(e):
                self._remove_edge(e)

    def remove_vertex(self, v: VertexHandle) -> None:
        """
        Remove an isolated vertex.

        Raises:
            PreconditionError: If v still has incident edges
        """
        incident = len(self._storage.in_edges(v)) + self._storage.out_degree(v)
        if incident:
            self._fail_precondition(
                f"vertex {self._vertex_label(v)} still has {incident} incident edges",
                (v,),
                "isolated-vertex",
            )
        self._storage.remove_vertex(v)

    def delete_vertex(self, v: VertexHandle) -> None:
        """
        Remove v and every edge incident to it.

        Faces whose boundary passed through v are not repaired; callers
        reconnect v's neighbours first.
        """
        label = self._vertex_label(v)
        self.clear_vertex(v)
        self.remove_vertex(v)
        logger.debug("deleted vertex %s", label)

    def remove_edge(self, e: Union[EdgeHandle, VertexHandle], v2: Optional[VertexHandle] = None) -> None:
        """
        Remove an edge, given by handle or as remove_edge(v1, v2).

        No twin or next repair is done: the twin and any boundary through
        the edge are left dangling.

        Raises:
            PreconditionError: If remove_edge(v1, v2) names no existing edge
        """
        if isinstance(e, VertexHandle):
            if v2 is None:
                raise TypeError("remove_edge(v1, v2) needs a target vertex")
            found = self._storage.find_edge(e, v2)
            if found is None:
                self._fail_precondition(
                    f"no edge {self._vertex_label(e)} -> {self._vertex_label(v2)}",
                    (e, v2),
                    "edge-exists",
                )
            e = found
        self._remove_edge(e)

    def _remove_edge(self, e: EdgeHandle) -> None:
        props = self._storage.remove_edge(e)
        face = props.face
        if face is not None and 0 <= face < len(self.faces) and self.faces[face].edge == e:
            warnings.warn(
                f"removed edge {e!r} was the representative edge of face {face}",
                DanglingFaceWarning,
                stacklevel=3,
            )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def describe_face(self, face: Face) -> str:
        """Return a listing of a face's boundary edges, one per line."""
        lines = [f"edges on face {face}:"]
        for n, e in enumerate(self.face_edges_iter(face)):
            lines.append(
                f"{n} {self._vertex_label(self.source(e))} - {self._vertex_label(self.target(e))}"
            )
        return "\n".join(lines)

    def log_face(self, face: Face) -> None:
        """Log describe_face(face) at DEBUG level."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", self.describe_face(face))

    def _vertex_label(self, v: VertexHandle) -> str:
        if not self._storage.has_vertex(v):
            return repr(v)
        props = self._storage.vertex_record(v).props
        index = getattr(props, "index", None)
        vtype = getattr(props, "type", None)
        label = repr(v) if index is None else str(index)
        return label if vtype is None else f"{label}[{vtype}]"

    def _describe_edge(self, e: Optional[EdgeHandle]) -> str:
        if e is None or not self._storage.contains_edge(e):
            return repr(e)
        record = self._storage.edge_record(e)
        return f"{e!r}({self._vertex_label(record.source)} -> {self._vertex_label(record.target)})"

    def _fail_precondition(self, message: str, handles: Sequence[Any], invariant: str) -> NoReturn:
        logger.error("precondition failed [%s]: %s", invariant, message)
        raise PreconditionError(message, handles=handles, invariant=invariant)

    def _fail_corrupt(self, message: str, handles: Sequence[Any], invariant: str) -> NoReturn:
        logger.error("diagram corrupt [%s]: %s", invariant, message)
        raise CorruptionError(message, handles=handles, invariant=invariant)

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _as_chain(self, edges: Iterable[EdgeHandle]) -> list[EdgeHandle]:
        chain = list(edges)
        if not chain:
            self._fail_precondition("cannot link an empty edge sequence", (), "non-empty")
        return chain

    def _check_twin_endpoints(self, e1: EdgeHandle, e2: EdgeHandle) -> None:
        storage = self._storage
        if storage.target(e1) != storage.source(e2) or storage.source(e1) != storage.target(e2):
            self._fail_precondition(
                f"{self._describe_edge(e1)} and {self._describe_edge(e2)} are not opposite",
                (e1, e2),
                "twin-endpoints",
            )

    def _check_continuity(self, e1: EdgeHandle, e2: EdgeHandle) -> None:
        if self._storage.target(e1) != self._storage.source(e2):
            self._fail_precondition(
                f"{self._describe_edge(e2)} does not continue {self._describe_edge(e1)}",
                (e1, e2),
                "next-continuity",
            )

    def _check_walk_face(self, e: EdgeHandle, face: Optional[Face]) -> None:
        found = self._storage.edge_record(e).props.face
        if found != face:
            self._fail_precondition(
                f"{self._describe_edge(e)} is on face {found}, expected face {face}",
                (e, face),
                "face-agreement",
            )

    def _follow_next(self, e: EdgeHandle) -> EdgeHandle:
        nxt = self._storage.edge_record(e).props.next
        if nxt is None or not self._storage.contains_edge(nxt):
            self._fail_corrupt(
                f"{self._describe_edge(e)} has no live next edge ({nxt!r})",
                (e, nxt),
                "next-live",
            )
        return nxt


__all__ = ["HalfEdgeDiagram", "DEFAULT_MAX_STEPS"]
