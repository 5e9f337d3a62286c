"""
Boundary iterator over the half-edges of a face.

The iterator is a restartable view: every call to ``iter()`` starts a new
walk from the face's current representative edge, following ``next``
links until the walk returns to the start. Walks that do not close within
the diagram's ``max_steps`` raise CorruptionError instead of looping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from .types import EdgeHandle, Face

if TYPE_CHECKING:
    from .diagram import HalfEdgeDiagram


class BoundaryIterator:
    """
    Lazy, restartable sequence of the edges bounding a face.

    Usage:
        for e in diagram.face_edges_iter(f):
            ...
        edges = list(diagram.face_edges_iter(f))

    A face with no representative edge yields nothing.
    """

    __slots__ = ("_diagram", "_face")

    def __init__(self, diagram: HalfEdgeDiagram, face: Face) -> None:
        self._diagram = diagram
        self._face = face

    @property
    def face(self) -> Face:
        return self._face

    def __iter__(self) -> Iterator[EdgeHandle]:
        diagram = self._diagram
        face = self._face
        start = diagram.faces[face].edge
        if start is None:
            return
        if not diagram.is_valid(start):
            diagram._fail_corrupt(
                f"representative edge {start!r} of face {face} is removed",
                (face, start),
                "representative-live",
            )
        limit = diagram.max_steps
        check_faces = diagram.checks

        current = start
        steps = 0
        while True:
            if check_faces:
                diagram._check_walk_face(current, face)
            yield current
            current = diagram._follow_next(current)
            steps += 1
            if current == start:
                return
            if steps >= limit:
                diagram._fail_corrupt(
                    f"boundary of face {face} did not close after {steps} steps",
                    (face, start, current),
                    "boundary-closure",
                )

    def __repr__(self) -> str:
        return f"BoundaryIterator(face={self._face})"


__all__ = ["BoundaryIterator"]
