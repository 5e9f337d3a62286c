"""Shared fixtures: small hand-built diagrams."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from hedigraph import EdgeHandle, HalfEdgeDiagram, VertexData, VertexHandle


@dataclass
class Triangle:
    """A triangle v0 -> v1 -> v2 with an inner and an outer face."""

    hedi: HalfEdgeDiagram
    v0: VertexHandle
    v1: VertexHandle
    v2: VertexHandle
    e01: EdgeHandle
    e10: EdgeHandle
    e12: EdgeHandle
    e21: EdgeHandle
    e20: EdgeHandle
    e02: EdgeHandle
    inner: int
    outer: int


def make_triangle(**kwargs) -> Triangle:
    """Build the triangle; kwargs go to HalfEdgeDiagram."""
    hedi = HalfEdgeDiagram(**kwargs)
    v0, v1, v2 = (hedi.add_vertex(VertexData(index=i, type="PT")) for i in range(3))
    e01, e10 = hedi.connect_twins(v0, v1)
    e12, e21 = hedi.connect_twins(v1, v2)
    e20, e02 = hedi.connect_twins(v2, v0)
    inner = hedi.add_face()
    outer = hedi.add_face()
    hedi.assemble_face_cycle([e01, e12, e20], inner, 1.0)
    hedi.assemble_face_cycle([e10, e02, e21], outer, -1.0)
    return Triangle(hedi, v0, v1, v2, e01, e10, e12, e21, e20, e02, inner, outer)


def make_square(**kwargs) -> tuple[HalfEdgeDiagram, list[VertexHandle], int, int]:
    """Build a 4-cycle with an inner and an outer face."""
    hedi = HalfEdgeDiagram(**kwargs)
    vs = [hedi.add_vertex(VertexData(index=i)) for i in range(4)]
    forward, backward = [], []
    for i in range(4):
        e, t = hedi.connect_twins(vs[i], vs[(i + 1) % 4])
        forward.append(e)
        backward.append(t)
    inner = hedi.add_face()
    outer = hedi.add_face()
    hedi.assemble_face_cycle(forward, inner, 1.0)
    hedi.assemble_face_cycle(list(reversed(backward)), outer, -1.0)
    return hedi, vs, inner, outer


@pytest.fixture
def triangle() -> Triangle:
    return make_triangle()


@pytest.fixture
def square() -> tuple[HalfEdgeDiagram, list[VertexHandle], int, int]:
    return make_square()
