"""
Array views of a half-edge diagram.

Snapshots the link structure into numpy arrays indexed by edge row, so
whole-diagram checks and numeric algorithms can work vectorised instead of
chasing handles one edge at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy import sparse

from .types import EdgeHandle, VertexHandle

if TYPE_CHECKING:
    from .diagram import HalfEdgeDiagram


@dataclass(frozen=True, eq=False)
class TopologyArrays:
    """
    Snapshot of a diagram's topology.

    Row i of every edge array describes ``edges[i]``. Vertex columns hold
    positions in ``vertices``. Links that are unset or point at a removed
    edge are -1, as are unset faces.

    Attributes:
        vertices: Vertex handles, in row order
        edges: Edge handles, in row order
        source: Source vertex row of each edge
        target: Target vertex row of each edge
        twin: Twin edge row of each edge
        next: Next edge row of each edge
        face: Face id of each edge
        k: Coefficient of each edge
    """

    vertices: list[VertexHandle]
    edges: list[EdgeHandle]
    source: np.ndarray
    target: np.ndarray
    twin: np.ndarray
    next: np.ndarray
    face: np.ndarray
    k: np.ndarray

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def edge_rows(self) -> dict[EdgeHandle, int]:
        """Map each edge handle to its row."""
        return {e: i for i, e in enumerate(self.edges)}


def topology_arrays(diagram: HalfEdgeDiagram) -> TopologyArrays:
    """
    Build a TopologyArrays snapshot of a diagram.

    Args:
        diagram: Diagram to snapshot

    Returns:
        TopologyArrays with one row per live edge
    """
    vertices = diagram.vertices()
    edges = diagram.edges()
    vertex_rows = {v: i for i, v in enumerate(vertices)}
    edge_rows = {e: i for i, e in enumerate(edges)}

    m = len(edges)
    source = np.empty(m, dtype=np.int64)
    target = np.empty(m, dtype=np.int64)
    twin = np.empty(m, dtype=np.int64)
    nxt = np.empty(m, dtype=np.int64)
    face = np.empty(m, dtype=np.int64)
    k = np.empty(m, dtype=np.float64)

    for i, e in enumerate(edges):
        props = diagram[e]
        source[i] = vertex_rows[diagram.source(e)]
        target[i] = vertex_rows[diagram.target(e)]
        # None and removed edges are both missing from edge_rows
        twin[i] = edge_rows.get(props.twin, -1)
        nxt[i] = edge_rows.get(props.next, -1)
        face[i] = -1 if props.face is None else props.face
        k[i] = props.k

    return TopologyArrays(
        vertices=vertices,
        edges=edges,
        source=source,
        target=target,
        twin=twin,
        next=nxt,
        face=face,
        k=k,
    )


def adjacency_matrix(diagram: HalfEdgeDiagram) -> tuple[sparse.csr_matrix, list[VertexHandle]]:
    """
    Build the directed adjacency matrix of a diagram.

    Entry (i, j) counts the edges from vertices[i] to vertices[j].

    Returns:
        (matrix, vertices) where vertices gives the row/column order
    """
    arrays = topology_arrays(diagram)
    n = len(arrays.vertices)
    data = np.ones(arrays.num_edges, dtype=np.int64)
    # duplicate (i, j) entries are summed
    matrix = sparse.csr_matrix((data, (arrays.source, arrays.target)), shape=(n, n))
    return matrix, arrays.vertices


__all__ = [
    "TopologyArrays",
    "topology_arrays",
    "adjacency_matrix",
]
