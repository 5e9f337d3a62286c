"""Tests for arena-backed vertex/edge storage."""

import pytest

from hedigraph.errors import PreconditionError, StaleHandleError
from hedigraph.storage import Arena, GraphStorage
from hedigraph.types import EdgeData, EdgeHandle, VertexData, VertexHandle


class TestArena:
    """Tests for the generation-tagged arena."""

    def test_insert_and_get(self):
        """Inserted items are returned by their slot and generation."""
        arena = Arena()
        slot, gen = arena.insert("a")
        assert (slot, gen) == (0, 0)
        assert arena.get(slot, gen) == "a"
        assert len(arena) == 1

    def test_remove_makes_slot_stale(self):
        """A removed item can no longer be fetched."""
        arena = Arena()
        slot, gen = arena.insert("a")
        assert arena.remove(slot, gen) == "a"
        assert arena.get(slot, gen) is None
        assert len(arena) == 0

    def test_reused_slot_bumps_generation(self):
        """Reusing a freed slot invalidates the old handle."""
        arena = Arena()
        slot, gen = arena.insert("a")
        arena.remove(slot, gen)
        slot2, gen2 = arena.insert("b")
        assert slot2 == slot
        assert gen2 == gen + 1
        assert arena.get(slot, gen) is None
        assert arena.get(slot2, gen2) == "b"

    def test_remove_stale_raises(self):
        """Removing twice raises KeyError."""
        arena = Arena()
        slot, gen = arena.insert("a")
        arena.remove(slot, gen)
        with pytest.raises(KeyError):
            arena.remove(slot, gen)

    def test_out_of_range_get(self):
        """Unknown slots are reported as missing."""
        arena = Arena()
        assert arena.get(5, 0) is None
        assert arena.get(-1, 0) is None

    def test_iteration_skips_removed(self):
        """Iteration yields live slots in slot order."""
        arena = Arena()
        handles = [arena.insert(x) for x in "abc"]
        arena.remove(*handles[1])
        assert list(arena) == [handles[0], handles[2]]


class TestGraphStorage:
    """Tests for GraphStorage."""

    def _make_path(self):
        storage = GraphStorage()
        a = storage.add_vertex(VertexData(index=0))
        b = storage.add_vertex(VertexData(index=1))
        c = storage.add_vertex(VertexData(index=2))
        ab = storage.add_edge(a, b, EdgeData())
        bc = storage.add_edge(b, c, EdgeData())
        return storage, (a, b, c), (ab, bc)

    def test_handles_are_typed(self):
        """Vertex and edge handles are distinct types."""
        storage, (a, _, _), (ab, _) = self._make_path()
        assert isinstance(a, VertexHandle)
        assert isinstance(ab, EdgeHandle)
        assert VertexHandle(0, 0) != EdgeHandle(0, 0)

    def test_source_and_target(self):
        """Edges remember their endpoints."""
        storage, (a, b, _), (ab, _) = self._make_path()
        assert storage.source(ab) == a
        assert storage.target(ab) == b

    def test_counts(self):
        """Vertex and edge counts follow insertions."""
        storage, _, _ = self._make_path()
        assert storage.num_vertices() == 3
        assert storage.num_edges() == 2

    def test_incidence_lists(self):
        """Out- and in-edges are tracked per vertex."""
        storage, (a, b, c), (ab, bc) = self._make_path()
        assert storage.out_edges(b) == [bc]
        assert storage.in_edges(b) == [ab]
        assert storage.out_degree(a) == 1
        assert storage.out_degree(c) == 0

    def test_find_edge(self):
        """find_edge is directional and returns None when absent."""
        storage, (a, b, c), (ab, _) = self._make_path()
        assert storage.find_edge(a, b) == ab
        assert storage.find_edge(b, a) is None
        assert storage.find_edge(a, c) is None

    def test_find_edge_prefers_earliest_parallel_edge(self):
        """Parallel edges are allowed; the first one is found."""
        storage, (a, b, _), (ab, _) = self._make_path()
        storage.add_edge(a, b, EdgeData())
        assert storage.find_edge(a, b) == ab
        assert storage.out_degree(a) == 2

    def test_remove_edge(self):
        """Removing an edge updates incidence and invalidates its handle."""
        storage, (a, b, _), (ab, _) = self._make_path()
        storage.remove_edge(ab)
        assert not storage.contains_edge(ab)
        assert storage.out_edges(a) == []
        assert storage.in_edges(b) == []
        with pytest.raises(StaleHandleError):
            storage.source(ab)

    def test_remove_vertex_with_edges_raises(self):
        """A vertex with incident edges cannot be removed."""
        storage, (_, b, _), _ = self._make_path()
        with pytest.raises(PreconditionError, match="incident edges"):
            storage.remove_vertex(b)

    def test_remove_isolated_vertex(self):
        """An isolated vertex can be removed."""
        storage = GraphStorage()
        v = storage.add_vertex(VertexData())
        storage.remove_vertex(v)
        assert not storage.has_vertex(v)
        assert storage.vertices() == []

    def test_add_edge_to_stale_vertex_raises(self):
        """Edges cannot reference removed vertices."""
        storage = GraphStorage()
        a = storage.add_vertex(VertexData())
        b = storage.add_vertex(VertexData())
        storage.remove_vertex(b)
        with pytest.raises(StaleHandleError):
            storage.add_edge(a, b, EdgeData())

    def test_stale_handle_is_key_error(self):
        """StaleHandleError can be caught as KeyError."""
        storage = GraphStorage()
        with pytest.raises(KeyError):
            storage.vertex_record(VertexHandle(3, 0))
