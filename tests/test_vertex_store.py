"""Vertex store behavior tests."""

from __future__ import annotations

import pytest

from ufgraph.core.errors import AllocationFailure, InvalidArgument, OutOfRange
from ufgraph.core.vertex_store import VertexStore


def test_bucket_count_is_ceiling_of_capacity() -> None:
    assert VertexStore(12, 16).bucket_count == 1
    assert VertexStore(16, 16).bucket_count == 1
    assert VertexStore(17, 16).bucket_count == 2
    assert VertexStore(0, 16).bucket_count == 0
    assert VertexStore(10, 3).bucket_count == 4


@pytest.mark.parametrize("capacity", [-1, 2.5, "8", None, True])
def test_invalid_capacity_is_rejected(capacity) -> None:
    with pytest.raises(InvalidArgument):
        VertexStore(capacity, 16)


def test_invalid_bucket_size_is_rejected() -> None:
    with pytest.raises(InvalidArgument):
        VertexStore(8, 0)


def test_vertices_are_materialized_lazily() -> None:
    store = VertexStore(40, 16)
    assert store.vertex_count == 0
    assert store.get(20) is None

    v, created = store.find_or_create(20)
    assert created is True
    assert (v.id, v.data, v.parent, v.connections, v.edges) == (20, 20, 20, 0, [])
    assert store.buckets[1].slots[4] is v

    again, created = store.find_or_create(20)
    assert again is v
    assert created is False


def test_ids_outside_capacity_are_out_of_range() -> None:
    store = VertexStore(5, 16)
    with pytest.raises(OutOfRange):
        store.find_or_create(5)
    with pytest.raises(OutOfRange):
        store.find_or_create(-1)
    assert store.vertex_count == 0


def test_lookup_of_untouched_vertex_is_out_of_range() -> None:
    store = VertexStore(5, 16)
    with pytest.raises(OutOfRange):
        store.lookup(3)


def test_vertex_add_edge_keeps_insertion_order_and_is_unique() -> None:
    store = VertexStore(8, 4)
    v, _ = store.find_or_create(0)

    assert v.add_edge(3, 7) is True
    assert v.add_edge(1, 2) is True
    assert v.add_edge(3, 99) is False

    assert [(e.destination, e.weight, e.back) for e in v.edges] == [(3, 7, False), (1, 2, False)]


def test_iteration_is_bucket_then_slot_order() -> None:
    store = VertexStore(12, 4)
    for vid in (9, 2, 5, 0, 11):
        store.find_or_create(vid)
    assert [v.id for v in store] == [0, 2, 5, 9, 11]


def test_destroy_is_idempotent() -> None:
    store = VertexStore(8, 4)
    v, _ = store.find_or_create(1)
    v.add_edge(2, 1)

    store.destroy()
    store.destroy()

    assert store.vertex_count == 0
    assert store.capacity == 0
    assert store.buckets == []
    with pytest.raises(OutOfRange):
        store.find_or_create(1)


def test_memory_exhaustion_becomes_allocation_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    store = VertexStore(8, 4)
    v, _ = store.find_or_create(0)

    def exhausted(**kwargs):
        raise MemoryError

    monkeypatch.setattr("ufgraph.core.vertex_store.Edge", exhausted)
    with pytest.raises(AllocationFailure):
        v.add_edge(1, 1)
    assert v.edges == []

    monkeypatch.setattr("ufgraph.core.vertex_store.Vertex.new", classmethod(lambda cls, vid: exhausted()))
    with pytest.raises(AllocationFailure):
        store.find_or_create(1)
    assert store.get(1) is None


def test_out_of_range_messages_distinguish_capacity_from_untouched() -> None:
    store = VertexStore(5, 16)

    with pytest.raises(OutOfRange) as beyond:
        store.find_or_create(9)
    assert beyond.value.referenced is True
    assert "fuera de rango (capacidad 5)" in str(beyond.value)

    with pytest.raises(OutOfRange) as untouched:
        store.lookup(3)
    assert untouched.value.referenced is False
    assert "nunca referenciado" in str(untouched.value)
    assert "fuera de rango" not in str(untouched.value)
