"""
Grafo en memoria con listas de adyacencia por buckets y Union–Find.

Cada inserción de arista actualiza en un solo paso la lista de adyacencia
del vértice origen y el bosque Union–Find guardado en los mismos vértices.
Las funciones de módulo (``create_graph``, ``add_edge``, ``are_related``,
``destroy_graph``, ``dump_graph``) son la superficie que consumen el
servicio y los cargadores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from ufgraph.algorithms.union_find import UnionFind, UnionOutcome
from ufgraph.config import SETTINGS
from ufgraph.core import diagnostics
from ufgraph.core.diagnostics import Diagnostic, DiagnosticSink
from ufgraph.core.errors import AllocationFailure, InvalidArgument
from ufgraph.core.vertex_store import Edge, Vertex, VertexStore


@dataclass(frozen=True)
class EdgeInsertion:
    """
    Resultado de add_edge.
    added: False si la arista ya existía (no se modificó nada)
    cycle: True si los extremos ya estaban relacionados antes de la inserción
    """
    source: int
    destination: int
    weight: int
    added: bool
    cycle: bool = False


class Graph:
    def __init__(self, capacity: int, directed: bool = False,
                 bucket_size: Optional[int] = None, sink: Optional[DiagnosticSink] = None):
        self.directed = bool(directed)
        self.sink = sink or DiagnosticSink()
        self.store = VertexStore(capacity, bucket_size if bucket_size is not None else SETTINGS.bucket_size)
        self.union_find = UnionFind(self.store, self.sink)
        self.destroyed = False

    def __enter__(self) -> "Graph":
        return self

    def __exit__(self, *exc) -> None:
        self.destroy()

    def __repr__(self) -> str:
        kind = "dirigido" if self.directed else "no dirigido"
        return f"<Graph {kind} capacidad={self.capacity} vértices={self.vertex_count} aristas={self.edge_count}>"

    @property
    def capacity(self) -> int:
        return self.store.capacity

    @property
    def bucket_size(self) -> int:
        return self.store.bucket_size

    @property
    def bucket_count(self) -> int:
        return self.store.bucket_count

    @property
    def vertex_count(self) -> int:
        return self.store.vertex_count

    @property
    def edge_count(self) -> int:
        return self.store.edge_count

    def _ensure_alive(self) -> None:
        if self.destroyed:
            raise InvalidArgument("El grafo ya fue destruido.")

    def vertices(self) -> Iterator[Vertex]:
        self._ensure_alive()
        return iter(self.store)

    def vertex(self, vertex_id: int) -> Vertex:
        self._ensure_alive()
        return self.store.lookup(vertex_id)

    def edges_of(self, vertex_id: int) -> List[Edge]:
        return list(self.vertex(vertex_id).edges)

    def _materialize(self, vertex_id: int) -> Vertex:
        v, created = self.store.find_or_create(vertex_id)
        if created:
            self.sink.emit(Diagnostic(diagnostics.VERTEX_CREATED, f"vértice {vertex_id}", {"id": vertex_id}))
        return v

    def add_edge(self, source: int, destination: int, weight: int = 0) -> EdgeInsertion:
        self._ensure_alive()
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise InvalidArgument(f"Peso inválido: {weight!r}.")
        # Se validan ambos extremos antes de mutar nada
        self.store.check_id(source)
        self.store.check_id(destination)

        src = self._materialize(source)
        dst = self._materialize(destination)

        added = src.add_edge(destination, weight)
        if not added:
            self.sink.emit(Diagnostic(
                diagnostics.EDGE_DUPLICATE, f"{source} -> {destination} ya existe",
                {"source": source, "destination": destination},
            ))
            return EdgeInsertion(source, destination, weight, added=False)

        if not self.directed and source != destination:
            try:
                dst.add_edge(source, weight)
            except AllocationFailure:
                # Sin espejo no hay arista: se deshace la de origen
                src.edges.pop()
                raise
        self.sink.emit(Diagnostic(
            diagnostics.EDGE_ADDED, f"{source} -> {destination} ({weight})",
            {"source": source, "destination": destination, "weight": weight},
        ))

        outcome = self.union_find.union(source, destination)
        return EdgeInsertion(source, destination, weight, added=True, cycle=outcome is UnionOutcome.CYCLE)

    def related(self, a: int, b: int) -> bool:
        """
        True si 'a' y 'b' tienen el mismo representante.
        Ambos ids deben haber aparecido en alguna arista: un id sin tocar
        (aunque esté dentro de la capacidad) lanza OutOfRange, no retorna False.
        """
        self._ensure_alive()
        self.store.lookup(a)
        self.store.lookup(b)
        return self.union_find.connected(a, b)

    def representative(self, vertex_id: int) -> int:
        self._ensure_alive()
        return self.union_find.find(vertex_id)

    def components(self):
        self._ensure_alive()
        return self.union_find.components()

    def dump(self) -> str:
        """
        Listado de depuración: una línea por bucket con vértices.
        Cada arista se muestra como (representante, dato, destino, peso, conexiones);
        un vértice sin aristas como (representante, dato, -, conexiones).
        """
        self._ensure_alive()
        lines = []
        for index, bucket in self.store.iter_buckets():
            if not bucket:
                continue
            items = []
            for v in bucket:
                root = self.union_find.find(v.id, compress=False)
                if not v.edges:
                    items.append(f"({root}, {v.data}, -, {v.connections})")
                for e in v.edges:
                    items.append(f"({root}, {v.data}, {e.destination}, {e.weight}, {v.connections})")
            lines.append(f"[{index}] " + " ".join(items))
        return "\n".join(lines)

    def destroy(self) -> None:
        if self.destroyed:
            return
        self.store.destroy()
        self.destroyed = True
        self.sink.emit(Diagnostic(diagnostics.GRAPH_DESTROYED, "grafo destruido"))


def _require(graph: Optional[Graph]) -> Graph:
    if graph is None:
        raise InvalidArgument("No se recibió un grafo.")
    return graph


def create_graph(capacity: int, directed: Optional[bool] = None, *,
                 bucket_size: Optional[int] = None, sink: Optional[DiagnosticSink] = None) -> Graph:
    if directed is None:
        directed = SETTINGS.default_directed
    return Graph(capacity, directed, bucket_size=bucket_size, sink=sink)


def add_edge(graph: Optional[Graph], source: int, destination: int, weight: int = 0) -> EdgeInsertion:
    return _require(graph).add_edge(source, destination, weight)


def are_related(graph: Optional[Graph], a: int, b: int) -> bool:
    return _require(graph).related(a, b)


def dump_graph(graph: Optional[Graph]) -> str:
    return _require(graph).dump()


def destroy_graph(graph: Optional[Graph]) -> None:
    """Libera el grafo completo; llamarla otra vez (o con None) no hace nada."""
    if graph is not None:
        graph.destroy()
