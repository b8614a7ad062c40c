from __future__ import annotations

import enum
from typing import Dict, List

from ufgraph.core import diagnostics
from ufgraph.core.diagnostics import Diagnostic, DiagnosticSink
from ufgraph.core.vertex_store import VertexStore


class UnionOutcome(enum.Enum):
    MERGED = "merged"
    CYCLE = "cycle"


class UnionFind:
    """
    Implementación del algoritmo Union–Find (Disjoint Set Union) montada
    sobre los vértices del almacén: el padre y el contador de conexiones
    viven en cada vértice, no en diccionarios aparte.
    Utilizado para determinar si dos vértices están conectados y para
    detectar ciclos a medida que se agregan aristas.
    """

    def __init__(self, store: VertexStore, sink: DiagnosticSink | None = None):
        self.store = store
        self.sink = sink or DiagnosticSink()

    def _root(self, v: int) -> int:
        """Sigue los punteros a padre sin modificarlos."""
        vertex = self.store.lookup(v)
        while not vertex.is_representative:
            vertex = self.store.lookup(vertex.parent)
        return vertex.id

    def find(self, v: int, compress: bool = True) -> int:
        """Encuentra el representante (raíz) del conjunto que contiene a 'v'."""
        root = self._root(v)
        if not compress:
            return root
        # Compresión de caminos
        vertex = self.store.lookup(v)
        while vertex.parent != root:
            next_id = vertex.parent
            vertex.parent = root
            vertex = self.store.lookup(next_id)
        return root

    def union(self, a: int, b: int) -> UnionOutcome:
        """
        Une los conjuntos que contienen a 'a' y 'b'.
        La raíz de menor id queda como representante. Si ambos ya comparten
        raíz se informa un ciclo y no se toca ningún puntero.
        """
        rootA = self._root(a)
        rootB = self._root(b)
        if rootA == rootB:
            self.sink.emit(Diagnostic(
                diagnostics.CYCLE_DETECTED,
                f"ciclo detectado en ({a}, {b})",
                {"a": a, "b": b, "representative": rootA},
            ))
            return UnionOutcome.CYCLE

        parent, child = (rootA, rootB) if rootA < rootB else (rootB, rootA)
        self.store.lookup(child).parent = parent
        self.store.lookup(parent).connections += 1
        self.find(a)
        self.find(b)
        self.sink.emit(Diagnostic(
            diagnostics.UNION,
            f"{child} -> {parent}",
            {"a": a, "b": b, "representative": parent, "attached": child},
        ))
        return UnionOutcome.MERGED

    def connected(self, a: int, b: int) -> bool:
        """Verifica si 'a' y 'b' pertenecen al mismo conjunto."""
        return self.find(a) == self.find(b)

    def components(self) -> Dict[int, List[int]]:
        """Agrupa los vértices materializados por representante."""
        groups: Dict[int, List[int]] = {}
        for vertex in self.store:
            groups.setdefault(self.find(vertex.id), []).append(vertex.id)
        return {root: sorted(members) for root, members in sorted(groups.items())}
