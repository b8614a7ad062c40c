"""
Almacenamiento de vértices en buckets de tamaño fijo.

El vértice ``v`` vive en el bucket ``v // bucket_size``, posición
``v % bucket_size``. Los buckets se reservan al crear el almacén; los
vértices se materializan recién cuando una arista los referencia.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from ufgraph.core.errors import AllocationFailure, InvalidArgument, OutOfRange


@dataclass
class Edge:
    destination: int
    weight: int
    back: bool = False  # reservado para clasificar aristas de retroceso


@dataclass
class Vertex:
    id: int
    data: int
    parent: int
    connections: int = 0
    edges: List[Edge] = field(default_factory=list)

    @classmethod
    def new(cls, vertex_id: int) -> "Vertex":
        return cls(id=vertex_id, data=vertex_id, parent=vertex_id)

    @property
    def is_representative(self) -> bool:
        return self.parent == self.id

    def find_edge(self, destination: int) -> Optional[Edge]:
        for edge in self.edges:
            if edge.destination == destination:
                return edge
        return None

    def add_edge(self, destination: int, weight: int) -> bool:
        """
        Agrega la arista al final de la lista si aún no existe.
        Retorna False si ya estaba presente (sin modificar nada).
        """
        if self.find_edge(destination) is not None:
            return False
        try:
            edge = Edge(destination=destination, weight=weight)
        except MemoryError as e:
            raise AllocationFailure(f"No se pudo crear la arista {self.id}->{destination}.") from e
        self.edges.append(edge)
        return True


class Bucket:
    """Grupo de ``size`` posiciones opcionales de vértice."""

    def __init__(self, size: int):
        self.slots: List[Optional[Vertex]] = [None] * size

    def __iter__(self) -> Iterator[Vertex]:
        return (v for v in self.slots if v is not None)

    def clear(self) -> None:
        for v in self.slots:
            if v is not None:
                v.edges.clear()
        self.slots = []


class VertexStore:
    def __init__(self, capacity: int, bucket_size: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
            raise InvalidArgument(f"Capacidad inválida: {capacity!r}.")
        if isinstance(bucket_size, bool) or not isinstance(bucket_size, int) or bucket_size <= 0:
            raise InvalidArgument(f"Tamaño de bucket inválido: {bucket_size!r}.")

        self.capacity = capacity
        self.bucket_size = bucket_size
        self.bucket_count = -(-capacity // bucket_size)  # techo
        self.buckets: List[Bucket] = []
        try:
            for _ in range(self.bucket_count):
                self.buckets.append(Bucket(bucket_size))
        except MemoryError as e:
            self.destroy()
            raise AllocationFailure(f"No se pudieron reservar {self.bucket_count} buckets.") from e

    def check_id(self, vertex_id) -> None:
        if isinstance(vertex_id, bool) or not isinstance(vertex_id, int):
            raise InvalidArgument(f"Id de vértice inválido: {vertex_id!r}.")
        if vertex_id < 0 or vertex_id >= self.capacity:
            raise OutOfRange(vertex_id, self.capacity)

    def _locate(self, vertex_id: int) -> Tuple[Bucket, int]:
        self.check_id(vertex_id)
        return self.buckets[vertex_id // self.bucket_size], vertex_id % self.bucket_size

    def get(self, vertex_id: int) -> Optional[Vertex]:
        bucket, slot = self._locate(vertex_id)
        return bucket.slots[slot]

    def lookup(self, vertex_id: int) -> Vertex:
        """Retorna el vértice ya materializado; OutOfRange si nunca fue referenciado."""
        v = self.get(vertex_id)
        if v is None:
            raise OutOfRange(vertex_id, self.capacity, referenced=False)
        return v

    def find_or_create(self, vertex_id: int) -> Tuple[Vertex, bool]:
        """Retorna (vértice, creado) reservando el vértice si la posición está vacía."""
        bucket, slot = self._locate(vertex_id)
        v = bucket.slots[slot]
        if v is not None:
            return v, False
        try:
            v = Vertex.new(vertex_id)
        except MemoryError as e:
            raise AllocationFailure(f"No se pudo crear el vértice {vertex_id}.") from e
        bucket.slots[slot] = v
        return v, True

    def __iter__(self) -> Iterator[Vertex]:
        """Recorre los vértices materializados en orden bucket y luego posición."""
        for bucket in self.buckets:
            yield from bucket

    def iter_buckets(self) -> Iterator[Tuple[int, List[Vertex]]]:
        for index, bucket in enumerate(self.buckets):
            yield index, list(bucket)

    @property
    def vertex_count(self) -> int:
        return sum(1 for _ in self)

    @property
    def edge_count(self) -> int:
        return sum(len(v.edges) for v in self)

    def destroy(self) -> None:
        """Libera aristas, vértices y buckets. Puede llamarse más de una vez."""
        for bucket in self.buckets:
            bucket.clear()
        self.buckets = []
        self.bucket_count = 0
        self.capacity = 0
