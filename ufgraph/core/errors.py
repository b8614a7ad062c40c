class GraphError(Exception):
    """Error base de todas las operaciones sobre el grafo."""


class InvalidArgument(GraphError, ValueError):
    """Grafo ausente o destruido, capacidad negativa o argumentos mal tipados."""


class OutOfRange(GraphError, IndexError):
    """Id de vértice fuera de la capacidad declarada o nunca referenciado."""

    def __init__(self, vertex_id, capacity, referenced=True):
        self.vertex_id = vertex_id
        self.capacity = capacity
        self.referenced = referenced
        if referenced:
            message = f"Vértice {vertex_id} fuera de rango (capacidad {capacity})."
        else:
            message = f"Vértice {vertex_id} nunca referenciado por una arista."
        super().__init__(message)


class AllocationFailure(GraphError, MemoryError):
    """No se pudo reservar memoria para un vértice o una arista."""
