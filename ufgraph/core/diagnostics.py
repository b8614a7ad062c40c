"""
Registros de diagnóstico del grafo.

Cada mutación relevante del grafo genera un ``Diagnostic`` que se entrega
a un sink inyectable. El sink por defecto solo lo reenvía al logger
``ufgraph.graph``.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional

VERTEX_CREATED = "vertex_created"
EDGE_ADDED = "edge_added"
EDGE_DUPLICATE = "edge_duplicate"
UNION = "union"
CYCLE_DETECTED = "cycle_detected"
GRAPH_DESTROYED = "graph_destroyed"

# Los ciclos se notifican con WARNING, el resto es ruido de depuración.
_LEVELS = {
    CYCLE_DETECTED: logging.WARNING,
    GRAPH_DESTROYED: logging.INFO,
}


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)


class DiagnosticSink:
    """Recibe los diagnósticos del grafo y los escribe en el log."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("ufgraph.graph")

    def emit(self, record: Diagnostic) -> None:
        self.logger.log(_LEVELS.get(record.kind, logging.DEBUG), "%s: %s", record.kind, record.message)


class RecordingSink(DiagnosticSink):
    """
    Sink que además guarda los registros en memoria, en orden de emisión.
    Con maxlen solo conserva los últimos maxlen registros.
    """

    def __init__(self, logger: logging.Logger | None = None, maxlen: Optional[int] = None):
        super().__init__(logger)
        self.records: Deque[Diagnostic] = deque(maxlen=maxlen)

    def emit(self, record: Diagnostic) -> None:
        self.records.append(record)
        super().emit(record)

    def of_kind(self, kind: str) -> List[Diagnostic]:
        return [r for r in self.records if r.kind == kind]

    def clear(self) -> None:
        self.records.clear()
