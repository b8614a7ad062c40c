import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI
from pydantic import BaseModel

from ufgraph.core.errors import GraphError
from ufgraph.core.diagnostics import RecordingSink
from ufgraph.utils.graph_loader import build_example_graph

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("ufgraph.main")


class EdgeRequest(BaseModel):
    source: int
    target: int
    weight: int = 0


app = FastAPI()

logger.info("Construyendo grafo de ejemplo...")

# Solo se conservan los diagnósticos más recientes
DIAGNOSTICS_LIMIT = 256
sink = RecordingSink(maxlen=DIAGNOSTICS_LIMIT)
graph = build_example_graph(sink=sink)

logger.info("Grafo listo: %d vértices, %d aristas.", graph.vertex_count, graph.edge_count)


def graph_summary() -> Dict[str, Any]:
    return {
        "directed": graph.directed,
        "capacity": graph.capacity,
        "bucket_count": graph.bucket_count,
        "vertices": graph.vertex_count,
        "edges": graph.edge_count,
        "dump": graph.dump().splitlines(),
    }


@app.get("/graph")
async def get_graph():
    return graph_summary()


@app.post("/edges")
async def post_edge(req: EdgeRequest):
    try:
        result = graph.add_edge(req.source, req.target, req.weight)
    except GraphError as e:
        return {"error": f"{type(e).__name__}: {e}"}
    return {
        "source": result.source,
        "target": result.destination,
        "weight": result.weight,
        "added": result.added,
        "cycle": result.cycle,
    }


@app.get("/related")
async def get_related(a: int, b: int):
    try:
        return {"a": a, "b": b, "related": graph.related(a, b)}
    except GraphError as e:
        return {"error": f"{type(e).__name__}: {e}"}


@app.get("/diagnostics")
async def get_diagnostics(kind: Optional[str] = None):
    records = sink.of_kind(kind) if kind else list(sink.records)
    return {
        "limit": DIAGNOSTICS_LIMIT,
        "records": [{"kind": r.kind, "message": r.message, "data": r.data} for r in records],
    }


@app.get("/components")
async def get_components():
    return {"components": {str(root): members for root, members in graph.components().items()}}


@app.post("/reset")
async def reset():
    """Descarta el grafo actual y vuelve a construir el ejemplo."""
    global graph
    graph.destroy()
    sink.clear()
    graph = build_example_graph(sink=sink)
    return graph_summary()
