import logging

import networkx as nx
import pandas as pd

from ufgraph.core.graph import Graph, create_graph

logger = logging.getLogger(__name__)

# Grafo de ejemplo de la demostración: (origen, destino, peso)
EXAMPLE_CAPACITY = 12
EXAMPLE_EDGES = [
    (0, 1, 4), (1, 2, 8), (2, 3, 7), (3, 4, 9), (3, 5, 14), (4, 5, 10), (5, 6, 2),
    (6, 7, 1), (7, 0, 8), (7, 8, 7), (8, 6, 6), (8, 2, 2), (2, 5, 4), (9, 10, 4),
]


def build_example_graph(sink=None):
    """
    Construye el grafo de ejemplo: capacidad 12, no dirigido, 14 aristas.
    Los vértices 9 y 10 quedan en una componente aparte de 0..8.
    """
    G = create_graph(EXAMPLE_CAPACITY, directed=False, sink=sink)
    for u, v, w in EXAMPLE_EDGES:
        G.add_edge(u, v, w)
    return G


def load_graph(csv_path, directed=None, capacity=None, sink=None):
    """
    Carga un CSV de aristas y construye el grafo.
    - Columnas obligatorias: 'source' y 'target' (ids enteros)
    - Columna opcional 'weight' (por defecto 1)
    - Si no se indica capacidad se usa el mayor id + 1
    Retorna: Graph
    """
    edges_df = pd.read_csv(csv_path)

    missing = {"source", "target"} - set(edges_df.columns)
    if missing:
        raise ValueError(f"Faltan columnas en {csv_path}: {sorted(missing)}")

    if "weight" not in edges_df.columns:
        edges_df["weight"] = 1
    edges_df = edges_df.astype({"source": int, "target": int, "weight": int})

    if capacity is None:
        capacity = int(max(edges_df["source"].max(), edges_df["target"].max()) + 1) if len(edges_df) else 0

    G = create_graph(capacity, directed=directed, sink=sink)
    cycles = 0
    for row in edges_df.itertuples(index=False):
        result = G.add_edge(int(row.source), int(row.target), int(row.weight))
        cycles += result.cycle

    logger.info("Grafo cargado con %d vértices y %d aristas (%d ciclos detectados).",
                G.vertex_count, G.edge_count, cycles)
    return G


def to_networkx(graph: Graph):
    """
    Convierte el grafo a networkx (DiGraph si es dirigido).
    Cada nodo lleva 'data' y 'representative'; cada arista su 'weight'.
    """
    G = nx.DiGraph() if graph.directed else nx.Graph()
    for v in graph.vertices():
        G.add_node(v.id, data=v.data, representative=graph.union_find.find(v.id, compress=False))
    for v in graph.vertices():
        for e in v.edges:
            G.add_edge(v.id, e.destination, weight=e.weight)
    return G
