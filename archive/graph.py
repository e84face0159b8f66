"""
archive/graph.py -- NetworkX helpers for the mind map.

Converts a ``MindMap`` description into a directed graph and computes a
spring layout for it.  The layout is recomputed from scratch on every
call; nothing is carried over between builds.

Usage:
    from archive.graph import compute_layout
    from archive.render import render_mind_map

    positions = compute_layout(render_mind_map(store.entities))
    x, y = positions["ann-001"]
"""

import logging

logger = logging.getLogger(__name__)

try:
    import networkx as nx
except ImportError:
    raise ImportError(
        "The 'networkx' package is required but not installed. "
        "Install it with: pip install networkx"
    )

from archive.render import MindMap

# Scale applied to NetworkX layout coordinates (scene units)
SCALE_FACTOR = 300
LAYOUT_SEED = 42


def to_digraph(mind_map: MindMap) -> nx.DiGraph:
    """Build a ``DiGraph`` whose nodes carry label, tooltip and category."""
    graph = nx.DiGraph()
    for node in mind_map.nodes:
        graph.add_node(
            node.id,
            label=node.label,
            tooltip=node.tooltip,
            category=node.category,
        )
    for edge in mind_map.edges:
        graph.add_edge(edge.source, edge.target)
    return graph


def compute_layout(
    mind_map: MindMap,
    *,
    scale: float = SCALE_FACTOR,
    seed: int = LAYOUT_SEED,
) -> dict[str, tuple[float, float]]:
    """Return ``{node_id: (x, y)}`` for every node in *mind_map*.

    A single node sits at the origin.  The seed keeps the picture stable
    across rebuilds of the same collection.
    """
    graph = to_digraph(mind_map)
    if graph.number_of_nodes() == 0:
        return {}
    if graph.number_of_nodes() == 1:
        only = next(iter(graph.nodes))
        return {only: (0.0, 0.0)}

    pos = nx.spring_layout(graph, scale=scale, seed=seed)
    logger.debug(
        "spring_layout: %d nodes, %d edges",
        graph.number_of_nodes(), graph.number_of_edges(),
    )
    return {node_id: (float(xy[0]), float(xy[1])) for node_id, xy in pos.items()}
