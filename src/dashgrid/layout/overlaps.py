"""Collision graph of a layout.

Each item is a node; each overlapping pair is an edge. Connected
components with more than one node are overlap clusters, i.e. groups
of items a no-overlap compactor would have to pull apart.
"""

from __future__ import annotations

__all__ = ["build_collision_graph", "overlap_clusters"]

import networkx as nx

from dashgrid.layout.collision import collides
from dashgrid.parser.model import Layout


def build_collision_graph(layout: Layout) -> nx.Graph:
    """Build an undirected graph with an edge per colliding pair."""
    G = nx.Graph()
    for index, item in enumerate(layout):
        G.add_node(item.i, index=index, static=item.static)
    for a_index, a in enumerate(layout):
        for b in layout[a_index + 1 :]:
            if collides(a, b):
                G.add_edge(a.i, b.i)
    return G


def overlap_clusters(layout: Layout) -> list[list[str]]:
    """Return groups of mutually overlapping item ids.

    Ids inside a cluster and the clusters themselves follow layout order.
    """
    G = build_collision_graph(layout)
    order = {item.i: index for index, item in enumerate(layout)}
    clusters = [
        sorted(component, key=order.__getitem__)
        for component in nx.connected_components(G)
        if len(component) > 1
    ]
    clusters.sort(key=lambda ids: order[ids[0]])
    return clusters
