import networkx as nx

from ..core.graph import PropertyGraph

__all__ = ["to_nx", "from_nx"]

# private attribute names used to carry structure through networkx
LABELS_ATTR = "__labels"
TYPE_ATTR = "__type"


def to_nx(graph: PropertyGraph, *, public_only: bool = False) -> nx.MultiDiGraph:
    """
    Export a PropertyGraph to a networkx MultiDiGraph.

    Node ids and edge keys are the graph's internal handles. Node labels go
    to ``__labels`` and relationship types to ``__type``; properties become
    plain attributes.

    Parameters
    ----------
    graph : PropertyGraph
        Source graph instance.
    public_only : bool
        If True, drop the private ``__labels`` / ``__type`` attributes.

    Returns
    -------
    networkx.MultiDiGraph
    """
    G = nx.MultiDiGraph()
    G.graph.update(graph.graph_attributes)
    for node in graph.nodes():
        attrs = graph.properties(node)
        if not public_only:
            attrs[LABELS_ATTR] = graph.labels(node)
        G.add_node(node.id, **attrs)
    for rel in graph.relationships():
        start, end = graph.endpoints(rel)
        attrs = graph.properties(rel)
        if not public_only:
            attrs[TYPE_ATTR] = graph.relationship_type(rel)
        G.add_edge(start.id, end.id, key=rel.id, **attrs)
    return G


def from_nx(G, *, default_rel_type: str = "UNKNOWN", store_node_ids: bool = False) -> PropertyGraph:
    """
    Build a PropertyGraph from any networkx graph.

    ``__labels`` (list or ``":A:B"`` string) on nodes and ``__type`` on edges
    are read back as labels and relationship types; edges without a type get
    ``default_rel_type``. Undirected edges keep the orientation networkx
    reports. With ``store_node_ids`` the networkx node key is stored as the
    ``id`` property.
    """
    graph = PropertyGraph(name=G.graph.get("name"))
    handles = {}
    for n, data in G.nodes(data=True):
        attrs = dict(data)
        labels = attrs.pop(LABELS_ATTR, None) or []
        if isinstance(labels, str):
            labels = [p for p in labels.split(":") if p]
        if store_node_ids:
            attrs.setdefault("id", n)
        handles[n] = graph.create_node(labels, attrs)
    for u, v, data in G.edges(data=True):
        attrs = dict(data)
        rel_type = attrs.pop(TYPE_ATTR, None) or default_rel_type
        graph.create_relationship(handles[u], handles[v], rel_type, attrs)
    return graph
