import io
import xml.etree.ElementTree as ET

import numpy as np

from propgraphml.io.meta import (
    ArrayType,
    GRAPHML_ALLOWED,
    collect_prop_types_for_nodes,
    collect_prop_types_for_relationships,
    labels_string,
    type_for,
)

NS = "http://graphml.graphdrawing.org/xmlns"


def doc(body: str, *, namespace: bool = True) -> io.BytesIO:
    """Wrap a GraphML fragment in <graphml><graph> and return it as a binary stream."""
    xmlns = f' xmlns="{NS}"' if namespace else ""
    text = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f"<graphml{xmlns}>\n"
        '  <graph id="G" edgedefault="directed">\n'
        f"{body}\n"
        "  </graph>\n"
        "</graphml>\n"
    )
    return io.BytesIO(text.encode("utf-8"))


def _text(value):
    if isinstance(value, (list, tuple, np.ndarray)):
        return "[" + ", ".join(_text(v) for v in value) + "]"
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, np.generic):
        return repr(value.item())
    if isinstance(value, float):
        return repr(value)
    return str(value)


def write_typed_graphml(graph, *, read_labels=True) -> io.BytesIO:
    """Minimal GraphML writer driven by the reconciled type maps (one <key> per property)."""
    root = ET.Element("graphml", xmlns=NS)
    for kind, types, prefix in (
        ("node", collect_prop_types_for_nodes(graph), "n"),
        ("edge", collect_prop_types_for_relationships(graph), "e"),
    ):
        for name, value_type in types.items():
            attrs = {"id": f"{prefix}_{name}", "for": kind, "attr.name": name}
            type_name = type_for(value_type, GRAPHML_ALLOWED) or "string"
            attrs["attr.type"] = type_name
            if isinstance(value_type, ArrayType):
                attrs["attr.list"] = type_name
            ET.SubElement(root, "key", attrs)
    g = ET.SubElement(root, "graph", id="G", edgedefault="directed")
    for node in graph.nodes():
        el = ET.SubElement(g, "node", id=f"n{node.id}")
        if read_labels and graph.labels(node):
            el.set("labels", labels_string(graph, node))
        for name, value in graph.properties(node).items():
            ET.SubElement(el, "data", key=f"n_{name}").text = _text(value)
    for rel in graph.relationships():
        start, end = graph.endpoints(rel)
        el = ET.SubElement(
            g, "edge", source=f"n{start.id}", target=f"n{end.id}", label=graph.relationship_type(rel)
        )
        for name, value in graph.properties(rel).items():
            ET.SubElement(el, "data", key=f"e_{name}").text = _text(value)
    buf = io.BytesIO()
    ET.ElementTree(root).write(buf, encoding="utf-8", xml_declaration=True)
    buf.seek(0)
    return buf
