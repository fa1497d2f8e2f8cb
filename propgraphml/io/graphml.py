"""
Streaming GraphML import into a :class:`~propgraphml.core.graph.PropertyGraph`.

The document is read in a single forward pass with
``defusedxml.ElementTree.iterparse``: nodes and edges are created on their
start tag, ``<key>`` and ``<data>`` are handled on their end tag (once their
text is complete). Finished top-level elements are cleared and detached from
their parent so memory stays flat on large files.

Only the GraphML vocabulary ``graphml``, ``graph``, ``key``, ``default``,
``data``, ``node`` and ``edge`` is interpreted; other elements are skipped.
Element names are matched without their namespace. Entity declarations and
external references are refused by the parser.

Failures (bad values, unknown edge endpoints, malformed or unsafe XML) abort
the pass. The open batch is finalized first, so entities committed at earlier
batch boundaries remain in the target graph.
"""
from __future__ import annotations

import logging
import re

from defusedxml.ElementTree import iterparse

from ..config import ImportConfig
from ..core.graph import PropertyGraph
from ..core.structure import EntityKind
from ..errors import SchemaGapError
from .batch import BatchTransaction
from .keys import KeyRegistry

logger = logging.getLogger(__name__)

__all__ = ["GraphMLReader", "from_graphml", "LABEL_SPLIT"]

LABEL_SPLIT = re.compile(r" *: *")

# attribute names
ID = "id"
LABELS = "labels"
SOURCE = "source"
TARGET = "target"
LABEL = "label"
FOR = "for"
NAME = "attr.name"
TYPE = "attr.type"
LIST = "attr.list"
KEY = "key"


def _local(tag) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rpartition("}")[2]


def _add_labels(graph, node, labels):
    if labels is None:
        return
    labels = labels.strip()
    if not labels:
        return
    for part in LABEL_SPLIT.split(labels):
        part = part.strip()
        if part:
            graph.add_label(node, part)


class GraphMLReader:
    """
    Import GraphML documents into a property graph.

    Parameters
    ----------
    graph : PropertyGraph
        Target store; nodes and relationships are added to it.
    config : ImportConfig, optional
        Import options; keyword ``options`` override single fields.
    reporter : ProgressReporter, optional
        Receives ``update(nodes, relationships, properties)`` calls.

    Examples
    --------
    >>> g = PropertyGraph()
    >>> GraphMLReader(g, read_labels=True).parse("movies.graphml")  # doctest: +SKIP
    """

    def __init__(self, graph: PropertyGraph, config: ImportConfig | None = None, reporter=None, **options):
        config = config or ImportConfig()
        if options:
            config = config.with_options(**options)
        self.graph = graph
        self.config = config
        self.reporter = reporter

    def parse(self, source) -> int:
        """Read ``source`` (path or binary file object); return nodes + relationships created.

        Raises
        ------
        FormatError
            A ``<data>`` value does not parse as its key's declared type.
        SchemaGapError
            An edge names a source or target id not seen before it.
        StreamError
            The document is not well-formed XML.
        UnsafeXMLError
            The document declares entities or references external resources.
        """
        if not hasattr(source, "read"):
            with open(source, "rb") as f:
                return self._parse(f)
        return self._parse(source)

    def _parse(self, source) -> int:
        cfg = self.config
        graph = self.graph
        keys = KeyRegistry()
        cache: dict[str, int] = {}
        last = None
        nodes = relationships = 0
        # open elements, outermost first
        stack = []

        logger.info("GraphML import started (commit size %d)", cfg.commit_size)
        with BatchTransaction(graph, cfg.commit_size, on_error=cfg.on_error) as tx:
            for event, elem in iterparse(source, events=("start", "end")):
                name = _local(elem.tag)

                if event == "start":
                    stack.append(elem)
                    if name == "node":
                        tx.increment()
                        last = self._create_node(elem, cache)
                        nodes += 1
                    elif name == "edge":
                        tx.increment()
                        last = self._create_relationship(elem, cache)
                        relationships += 1
                    continue

                stack.pop()
                if name == "key":
                    self._declare_key(keys, elem)
                elif name == "data":
                    if last is not None:
                        self._read_data(keys, last, elem)

                if name in ("key", "node", "edge"):
                    elem.clear()
                # children of <graphml> and <graph> are done with once closed
                if stack and _local(stack[-1].tag) in ("graphml", "graph"):
                    elem.clear()
                    stack[-1].remove(elem)

        logger.info("GraphML import finished: %d nodes, %d relationships", nodes, relationships)
        return nodes + relationships

    # ---------------------------------------------------------------

    def _declare_key(self, keys: KeyRegistry, elem):
        key = keys.declare(
            elem.get(ID),
            elem.get(NAME),
            elem.get(TYPE),
            elem.get(LIST),
            elem.get(FOR),
        )
        children = list(elem)
        if children and _local(children[0].tag) == "default" and children[0].text is not None:
            key.set_default(children[0].text)

    def _create_node(self, elem, cache):
        graph = self.graph
        external_id = elem.get(ID)
        node = graph.create_node()
        if self.config.read_labels:
            _add_labels(graph, node, elem.get(LABELS))
        if self.config.store_node_ids:
            graph.set_property(node, "id", external_id)
        cache[external_id] = node.id
        if self.reporter is not None:
            self.reporter.update(1, 0, 0)
        return node

    def _create_relationship(self, elem, cache):
        graph = self.graph
        source = elem.get(SOURCE)
        target = elem.get(TARGET)
        label = elem.get(LABEL)
        if source not in cache:
            raise SchemaGapError(source, "source")
        if target not in cache:
            raise SchemaGapError(target, "target")
        start = graph.get_node(cache[source])
        end = graph.get_node(cache[target])
        rel_type = label if label is not None else self.config.default_rel_type
        rel = graph.create_relationship(start, end, rel_type)
        if self.reporter is not None:
            self.reporter.update(0, 1, 0)
        return rel

    def _read_data(self, keys: KeyRegistry, last, elem):
        id = elem.get(KEY)
        key = keys.resolve(id, last.kind)
        value = keys.parse_value(key, elem.text)
        if value is None:
            return
        if self.config.read_labels:
            if last.kind is EntityKind.NODE and id == LABELS:
                if isinstance(value, list):
                    value = ":".join(str(v) for v in value)
                _add_labels(self.graph, last, str(value))
                return
            if id == LABEL:
                return
        self.graph.set_property(last, key.name, value)
        if self.reporter is not None:
            self.reporter.update(0, 0, 1)


def from_graphml(source, graph: PropertyGraph | None = None, *, config: ImportConfig | None = None,
                 reporter=None, **options) -> PropertyGraph:
    """Import ``source`` into ``graph`` (a new PropertyGraph when omitted) and return it."""
    if graph is None:
        graph = PropertyGraph()
    GraphMLReader(graph, config, reporter, **options).parse(source)
    return graph
