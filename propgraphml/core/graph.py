from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import networkx as nx

from .structure import EntityKind, EntityRef

logger = logging.getLogger(__name__)

__all__ = ["PropertyGraph"]


class PropertyGraph:
    """In-memory labeled property graph with simple transactions.

    Nodes and relationships live in a ``networkx.MultiDiGraph``; each
    relationship is a keyed multi-edge so parallel relationships of any
    type are kept apart. Every entity is addressed by an :class:`EntityRef`
    carrying its kind and an integer handle.

    Transactions are optional. Outside a transaction every mutation is final.
    Inside one (``begin``), mutations are journaled and ``rollback`` undoes
    them in reverse order; ``commit`` makes them final.

    Parameters
    ----------
    name : str, optional
        Free-form graph name, kept in ``graph_attributes``.
    """

    def __init__(self, name=None):
        self._g = nx.MultiDiGraph()
        self._rels: dict[int, tuple[int, int]] = {}
        self._next_node_id = 0
        self._next_rel_id = 0
        self._journal: list | None = None
        self.commit_count = 0
        self.rollback_count = 0
        self.graph_attributes = {"name": name} if name is not None else {}

    # ==================== Transactions ====================

    @property
    def in_transaction(self) -> bool:
        return self._journal is not None

    def begin(self):
        if self._journal is not None:
            raise RuntimeError("A transaction is already open")
        self._journal = []

    def commit(self):
        if self._journal is None:
            raise RuntimeError("No open transaction to commit")
        n = len(self._journal)
        self._journal = None
        self.commit_count += 1
        logger.debug("commit #%d (%d changes)", self.commit_count, n)

    def rollback(self):
        if self._journal is None:
            raise RuntimeError("No open transaction to roll back")
        journal, self._journal = self._journal, None
        for undo in reversed(journal):
            undo()
        self.rollback_count += 1
        logger.debug("rollback #%d (%d changes undone)", self.rollback_count, len(journal))

    def _record(self, undo):
        if self._journal is not None:
            self._journal.append(undo)

    # ==================== Creation ====================

    def create_node(self, labels: Iterable[str] | None = None, properties: dict | None = None) -> EntityRef:
        nid = self._next_node_id
        self._next_node_id += 1
        self._g.add_node(nid, labels=[], properties={})
        self._record(lambda: self._g.remove_node(nid))
        ref = EntityRef(EntityKind.NODE, nid)
        for label in labels or ():
            self.add_label(ref, label)
        for key, value in (properties or {}).items():
            self.set_property(ref, key, value)
        return ref

    def create_relationship(self, start: EntityRef, end: EntityRef, rel_type: str,
                            properties: dict | None = None) -> EntityRef:
        """Create a directed relationship ``start -[rel_type]-> end``."""
        for ref in (start, end):
            self._check_node(ref)
        rid = self._next_rel_id
        self._next_rel_id += 1
        self._g.add_edge(start.id, end.id, key=rid, type=str(rel_type), properties={})
        self._rels[rid] = (start.id, end.id)

        def undo():
            self._g.remove_edge(start.id, end.id, key=rid)
            del self._rels[rid]

        self._record(undo)
        ref = EntityRef(EntityKind.RELATIONSHIP, rid)
        for key, value in (properties or {}).items():
            self.set_property(ref, key, value)
        return ref

    # ==================== Lookup ====================

    def get_node(self, handle: int) -> EntityRef:
        ref = EntityRef(EntityKind.NODE, handle)
        self._check_node(ref)
        return ref

    def get_relationship(self, handle: int) -> EntityRef:
        ref = EntityRef(EntityKind.RELATIONSHIP, handle)
        self._data(ref)
        return ref

    def nodes(self) -> Iterator[EntityRef]:
        for nid in self._g.nodes:
            yield EntityRef(EntityKind.NODE, nid)

    def relationships(self) -> Iterator[EntityRef]:
        for rid in self._rels:
            yield EntityRef(EntityKind.RELATIONSHIP, rid)

    def number_of_nodes(self) -> int:
        return self._g.number_of_nodes()

    def number_of_relationships(self) -> int:
        return len(self._rels)

    def endpoints(self, rel: EntityRef) -> tuple[EntityRef, EntityRef]:
        u, v = self._rels[rel.id]
        return EntityRef(EntityKind.NODE, u), EntityRef(EntityKind.NODE, v)

    def relationship_type(self, rel: EntityRef) -> str:
        return self._data(rel)["type"]

    def find_nodes(self, key: str, value) -> list[EntityRef]:
        """Nodes whose property ``key`` equals ``value``."""
        return [
            EntityRef(EntityKind.NODE, nid)
            for nid, d in self._g.nodes(data=True)
            if key in d["properties"] and d["properties"][key] == value
        ]

    # ==================== Properties & labels ====================

    def set_property(self, entity: EntityRef, key: str, value):
        """Set ``key`` on a node or relationship; ``None`` removes the key."""
        props = self._data(entity)["properties"]
        missing = object()
        previous = props.get(key, missing)
        if value is None:
            props.pop(key, None)
        else:
            props[key] = value

        def undo():
            if previous is missing:
                props.pop(key, None)
            else:
                props[key] = previous

        self._record(undo)

    def get_property(self, entity: EntityRef, key: str, default=None):
        return self._data(entity)["properties"].get(key, default)

    def properties(self, entity: EntityRef) -> dict:
        return dict(self._data(entity)["properties"])

    def add_label(self, node: EntityRef, label: str):
        if not node.is_node:
            raise TypeError(f"Only nodes carry labels, got {node!r}")
        labels = self._data(node)["labels"]
        if label in labels:
            return
        labels.append(label)
        self._record(lambda: labels.remove(label))

    def labels(self, node: EntityRef) -> list[str]:
        if not node.is_node:
            return []
        return list(self._data(node)["labels"])

    # ==================== Internals ====================

    def _check_node(self, ref: EntityRef):
        if not ref.is_node or ref.id not in self._g:
            raise KeyError(f"Node {ref.id} not found")

    def _data(self, ref: EntityRef) -> dict:
        if ref.is_node:
            self._check_node(ref)
            return self._g.nodes[ref.id]
        if ref.id not in self._rels:
            raise KeyError(f"Relationship {ref.id} not found")
        u, v = self._rels[ref.id]
        return self._g.edges[u, v, ref.id]

    def __repr__(self):
        return (
            f"PropertyGraph(nodes={self.number_of_nodes()}, "
            f"relationships={self.number_of_relationships()})"
        )
