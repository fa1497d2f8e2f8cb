from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

__all__ = ["BatchTransaction", "ProgressReporter"]


class BatchTransaction:
    """
    Scoped transaction that commits every ``size`` units of work.

    Use as a context manager around one import pass. ``increment()`` counts
    one unit and opens a transaction if none is open; once ``size`` units
    have gone into the open transaction, the next ``increment()`` commits it
    before starting a new one. On exit the open transaction, if any, is
    committed; if the block raised, ``on_error`` decides between committing
    the partial batch ("commit") or rolling it back ("rollback"). The
    exception is then re-raised.

    Notes
    -----
    Batches committed before a failure stay in the graph under either
    policy, so a failed import can leave a partial graph behind. For N
    units the graph sees ``ceil(N / size)`` commits on success, none for
    an empty pass.
    """

    def __init__(self, graph, size: int, *, on_error: str = "commit"):
        if size < 1:
            raise ValueError(f"size must be >= 1, got {size}")
        if on_error not in ("commit", "rollback"):
            raise ValueError(f"on_error must be 'commit' or 'rollback', got {on_error!r}")
        self.graph = graph
        self.size = size
        self.on_error = on_error
        self.count = 0
        self.batches = 0
        self._open = False

    def __enter__(self) -> "BatchTransaction":
        return self

    def increment(self):
        if self._open and self.count % self.size == 0:
            self._commit()
        if not self._open:
            self.graph.begin()
            self._open = True
        self.count += 1

    def _commit(self):
        self.graph.commit()
        self._open = False
        self.batches += 1
        logger.debug("batch %d committed after %d units", self.batches, self.count)

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            if self._open:
                self._commit()
            return False
        logger.warning(
            "import failed after %d units (%s), finalizing open batch with %s",
            self.count, exc_type.__name__, self.on_error,
        )
        if not self._open:
            return False
        if self.on_error == "rollback":
            self.graph.rollback()
            self._open = False
        else:
            self._commit()
        return False


class ProgressReporter:
    """Accumulates node / relationship / property counts of an import."""

    def __init__(self, source=None):
        self.source = source
        self.nodes = 0
        self.relationships = 0
        self.properties = 0

    def update(self, nodes: int = 0, relationships: int = 0, properties: int = 0):
        self.nodes += nodes
        self.relationships += relationships
        self.properties += properties

    @property
    def rows(self) -> int:
        return self.nodes + self.relationships

    def as_dict(self) -> dict:
        return {
            "source": self.source,
            "nodes": self.nodes,
            "relationships": self.relationships,
            "properties": self.properties,
        }

    def __repr__(self):
        return (
            f"ProgressReporter(nodes={self.nodes}, relationships={self.relationships}, "
            f"properties={self.properties})"
        )
