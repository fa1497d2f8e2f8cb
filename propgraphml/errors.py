"""Exception types raised by propgraphml.

Every error propagates to the caller of the import/export call. When an
import fails, the batching collaborator has already finalized its open
transaction, so work committed at earlier batch boundaries stays in the
target graph.
"""
from __future__ import annotations

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError

__all__ = [
    "GraphMLError",
    "FormatError",
    "SchemaGapError",
    "StreamError",
    "UnsafeXMLError",
    "WideningError",
]

# Malformed XML is reported by the parser itself and is not wrapped.
StreamError = ParseError

# DTD entity declarations and external references are refused by the parser.
UnsafeXMLError = DefusedXmlException


class GraphMLError(Exception):
    """Base class for codec errors."""


class FormatError(GraphMLError, ValueError):
    """Text does not match the declared scalar or list type.

    Parameters
    ----------
    text : str | None
        The offending text.
    type_name : str
        Declared type the text was parsed as.
    key_id : str, optional
        GraphML key id the value belongs to, when known.
    kind : str, optional
        Entity kind ("node" / "relationship") the value was read for.
    """

    def __init__(self, text, type_name, *, key_id=None, kind=None, reason=None):
        self.text = text
        self.type_name = type_name
        self.key_id = key_id
        self.kind = kind
        self.reason = reason
        super().__init__(self._message())

    def _message(self) -> str:
        msg = f"cannot parse {self.text!r} as {self.type_name}"
        where = []
        if self.key_id is not None:
            where.append(f"key {self.key_id!r}")
        if self.kind is not None:
            where.append(f"on {self.kind}")
        if where:
            msg += " (" + " ".join(where) + ")"
        if self.reason:
            msg += f": {self.reason}"
        return msg

    def with_context(self, *, key_id=None, kind=None) -> "FormatError":
        """Return a copy of this error carrying key/entity context."""
        return FormatError(
            self.text,
            self.type_name,
            key_id=key_id if key_id is not None else self.key_id,
            kind=kind if kind is not None else self.kind,
            reason=self.reason,
        )


class SchemaGapError(GraphMLError, LookupError):
    """An edge references a node id that was never declared in the document."""

    def __init__(self, node_id, endpoint: str):
        self.node_id = node_id
        self.endpoint = endpoint
        super().__init__(f"edge {endpoint} {node_id!r} does not match any node id seen so far")


class WideningError(GraphMLError, RuntimeError):
    """A numeric type reached the reconciler that has no place in the widening order."""

    def __init__(self, key, stored, observed):
        self.key = key
        self.stored = stored
        self.observed = observed
        super().__init__(
            f"property {key!r}: cannot widen {getattr(stored, '__name__', stored)} "
            f"with {getattr(observed, '__name__', observed)}"
        )
