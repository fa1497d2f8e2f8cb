"""
Property-type reconciliation for export.

Scans the properties of a set of entities and records one type per property
key, so that writers can declare a single ``attr.type`` per key.

Numeric widening uses a fixed priority table rather than arithmetic
promotion: when two numeric types meet, whichever appears first in
``NUMBER_TYPES`` wins (long > double > int > float > short > byte). This is
a deliberate simplification that keeps export output stable; e.g. ``int64``
and ``float64`` reconcile to ``int64`` even though that loses fractions.
"""
from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

import numpy as np

from ..errors import WideningError

__all__ = [
    "ArrayType",
    "HETEROGENEOUS",
    "NUMBER_TYPES",
    "GRAPHML_ALLOWED",
    "concrete_type",
    "update_key_types",
    "collect_prop_types",
    "collect_prop_types_for_nodes",
    "collect_prop_types_for_relationships",
    "type_for",
    "labels_string",
]


class _Heterogeneous:
    """Marker for keys whose values share no common type."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "HETEROGENEOUS"

    def __reduce__(self):
        return (_Heterogeneous, ())


HETEROGENEOUS = _Heterogeneous()


@dataclass(frozen=True)
class ArrayType:
    """Type of list-valued properties, by element type."""

    element: type


NUMBER_TYPES = (np.int64, np.float64, np.int32, np.float32, np.int16, np.int8)

GRAPHML_ALLOWED = frozenset({"boolean", "int", "long", "float", "double", "string"})

_TYPE_NAMES = {
    np.int64: "long",
    np.float64: "double",
    np.int32: "int",
    np.float32: "float",
    np.int16: "short",
    np.int8: "byte",
    bool: "boolean",
    str: "string",
}


def _scalar_type(value) -> type:
    if isinstance(value, (bool, np.bool_)):
        return bool
    if isinstance(value, np.generic):
        return type(value)
    if isinstance(value, int):
        return np.int64
    if isinstance(value, float):
        return np.float64
    if isinstance(value, str):
        return str
    return type(value)


def concrete_type(value):
    """Runtime type of a property value as the reconciler sees it.

    Python ``int``/``float`` count as 64-bit; lists, tuples and arrays become
    :class:`ArrayType` of their (common) element type, ``str`` when empty.
    """
    if isinstance(value, np.ndarray):
        if value.dtype == np.bool_:
            return ArrayType(bool)
        if value.dtype.kind in "US":
            return ArrayType(str)
        return ArrayType(value.dtype.type)
    if isinstance(value, (list, tuple)):
        element_types = {_scalar_type(v) for v in value}
        if not element_types:
            return ArrayType(str)
        if len(element_types) == 1:
            return ArrayType(element_types.pop())
        return ArrayType(object)
    return _scalar_type(value)


def _is_number(t) -> bool:
    return isinstance(t, type) and t is not bool and issubclass(t, (numbers.Number, np.number))


def update_key_types(key_types: dict, properties: Mapping[str, object]) -> dict:
    """Fold one entity's properties into ``key_types`` (mutated and returned)."""
    for prop, value in properties.items():
        if value is None:
            continue
        observed = concrete_type(value)
        stored = key_types.get(prop)
        if stored is None:
            key_types[prop] = observed
            continue
        if stored is HETEROGENEOUS or stored == observed:
            continue
        if _is_number(stored) and _is_number(observed):
            key_types[prop] = _widen(prop, stored, observed)
            continue
        key_types[prop] = HETEROGENEOUS
    return key_types


def _widen(prop, stored, observed):
    if stored not in NUMBER_TYPES or observed not in NUMBER_TYPES:
        raise WideningError(prop, stored, observed)
    for t in NUMBER_TYPES:
        if t is stored or t is observed:
            return t


def collect_prop_types(graph, entities: Iterable) -> dict:
    key_types: dict = {}
    for entity in entities:
        update_key_types(key_types, graph.properties(entity))
    return key_types


def collect_prop_types_for_nodes(graph) -> dict:
    return collect_prop_types(graph, graph.nodes())


def collect_prop_types_for_relationships(graph) -> dict:
    return collect_prop_types(graph, graph.relationships())


def type_for(value_type, allowed: Optional[Iterable[str]] = None) -> Optional[str]:
    """
    Export type name for a recorded type.

    Parameters
    ----------
    value_type : type | ArrayType | HETEROGENEOUS
        Entry of a type map built by :func:`update_key_types`.
    allowed : iterable of str, optional
        Names the target format understands (e.g. ``GRAPHML_ALLOWED``).

    Returns
    -------
    str | None
        Lowercase type name, ``"int"`` for numeric types the format lacks,
        or ``None`` when the key should be written untyped / omitted.
    """
    if value_type is HETEROGENEOUS or value_type is None:
        return None
    if isinstance(value_type, ArrayType):
        return type_for(value_type.element, allowed)
    name = _TYPE_NAMES.get(value_type) or value_type.__name__.lower()
    if name == "integer":
        name = "int"
    if allowed is None or name in allowed:
        return name
    if _is_number(value_type):
        return "int"
    return None


def labels_string(graph, node) -> str:
    """``":A:B"`` for a node labeled A and B, ``""`` when unlabeled."""
    labels = graph.labels(node)
    if not labels:
        return ""
    return ":" + ":".join(labels)
