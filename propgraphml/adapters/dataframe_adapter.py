from __future__ import annotations

from typing import Dict, Iterable, Optional

import numpy as np
import polars as pl

from ..io.meta import (
    ArrayType,
    collect_prop_types_for_nodes,
    collect_prop_types_for_relationships,
    labels_string,
    type_for,
)

__all__ = ["to_dataframes", "polars_dtype"]

_POLARS_TYPES = {
    "boolean": pl.Boolean,
    "byte": pl.Int8,
    "short": pl.Int16,
    "int": pl.Int32,
    "long": pl.Int64,
    "float": pl.Float32,
    "double": pl.Float64,
    "string": pl.Utf8,
}


def polars_dtype(value_type, allowed: Optional[Iterable[str]] = None):
    """Polars dtype for a reconciled property type.

    Heterogeneous keys (and keys the allow-list drops) become ``pl.Utf8``;
    type names polars has no counterpart for return ``None`` (inferred).
    """
    name = type_for(value_type, allowed)
    if name is None:
        return pl.Utf8
    dtype = _POLARS_TYPES.get(name)
    if dtype is None:
        return None
    if isinstance(value_type, ArrayType):
        return pl.List(dtype)
    return dtype


def _to_python(v):
    if isinstance(v, np.generic):
        return v.item()
    if isinstance(v, np.ndarray):
        return v.tolist()
    if isinstance(v, (list, tuple)):
        return [_to_python(x) for x in v]
    return v


_CASTS = {
    "boolean": bool,
    "byte": int,
    "short": int,
    "int": int,
    "long": int,
    "float": float,
    "double": float,
    "string": str,
}


_INTEGER_NAMES = {"byte", "short", "int", "long"}


def _has_fraction(values, is_list) -> bool:
    for v in values:
        for x in (v if is_list and v is not None else [v]):
            if isinstance(x, float) and not x.is_integer():
                return True
    return False


def _cell(v, name, is_list):
    # widened columns mix numeric types, cast to the column type
    v = _to_python(v)
    if name is None:
        return str(v)
    cast = _CASTS.get(name)
    if cast is None:
        return v
    if is_list:
        return [None if x is None else cast(x) for x in v]
    return cast(v)


def _property_columns(graph, entities, key_types, allowed):
    columns = {}
    for key, value_type in key_types.items():
        dtype = polars_dtype(value_type, allowed)
        name = type_for(value_type, allowed)
        is_list = isinstance(value_type, ArrayType) and name is not None
        raw = [_to_python(graph.get_property(entity, key)) for entity in entities]
        # an integer column widened over non-integral floats would truncate them
        if name in _INTEGER_NAMES and _has_fraction(raw, is_list):
            name = "double"
            dtype = pl.List(pl.Float64) if is_list else pl.Float64
        values = [None if v is None else _cell(v, name, is_list) for v in raw]
        columns[key] = pl.Series(key, values, dtype=dtype)
    return columns


def to_dataframes(graph, *, allowed: Optional[Iterable[str]] = None,
                  include_labels: bool = True) -> Dict[str, pl.DataFrame]:
    """
    Export a PropertyGraph to Polars DataFrames.

    Property columns take the dtype of the key's reconciled type (see
    :func:`propgraphml.io.meta.update_key_types`), so a key seen as both
    ``int32`` and ``int64`` becomes one ``Int64`` column and a heterogeneous
    key becomes a string column. An integer column that also holds
    non-integral floats is exported as ``Float64`` instead of truncating.

    Args:
        graph: PropertyGraph instance to export
        allowed: Optional allow-list of type names (e.g. GRAPHML_ALLOWED)
        include_labels: Add a ``labels`` column (``":A:B"``) to the nodes table

    Returns:
        Dictionary with ``nodes`` and ``relationships`` DataFrames
    """
    result = {}

    # 1. Nodes table
    nodes = list(graph.nodes())
    data = {"node_id": pl.Series("node_id", [n.id for n in nodes], dtype=pl.Int64)}
    if include_labels:
        data["labels"] = pl.Series("labels", [labels_string(graph, n) for n in nodes], dtype=pl.Utf8)
    for key, col in _property_columns(graph, nodes, collect_prop_types_for_nodes(graph), allowed).items():
        if key in data:
            key = f"prop.{key}"
        data[key] = col.alias(key)
    result["nodes"] = pl.DataFrame(data)

    # 2. Relationships table
    rels = list(graph.relationships())
    ends = [graph.endpoints(r) for r in rels]
    data = {
        "rel_id": pl.Series("rel_id", [r.id for r in rels], dtype=pl.Int64),
        "source": pl.Series("source", [s.id for s, _ in ends], dtype=pl.Int64),
        "target": pl.Series("target", [t.id for _, t in ends], dtype=pl.Int64),
        "type": pl.Series("type", [graph.relationship_type(r) for r in rels], dtype=pl.Utf8),
    }
    for key, col in _property_columns(graph, rels, collect_prop_types_for_relationships(graph), allowed).items():
        if key in data:
            key = f"prop.{key}"
        data[key] = col.alias(key)
    result["relationships"] = pl.DataFrame(data)

    return result
