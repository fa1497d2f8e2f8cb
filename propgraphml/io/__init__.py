from .batch import BatchTransaction, ProgressReporter
from .graphml import GraphMLReader, from_graphml
from .keys import AttributeKey, KeyRegistry
from .meta import (
    GRAPHML_ALLOWED,
    HETEROGENEOUS,
    collect_prop_types_for_nodes,
    collect_prop_types_for_relationships,
    labels_string,
    type_for,
    update_key_types,
)

__all__ = [
    "AttributeKey",
    "BatchTransaction",
    "GRAPHML_ALLOWED",
    "GraphMLReader",
    "HETEROGENEOUS",
    "KeyRegistry",
    "ProgressReporter",
    "collect_prop_types_for_nodes",
    "collect_prop_types_for_relationships",
    "from_graphml",
    "labels_string",
    "type_for",
    "update_key_types",
]
