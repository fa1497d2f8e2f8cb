from .structure import EntityKind, EntityRef
from .types import ScalarType, parse_list
from .graph import PropertyGraph

__all__ = ["EntityKind", "EntityRef", "ScalarType", "parse_list", "PropertyGraph"]
