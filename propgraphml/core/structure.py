from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntityKind(str, Enum):
    """Entity kind (NODE, RELATIONSHIP).

    Attributes:
        NODE: A graph node, may carry labels
        RELATIONSHIP: A typed, directed relationship between two nodes
    """

    NODE = "node"
    RELATIONSHIP = "relationship"

    @classmethod
    def for_owner(cls, text):
        """Map a GraphML ``for`` attribute to a kind; only "edge" means RELATIONSHIP."""
        if text is not None and text.strip().lower() == "edge":
            return cls.RELATIONSHIP
        return cls.NODE


@dataclass(frozen=True)
class EntityRef:
    """Handle of a node or relationship inside a PropertyGraph."""

    kind: EntityKind
    id: int

    @property
    def is_node(self) -> bool:
        return self.kind is EntityKind.NODE

    def __repr__(self):
        return f"<{self.kind.value} {self.id}>"
