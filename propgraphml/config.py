from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Literal, Mapping

__all__ = ["ImportConfig"]


# camelCase names accepted by from_mapping -> field names
_ALIASES = {
    "storeNodeIds": "store_node_ids",
    "defaultRelationshipType": "default_rel_type",
    "relType": "default_rel_type",
    "batchSize": "batch_size",
    "commitMultiplier": "commit_multiplier",
    "readLabels": "read_labels",
    "onError": "on_error",
}


@dataclass(frozen=True)
class ImportConfig:
    """
    Options of one GraphML import pass.

    ``batch_size`` counts units of work (one per node or edge). The batching
    collaborator commits every ``batch_size * commit_multiplier`` units; the
    x10 default reproduces the reference importer, which handed ten times the
    configured batch size to its transaction wrapper. Set
    ``commit_multiplier=1`` to commit exactly every ``batch_size`` units.
    """

    store_node_ids: bool = False
    default_rel_type: str = "UNKNOWN"
    batch_size: int = 40000
    commit_multiplier: int = 10
    read_labels: bool = False
    on_error: Literal["commit", "rollback"] = "commit"

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.commit_multiplier < 1:
            raise ValueError(f"commit_multiplier must be >= 1, got {self.commit_multiplier}")
        if self.on_error not in ("commit", "rollback"):
            raise ValueError(f"on_error must be 'commit' or 'rollback', got {self.on_error!r}")
        if not self.default_rel_type:
            raise ValueError("default_rel_type must be a non-empty string")

    @property
    def commit_size(self) -> int:
        return self.batch_size * self.commit_multiplier

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "ImportConfig":
        """Build a config from procedure-style options (camelCase or snake_case)."""
        names = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (mapping or {}).items():
            name = _ALIASES.get(key, key)
            if name not in names:
                raise ValueError(f"Unknown import option {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    def with_options(self, **changes) -> "ImportConfig":
        return replace(self, **changes)
