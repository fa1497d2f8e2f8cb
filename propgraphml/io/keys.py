"""GraphML ``<key>`` declarations and the per-document key registry."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..core.structure import EntityKind
from ..core.types import ScalarType, parse_list
from ..errors import FormatError

logger = logging.getLogger(__name__)

__all__ = ["AttributeKey", "KeyRegistry"]


@dataclass
class AttributeKey:
    """One ``<key>`` declaration.

    Attributes
    ----------
    id : str
        Document-local key id, referenced by ``<data key=...>``.
    name : str
        Property name written on entities.
    type : ScalarType
        Scalar type of single values (STRING when undeclared).
    list_type : ScalarType or None
        Element type when values are lists.
    owner : EntityKind
        Kind of entity the key applies to.
    default : Any
        Value used for blank ``<data>``; ``""`` for STRING keys.
    """

    id: str
    name: str
    type: ScalarType = ScalarType.STRING
    list_type: Optional[ScalarType] = None
    owner: EntityKind = EntityKind.NODE
    default: Any = None

    def __post_init__(self):
        if self.default is None and self.type is ScalarType.STRING:
            self.default = ""

    @classmethod
    def declare(cls, id, name=None, type_text=None, list_text=None, owner_text=None) -> "AttributeKey":
        """Build a key from the raw ``<key>`` attributes."""
        try:
            scalar = ScalarType.for_name(type_text)
            list_type = ScalarType.for_name(list_text) if list_text is not None else None
        except FormatError as exc:
            raise exc.with_context(key_id=id) from None
        return cls(
            id=id,
            name=name if name is not None else id,
            type=scalar,
            list_type=list_type,
            owner=EntityKind.for_owner(owner_text),
        )

    @classmethod
    def default_key(cls, id, owner: EntityKind) -> "AttributeKey":
        return cls(id=id, name=id, owner=owner)

    @property
    def is_list(self) -> bool:
        return self.list_type is not None

    def set_default(self, text):
        try:
            self.default = self.type.parse(text)
        except FormatError as exc:
            raise exc.with_context(key_id=self.id, kind=self.owner.value) from None

    def parse_value(self, text):
        if text is None or not text.strip():
            return self.default
        try:
            if self.list_type is not None:
                return parse_list(text, self.list_type)
            return self.type.parse(text)
        except FormatError as exc:
            raise exc.with_context(key_id=self.id, kind=self.owner.value) from None


class KeyRegistry:
    """Node and relationship keys of one document, by key id.

    Lives for exactly one import pass. Keys are expected to be declared
    before the ``<data>`` elements that use them; unknown ids resolve to a
    synthetic STRING key named after the id.
    """

    def __init__(self):
        self._keys = {EntityKind.NODE: {}, EntityKind.RELATIONSHIP: {}}

    def declare(self, id, name=None, type_text=None, list_text=None, owner_text=None) -> AttributeKey:
        key = AttributeKey.declare(id, name, type_text, list_text, owner_text)
        self.register(key)
        return key

    def register(self, key: AttributeKey):
        self._keys[key.owner][key.id] = key

    def set_default(self, id, text, owner: EntityKind = EntityKind.NODE):
        self._keys[owner][id].set_default(text)

    def resolve(self, id, kind: EntityKind) -> AttributeKey:
        key = self._keys[kind].get(id)
        if key is None:
            logger.debug("no <key> declared for %r on %s, reading it as string", id, kind.value)
            key = AttributeKey.default_key(id, kind)
        return key

    def parse_value(self, key: AttributeKey, text):
        return key.parse_value(text)

    def keys(self, kind: EntityKind) -> dict[str, AttributeKey]:
        return dict(self._keys[kind])

    def __len__(self):
        return sum(len(v) for v in self._keys.values())

    def __contains__(self, item):
        id, kind = item
        return id in self._keys[kind]
