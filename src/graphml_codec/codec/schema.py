"""Validation tables scoped to a single decode pass."""

from dataclasses import dataclass, field
from typing import Dict, Set, Tuple, Union

from graphml_codec.model import Key, Kind
from graphml_codec.shared import DuplicateIDError, DuplicateKeyError, UnknownAttributeError


@dataclass
class SchemaContext:
    """Declared keys and claimed ids for one decode call.

    Keys declared for ``all`` live in their own namespace and are visible from
    every element kind; scoped keys are indexed by ``(id, kind)``. Element ids
    are unique across the whole document regardless of element kind.
    """

    keys_all: Dict[str, Key] = field(default_factory=dict)
    keys: Dict[Tuple[str, Union[Kind, str]], Key] = field(default_factory=dict)
    ids: Set[str] = field(default_factory=set)

    def declare_key(self, key: Key) -> None:
        """Register a key declaration.

        Raises:
            DuplicateKeyError: If the id is already declared for the same scope
        """
        if key.for_ == Kind.ALL:
            if key.id in self.keys_all:
                raise DuplicateKeyError(
                    f"redefinition of key {key.id!r}", element="key", identifier=key.id
                )
            self.keys_all[key.id] = key
            return

        scoped = (key.id, key.for_)
        if scoped in self.keys:
            raise DuplicateKeyError(
                f"redefinition of key {key.id!r} for {getattr(key.for_, 'value', key.for_)}",
                element="key",
                identifier=key.id,
            )
        self.keys[scoped] = key

    def resolve_key(self, key_id: str, kind: Kind) -> Key:
        """Find the key a data element of ``kind`` refers to.

        Raises:
            UnknownAttributeError: If no key is declared for the kind or for all
        """
        key = self.keys.get((key_id, kind))
        if key is None:
            key = self.keys_all.get(key_id)
        if key is None:
            raise UnknownAttributeError(
                f"unexpected attr for {kind.value}: {key_id!r}",
                element=kind.value,
                identifier=key_id,
            )
        return key

    def claim_id(self, element_id: str, element: str) -> None:
        """Reserve an element id document-wide; empty ids are not tracked.

        Raises:
            DuplicateIDError: If the id was already used by any element
        """
        if not element_id:
            return
        if element_id in self.ids:
            raise DuplicateIDError(
                f"redefinition of id {element_id!r}", element=element, identifier=element_id
            )
        self.ids.add(element_id)
