"""Domain graph models: entities, attributes, relationships and specializations.

The graph is built once per run and treated as read-only afterwards. Entities
are bound to their owning ``Domain`` when the domain is constructed, which is
what lets them answer questions about their incident edges.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from ..errors import DomainError

logger = logging.getLogger(__name__)

TIMESTAMP_NAMES = frozenset({"created_at", "created_on", "updated_at", "updated_on"})


class Cardinality(str, Enum):
    """Relationship cardinality."""
    ONE_TO_ONE = "one_to_one"
    ONE_TO_MANY = "one_to_many"
    MANY_TO_MANY = "many_to_many"


class SpecializationKind(str, Enum):
    """Kind of specialization edge."""
    INHERITANCE = "inheritance"  # single table inheritance
    POLYMORPHIC = "polymorphic"  # polymorphic association


@dataclass(frozen=True)
class Attribute:
    """A column of an entity."""
    name: str
    type: str
    primary_key: bool = False
    foreign_key: bool = False
    inheritance: bool = False  # STI discriminator column

    @property
    def timestamp(self) -> bool:
        return self.name in TIMESTAMP_NAMES

    @property
    def content(self) -> bool:
        """Plain data column: not a key, timestamp or discriminator."""
        return not (self.primary_key or self.foreign_key or self.timestamp or self.inheritance)

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Entity:
    """A modeled table.

    Equality and hashing are by identity; names are unique within a domain.
    """
    name: str
    attributes: tuple[Attribute, ...] = ()
    domain: Domain | None = field(default=None, repr=False)

    def __post_init__(self):
        self.attributes = tuple(self.attributes)

    def _require_domain(self) -> Domain:
        if self.domain is None:
            raise DomainError(f"Entity '{self.name}' is not bound to a domain")
        return self.domain

    @property
    def relationships(self) -> tuple[Relationship, ...]:
        return self._require_domain().relationships_by_entity_name(self.name)

    @property
    def specializations(self) -> tuple[Specialization, ...]:
        return self._require_domain().specializations_by_entity_name(self.name)

    @property
    def specialized(self) -> bool:
        """True if this entity is the specific side of a specialization."""
        return any(s.specialized is self for s in self.specializations)

    @property
    def generalized(self) -> bool:
        """True if this entity is the general side of a specialization."""
        return any(s.generalized is self for s in self.specializations)

    @property
    def disconnected(self) -> bool:
        return not self.relationships

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Relationship:
    """An association between two entities."""
    source: Entity
    destination: Entity
    cardinality: Cardinality = Cardinality.ONE_TO_MANY
    indirect: bool = False  # mediated through another entity ("through" association)

    @property
    def direct(self) -> bool:
        return not self.indirect

    @property
    def one_to_one(self) -> bool:
        return self.cardinality == Cardinality.ONE_TO_ONE

    @property
    def one_to_many(self) -> bool:
        return self.cardinality == Cardinality.ONE_TO_MANY

    @property
    def many_to_many(self) -> bool:
        return self.cardinality == Cardinality.MANY_TO_MANY

    def __str__(self) -> str:
        return f"{self.source.name} -> {self.destination.name}"


@dataclass(frozen=True)
class Specialization:
    """An inheritance or polymorphic edge from a general to a specific entity."""
    generalized: Entity
    specialized: Entity
    kind: SpecializationKind = SpecializationKind.INHERITANCE

    def __post_init__(self):
        if self.generalized is self.specialized:
            raise DomainError(f"Specialization endpoints must differ, got '{self.generalized.name}' twice")

    @property
    def inheritance(self) -> bool:
        return self.kind == SpecializationKind.INHERITANCE

    @property
    def polymorphic(self) -> bool:
        return self.kind == SpecializationKind.POLYMORPHIC

    def __str__(self) -> str:
        return f"{self.generalized.name} <|- {self.specialized.name}"


class Domain:
    """Root aggregate owning the full entity, relationship and specialization sets."""

    def __init__(
        self,
        name: str = "Domain",
        entities: Iterable[Entity] = (),
        relationships: Iterable[Relationship] = (),
        specializations: Iterable[Specialization] = (),
    ):
        self.name = name
        self.entities: tuple[Entity, ...] = tuple(entities)
        self.relationships: tuple[Relationship, ...] = tuple(relationships)
        self.specializations: tuple[Specialization, ...] = tuple(specializations)

        self._entities_by_name: dict[str, Entity] = {}
        for entity in self.entities:
            if entity.name in self._entities_by_name:
                raise DomainError(f"Duplicate entity name '{entity.name}' in domain '{name}'")
            if entity.domain is not None and entity.domain is not self:
                raise DomainError(f"Entity '{entity.name}' already belongs to domain '{entity.domain.name}'")
            self._entities_by_name[entity.name] = entity

        self._relationships_by_name: dict[str, list[Relationship]] = {e.name: [] for e in self.entities}
        for relationship in self.relationships:
            for endpoint in self._distinct(relationship.source, relationship.destination):
                self._check_member(endpoint, "Relationship", relationship)
                self._relationships_by_name[endpoint.name].append(relationship)

        self._specializations_by_name: dict[str, list[Specialization]] = {e.name: [] for e in self.entities}
        for specialization in self.specializations:
            for endpoint in (specialization.generalized, specialization.specialized):
                self._check_member(endpoint, "Specialization", specialization)
                self._specializations_by_name[endpoint.name].append(specialization)

        # Bind only once every edge has been checked
        for entity in self.entities:
            entity.domain = self

        logger.debug(
            f"Built domain '{name}' with {len(self.entities)} entities, "
            f"{len(self.relationships)} relationships and {len(self.specializations)} specializations"
        )

    @staticmethod
    def _distinct(source: Entity, destination: Entity) -> tuple[Entity, ...]:
        # A self-referencing relationship is incident to its entity once
        return (source,) if source is destination else (source, destination)

    def _check_member(self, entity: Entity, kind: str, edge: object) -> None:
        if self._entities_by_name.get(entity.name) is not entity:
            raise DomainError(f"{kind} {edge} references entity '{entity.name}' outside domain '{self.name}'")

    def entity_by_name(self, name: str) -> Entity | None:
        return self._entities_by_name.get(name)

    def relationships_by_entity_name(self, name: str) -> tuple[Relationship, ...]:
        return tuple(self._relationships_by_name.get(name, ()))

    def specializations_by_entity_name(self, name: str) -> tuple[Specialization, ...]:
        return tuple(self._specializations_by_name.get(name, ()))

    def __repr__(self) -> str:
        return f"Domain(name={self.name!r}, entities={len(self.entities)})"
