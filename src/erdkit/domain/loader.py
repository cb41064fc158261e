"""Load a domain graph from a JSON domain document."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import DomainError
from .models import Attribute, Cardinality, Domain, Entity, Relationship, Specialization, SpecializationKind

logger = logging.getLogger(__name__)


class AttributeDocument(BaseModel):
    """Attribute entry of a domain document."""
    name: str
    type: str = "string"
    primary_key: bool = Field(alias="primaryKey", default=False)
    foreign_key: bool = Field(alias="foreignKey", default=False)
    inheritance: bool = False

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class EntityDocument(BaseModel):
    """Entity entry of a domain document."""
    name: str
    attributes: list[AttributeDocument] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class RelationshipDocument(BaseModel):
    """Relationship entry of a domain document."""
    source: str
    destination: str
    cardinality: Cardinality = Cardinality.ONE_TO_MANY
    indirect: bool = False

    model_config = ConfigDict(extra="forbid")


class SpecializationDocument(BaseModel):
    """Specialization entry of a domain document."""
    generalized: str
    specialized: str
    kind: SpecializationKind = SpecializationKind.INHERITANCE

    model_config = ConfigDict(extra="forbid")


class DomainDocument(BaseModel):
    """Complete domain document."""
    name: str = "Domain"
    entities: list[EntityDocument] = Field(default_factory=list)
    relationships: list[RelationshipDocument] = Field(default_factory=list)
    specializations: list[SpecializationDocument] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def to_domain(self) -> Domain:
        """Build the read-only domain graph described by this document."""
        entities = [
            Entity(
                name=entity.name,
                attributes=tuple(
                    Attribute(
                        name=attr.name,
                        type=attr.type,
                        primary_key=attr.primary_key,
                        foreign_key=attr.foreign_key,
                        inheritance=attr.inheritance,
                    )
                    for attr in entity.attributes
                ),
            )
            for entity in self.entities
        ]
        by_name = {entity.name: entity for entity in entities}

        def lookup(name: str, kind: str) -> Entity:
            if name not in by_name:
                raise DomainError(f"{kind} references unknown entity '{name}'")
            return by_name[name]

        relationships = [
            Relationship(
                source=lookup(rel.source, "Relationship"),
                destination=lookup(rel.destination, "Relationship"),
                cardinality=rel.cardinality,
                indirect=rel.indirect,
            )
            for rel in self.relationships
        ]
        specializations = [
            Specialization(
                generalized=lookup(spec.generalized, "Specialization"),
                specialized=lookup(spec.specialized, "Specialization"),
                kind=spec.kind,
            )
            for spec in self.specializations
        ]

        return Domain(self.name, entities, relationships, specializations)


def domain_from_dict(data: dict[str, Any]) -> Domain:
    """Build a domain from an already-parsed domain document.

    Raises:
        DomainError: If the document does not validate or references unknown entities
    """
    try:
        document = DomainDocument(**data)
    except ValidationError as e:
        raise DomainError(f"Invalid domain document: {e}") from e
    return document.to_domain()


def load_domain(path: str | Path) -> Domain:
    """Load a domain from a JSON file.

    Args:
        path: Path to the domain document

    Returns:
        Domain: The validated domain graph

    Raises:
        FileNotFoundError: If the file does not exist
        DomainError: If the file is not valid JSON or not a valid domain document
    """
    path = Path(path)
    logger.info(f"Loading domain from {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DomainError(f"Invalid JSON in domain file {path}: {e}") from e

    if not isinstance(data, dict):
        raise DomainError(f"Domain file {path} must contain a JSON object")

    return domain_from_dict(data)
