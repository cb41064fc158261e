"""Filter engine: reduce a domain graph to the views handed to a renderer.

All functions are pure. They read the domain and the options and return new
tuples in domain order; nothing in the domain is modified.

Entity inclusion is decided by ``only`` and ``exclude`` alone. The
``inheritance`` and ``polymorphism`` flags gate specializations, and
``disconnected`` does not remove entities. Keeping relationships and
specializations consistent with a narrowed entity view is handled by the
diagram pipeline.
"""

import logging
from collections.abc import Callable, Collection

from .config import AttributeCategory, DiagramOptions
from .domain.models import Attribute, Domain, Entity, Relationship, Specialization
from .errors import EmptyResultError

logger = logging.getLogger(__name__)

ATTRIBUTE_PREDICATES: dict[AttributeCategory, Callable[[Attribute], bool]] = {
    AttributeCategory.CONTENT: lambda attribute: attribute.content,
    AttributeCategory.PRIMARY_KEYS: lambda attribute: attribute.primary_key,
    AttributeCategory.FOREIGN_KEYS: lambda attribute: attribute.foreign_key,
    AttributeCategory.TIMESTAMPS: lambda attribute: attribute.timestamp,
    AttributeCategory.INHERITANCE: lambda attribute: attribute.inheritance,
}


def entity_is_related(entity: Entity, focus_names: Collection[str]) -> bool:
    """Check whether an entity is within one hop of the focus set.

    An entity is related if its own name is in the focus set, if any of its
    relationships has a source or destination in the focus set, or if any of
    its specializations has a generalized or specialized side in the focus
    set. The closure is not transitive.
    """
    if entity.name in focus_names:
        return True

    for relationship in entity.relationships:
        if relationship.source.name in focus_names or relationship.destination.name in focus_names:
            return True

    for specialization in entity.specializations:
        if specialization.generalized.name in focus_names or specialization.specialized.name in focus_names:
            return True

    return False


def filter_entities(domain: Domain, options: DiagramOptions) -> tuple[Entity, ...]:
    """Select the entities to draw.

    Applies ``only`` (one-hop relatedness to the focus set) and then
    ``exclude``. With neither set, every entity of the domain is returned.

    Raises:
        EmptyResultError: If no entity survives filtering
    """
    entities = domain.entities

    if options.only:
        _warn_unknown_names(domain, options.only, "only", options.warn)
        entities = tuple(entity for entity in entities if entity_is_related(entity, options.only))
        logger.debug(f"{len(entities)} entities related to {sorted(options.only)}")

    if options.exclude:
        _warn_unknown_names(domain, options.exclude, "exclude", options.warn)
        entities = tuple(entity for entity in entities if entity.name not in options.exclude)
        logger.debug(f"{len(entities)} entities left after excluding {sorted(options.exclude)}")

    if not entities:
        raise EmptyResultError()

    return entities


def filter_relationships(domain: Domain, options: DiagramOptions) -> tuple[Relationship, ...]:
    """Select relationships, dropping indirect ones unless ``indirect`` is set."""
    return tuple(
        relationship for relationship in domain.relationships
        if options.indirect or not relationship.indirect
    )


def filter_specializations(domain: Domain, options: DiagramOptions) -> tuple[Specialization, ...]:
    """Select specializations allowed by the ``inheritance`` and ``polymorphism`` flags."""
    return tuple(
        specialization for specialization in domain.specializations
        if not (specialization.inheritance and not options.inheritance)
        and not (specialization.polymorphic and not options.polymorphism)
    )


def filter_attributes(entity: Entity, options: DiagramOptions) -> tuple[Attribute, ...]:
    """Select the attributes of an entity matching the requested categories.

    Specialized entities show no attributes of their own; they are drawn
    on the generalized side.
    """
    if not options.attributes or entity.specialized:
        return ()

    predicates = [ATTRIBUTE_PREDICATES[category] for category in options.attributes]
    return tuple(
        attribute for attribute in entity.attributes
        if any(predicate(attribute) for predicate in predicates)
    )


def _warn_unknown_names(domain: Domain, names: Collection[str], option: str, warn: bool) -> None:
    if not warn:
        return
    for name in sorted(names):
        if domain.entity_by_name(name) is None:
            logger.warning(f"Ignoring unknown entity '{name}' in '{option}' option")
