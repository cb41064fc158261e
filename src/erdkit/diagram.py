"""Diagram pipeline: drive a renderer variant over the filtered domain views.

A renderer variant is a plain value holding up to five callbacks. Every
callback receives the running ``Diagram`` as its first argument; per-run
renderer state lives in ``diagram.state``, which is fresh for each run.

A minimal variant that emits yUML-style text looks like::

    def add_edge(diagram, relationship):
        diagram.state.edges.append(f"[{relationship.source}] -> [{relationship.destination}]")

    EDGES = DiagramVariant(
        name="edges",
        setup=lambda diagram: setattr(diagram.state, "edges", []),
        each_relationship=add_edge,
        save=lambda diagram: "\\n".join(diagram.state.edges),
    )

    create(EDGES, domain, {"indirect": False})
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any

from .config import DEFAULT_OPTIONS, DiagramOptions, merge_options
from .domain.models import Attribute, Domain, Entity, Relationship, Specialization
from .errors import ReferentialInconsistencyError
from .filters import filter_attributes, filter_entities, filter_relationships, filter_specializations

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagramVariant:
    """Callbacks that make up a renderer. Missing hooks are no-ops."""
    name: str = "diagram"
    setup: Callable[["Diagram"], None] | None = None
    each_entity: Callable[["Diagram", Entity, tuple[Attribute, ...]], None] | None = None
    each_specialization: Callable[["Diagram", Specialization], None] | None = None
    each_relationship: Callable[["Diagram", Relationship], None] | None = None
    save: Callable[["Diagram"], Any] | None = None


@dataclass(frozen=True)
class DiagramViews:
    """The filtered views traversed by a diagram run."""
    entities: tuple[Entity, ...]
    specializations: tuple[Specialization, ...]
    relationships: tuple[Relationship, ...]


def verify_referential_closure(views: DiagramViews) -> None:
    """Check that every edge in the views connects entities of the entity view.

    Raises:
        ReferentialInconsistencyError: On the first dangling reference
    """
    included = set(views.entities)

    for relationship in views.relationships:
        for endpoint in (relationship.source, relationship.destination):
            if endpoint not in included:
                raise ReferentialInconsistencyError("Relationship", relationship, endpoint.name)

    for specialization in views.specializations:
        for endpoint in (specialization.generalized, specialization.specialized):
            if endpoint not in included:
                raise ReferentialInconsistencyError("Specialization", specialization, endpoint.name)


class Diagram:
    """A single diagram run of a renderer variant over a domain."""

    def __init__(
        self,
        variant: DiagramVariant,
        domain: Domain,
        options: DiagramOptions | Mapping[str, Any] | None = None,
        defaults: DiagramOptions = DEFAULT_OPTIONS,
    ):
        self.variant = variant
        self.domain = domain
        self.options = merge_options(defaults, options)
        self.state = SimpleNamespace()

    def build_views(self) -> DiagramViews:
        """Compute the filtered views and close them over the entity view.

        Relationships and specializations touching an entity that was
        filtered out are dropped before traversal, each with a warning.
        """
        entities = filter_entities(self.domain, self.options)
        included = set(entities)

        relationships = []
        for relationship in filter_relationships(self.domain, self.options):
            if relationship.source in included and relationship.destination in included:
                relationships.append(relationship)
            else:
                self.warn(f"Skipping relationship {relationship}: endpoint filtered out")

        specializations = []
        for specialization in filter_specializations(self.domain, self.options):
            if specialization.generalized in included and specialization.specialized in included:
                specializations.append(specialization)
            else:
                self.warn(f"Skipping specialization {specialization}: endpoint filtered out")

        views = DiagramViews(tuple(entities), tuple(specializations), tuple(relationships))
        verify_referential_closure(views)
        return views

    def generate(self) -> None:
        """Run the traversal callbacks without saving.

        Order is fixed: setup, every entity, every specialization, then every
        relationship, so nodes are declared before any edge referencing them.
        """
        views = self.build_views()
        logger.info(
            f"Generating {self.variant.name} diagram with {len(views.entities)} entities, "
            f"{len(views.specializations)} specializations and {len(views.relationships)} relationships"
        )

        if self.variant.setup:
            self.variant.setup(self)

        if self.variant.each_entity:
            for entity in views.entities:
                self.variant.each_entity(self, entity, filter_attributes(entity, self.options))

        if self.variant.each_specialization:
            for specialization in views.specializations:
                self.variant.each_specialization(self, specialization)

        if self.variant.each_relationship:
            for relationship in views.relationships:
                self.variant.each_relationship(self, relationship)

    def save(self) -> Any:
        """Materialize the output; returns whatever the variant's save hook returns."""
        if self.variant.save:
            return self.variant.save(self)
        return None

    def create(self) -> Any:
        """Generate and save the diagram, returning the result of ``save``."""
        self.generate()
        return self.save()

    def warn(self, message: str) -> None:
        """Surface an advisory message unless warnings are disabled."""
        if self.options.warn:
            logger.warning(message)


def create(
    variant: DiagramVariant,
    domain: Domain,
    options: DiagramOptions | Mapping[str, Any] | None = None,
    defaults: DiagramOptions = DEFAULT_OPTIONS,
) -> Any:
    """Create a diagram of ``domain`` with ``variant`` and return the saved artifact.

    Args:
        variant: Renderer callbacks
        domain: Domain graph to draw
        options: Per-run overrides merged on top of ``defaults``
        defaults: Base options, usually loaded from configuration

    Raises:
        ConfigurationError: If the options are invalid
        EmptyResultError: If no entity survives filtering
    """
    return Diagram(variant, domain, options, defaults).create()
