"""yUML renderer variant: one line per direct relationship."""

from ..diagram import Diagram, DiagramVariant
from ..domain.models import Cardinality, Relationship

ARROWS = {
    Cardinality.ONE_TO_ONE: "1-1>",
    Cardinality.ONE_TO_MANY: "1-*>",
    Cardinality.MANY_TO_MANY: "*-*>",
}


def _each_relationship(diagram: Diagram, relationship: Relationship) -> None:
    if relationship.indirect:
        return
    arrow = ARROWS[relationship.cardinality]
    diagram.state.edges.append(f"[{relationship.source.name}] {arrow} [{relationship.destination.name}]")


YUML_VARIANT = DiagramVariant(
    name="yuml",
    setup=lambda diagram: setattr(diagram.state, "edges", []),
    each_relationship=_each_relationship,
    save=lambda diagram: "\n".join(diagram.state.edges),
)
