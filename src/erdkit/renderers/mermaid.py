"""Mermaid erDiagram renderer variant."""

import json
import logging
import re

from ..diagram import Diagram, DiagramVariant
from ..domain.models import Attribute, Cardinality, Entity, Relationship, Specialization

logger = logging.getLogger(__name__)

CARDINALITY_ENDS = {
    Cardinality.ONE_TO_ONE: ("||", "||"),
    Cardinality.ONE_TO_MANY: ("||", "o{"),
    Cardinality.MANY_TO_MANY: ("}o", "o{"),
}

RELATIONSHIP_LABELS = {
    Cardinality.ONE_TO_ONE: "has one",
    Cardinality.ONE_TO_MANY: "has many",
    Cardinality.MANY_TO_MANY: "has and belongs to many",
}


def _safe_id(name: str) -> str:
    """Get ID safe for diagram rendering (alphanumeric, underscore and dash)."""
    return re.sub(r"[^a-zA-Z0-9_-]", "_", name)


def _escape_label(label: str) -> str:
    """Escape label for a quoted Mermaid relationship label."""
    if not label:
        return ""
    return label.replace('"', "'")


def _quote_title(title: str) -> str:
    """Quote a title as a YAML double-quoted scalar for the front-matter."""
    return json.dumps(title, ensure_ascii=False)


def _render_attribute(attribute: Attribute) -> str:
    keys = []
    if attribute.primary_key:
        keys.append("PK")
    if attribute.foreign_key:
        keys.append("FK")

    line = f"{_safe_id(attribute.type or 'string')} {_safe_id(attribute.name)}"
    if keys:
        line += " " + ", ".join(keys)
    return line


def _setup(diagram: Diagram) -> None:
    diagram.state.lines = []
    if diagram.options.title:
        diagram.state.lines.extend(["---", f"title: {_quote_title(diagram.options.title)}", "---"])
    diagram.state.lines.append("erDiagram")


def _each_entity(diagram: Diagram, entity: Entity, attributes: tuple[Attribute, ...]) -> None:
    lines = diagram.state.lines
    if not attributes:
        lines.append(f"    {_safe_id(entity.name)}")
        return

    lines.append(f"    {_safe_id(entity.name)} {{")
    for attribute in attributes:
        lines.append(f"        {_render_attribute(attribute)}")
    lines.append("    }")


def _each_specialization(diagram: Diagram, specialization: Specialization) -> None:
    label = "inherits" if specialization.inheritance else "polymorphic"
    diagram.state.lines.append(
        f"    {_safe_id(specialization.generalized.name)} ||--|| "
        f'{_safe_id(specialization.specialized.name)} : "{label}"'
    )


def _each_relationship(diagram: Diagram, relationship: Relationship) -> None:
    left, right = CARDINALITY_ENDS[relationship.cardinality]
    # Indirect relationships use the dotted non-identifying line
    line = ".." if relationship.indirect else "--"
    label = _escape_label(RELATIONSHIP_LABELS[relationship.cardinality])
    diagram.state.lines.append(
        f"    {_safe_id(relationship.source.name)} {left}{line}{right} "
        f'{_safe_id(relationship.destination.name)} : "{label}"'
    )


def _save(diagram: Diagram) -> str:
    logger.debug(f"Rendered {len(diagram.state.lines)} mermaid lines")
    return "\n".join(diagram.state.lines) + "\n"


MERMAID_VARIANT = DiagramVariant(
    name="mermaid",
    setup=_setup,
    each_entity=_each_entity,
    each_specialization=_each_specialization,
    each_relationship=_each_relationship,
    save=_save,
)
