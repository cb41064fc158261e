"""erdkit - Entity-relationship diagrams from relational domain models.

erdkit filters a domain graph of entities, relationships and specializations
down to the subset requested by the diagram options and drives a renderer
variant over the result.
"""

__version__ = "0.1.0"
__description__ = "Entity-relationship diagrams from relational domain models"

from erdkit.config import DEFAULT_OPTIONS, AttributeCategory, DiagramOptions, merge_options
from erdkit.diagram import Diagram, DiagramVariant, create
from erdkit.errors import (
    ConfigurationError,
    DomainError,
    EmptyResultError,
    ErdError,
    ReferentialInconsistencyError,
)

__all__ = [
    "__version__",
    "__description__",
    "AttributeCategory",
    "ConfigurationError",
    "DEFAULT_OPTIONS",
    "Diagram",
    "DiagramOptions",
    "DiagramVariant",
    "DomainError",
    "EmptyResultError",
    "ErdError",
    "ReferentialInconsistencyError",
    "create",
    "merge_options",
]
