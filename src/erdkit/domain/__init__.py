"""Domain graph for erdkit.

The graph is produced outside the filtering core, either programmatically or
from a JSON domain document, and is read-only once built.
"""

from .loader import DomainDocument, domain_from_dict, load_domain
from .models import (
    Attribute,
    Cardinality,
    Domain,
    Entity,
    Relationship,
    Specialization,
    SpecializationKind,
)

__all__ = [
    "Attribute",
    "Cardinality",
    "Domain",
    "DomainDocument",
    "Entity",
    "Relationship",
    "Specialization",
    "SpecializationKind",
    "domain_from_dict",
    "load_domain",
]
