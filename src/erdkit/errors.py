"""Error taxonomy for erdkit."""


class ErdError(Exception):
    """Base class for all erdkit errors."""
    pass


class EmptyResultError(ErdError):
    """Raised when entity filtering leaves nothing to draw."""

    def __init__(self, message: str = "No entities found; verify your model definitions first."):
        super().__init__(message)


class ConfigurationError(ErdError):
    """Raised when diagram options are malformed."""
    pass


class ReferentialInconsistencyError(ErdError):
    """Raised when a filtered edge references an entity outside the entity view."""

    def __init__(self, kind: str, edge: object, missing: str):
        self.kind = kind
        self.edge = edge
        self.missing = missing
        super().__init__(f"{kind} {edge} references entity '{missing}' which is not in the filtered entities")


class DomainError(ErdError):
    """Raised when a domain graph or domain document is malformed."""
    pass
