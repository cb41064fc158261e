"""Renderer variants for erdkit.

Each variant is a ``DiagramVariant`` value; ``RENDERERS`` maps the format
names accepted by the CLI to their variants.
"""

from .mermaid import MERMAID_VARIANT
from .yuml import YUML_VARIANT

RENDERERS = {
    MERMAID_VARIANT.name: MERMAID_VARIANT,
    YUML_VARIANT.name: YUML_VARIANT,
}

FILE_EXTENSIONS = {
    MERMAID_VARIANT.name: ".mmd",
    YUML_VARIANT.name: ".yuml",
}

__all__ = [
    "FILE_EXTENSIONS",
    "MERMAID_VARIANT",
    "RENDERERS",
    "YUML_VARIANT",
]
