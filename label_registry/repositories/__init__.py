"""
Repository layer for the label registry.

The registry is a single JSON document; see ``label_store`` for the
load/save contract.
"""

from label_registry.repositories.label_store import (
    JsonLabelStore,
    RegistryDocument,
)

__all__ = [
    "JsonLabelStore",
    "RegistryDocument",
]
