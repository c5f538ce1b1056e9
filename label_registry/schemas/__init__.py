from label_registry.schemas.label import (
    Label,
    LabelGenerateRequest,
    LabelUpdateRequest,
    LabelGenerateResponse,
)
from label_registry.schemas.state import (
    RegistryState,
    DerivedState,
    StatePatchRequest,
)

__all__ = [
    # Label schemas
    "Label",
    "LabelGenerateRequest",
    "LabelUpdateRequest",
    "LabelGenerateResponse",
    # State schemas
    "RegistryState",
    "DerivedState",
    "StatePatchRequest",
]
