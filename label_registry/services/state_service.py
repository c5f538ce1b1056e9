"""
Numbering state read/patch.

Derived mode recomputes the state from the labels and ignores patches
(prefix and digits come from the environment). Stored mode lets callers
change the persisted prefix, digits and counter.
"""

import logging
import math
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from label_registry.repositories.label_store import JsonLabelStore
from label_registry.schemas.state import DerivedState, RegistryState, StatePatchRequest
from label_registry.services.errors import ValidationError

logger = logging.getLogger(__name__)


def _non_negative_int(name: str, value: float) -> int:
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{name} debe ser un número mayor o igual a 0")
    return int(value)


def _parse_patch(patch: Any) -> StatePatchRequest:
    if isinstance(patch, StatePatchRequest):
        return patch
    if not isinstance(patch, dict):
        raise ValidationError("El cuerpo debe ser un objeto JSON")
    try:
        return StatePatchRequest.model_validate(patch)
    except PydanticValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error.get("loc", ()))
        raise ValidationError(f"{location}: {error.get('msg', 'valor inválido')}") from e


def get_state(store: JsonLabelStore, sequencer) -> Union[RegistryState, DerivedState]:
    document = store.load()
    return sequencer.current_state(document.labels, document.state)


def patch_state(
    store: JsonLabelStore, sequencer, patch: Any
) -> Union[RegistryState, DerivedState]:
    """
    Apply a partial update to the stored state.

    In derived mode the patch is ignored, whatever its shape, and the
    current derived state is returned. In stored mode ``patch`` (a
    StatePatchRequest or the raw request body) is validated before the
    document is touched.

    Raises:
        ValidationError: If the body is not an object, a field has the wrong
            type, or digits/next is negative or not finite
    """
    if not sequencer.stored or patch is None:
        return get_state(store, sequencer)

    patch = _parse_patch(patch)

    changes: dict = {}
    if patch.prefix is not None:
        changes["prefix"] = patch.prefix.strip()
    if patch.digits is not None:
        changes["digits"] = _non_negative_int("digits", patch.digits)
    if patch.next is not None:
        changes["next"] = _non_negative_int("next", patch.next)

    if not changes:
        return get_state(store, sequencer)

    with store.transaction() as document:
        document.state = document.state.model_copy(update=changes)
        state = document.state

    logger.info(f"State updated: {changes}")
    return state
