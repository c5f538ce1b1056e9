"""
Label service

Batch generation, editing and deletion of labels. Every write runs inside a
single store transaction: validation failures raise before anything is
saved, so a batch either lands completely or not at all.
"""

import logging
from typing import Any, List, Optional

from label_registry.repositories.label_store import JsonLabelStore, RegistryDocument
from label_registry.schemas.label import Label, LabelGenerateResponse
from label_registry.schemas.state import RegistryState
from label_registry.services.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from label_registry.utils.date_utils import utc_now_iso

logger = logging.getLogger(__name__)

MIN_BATCH_SIZE = 1
MAX_BATCH_SIZE = 999


def validate_batch_size(count: Optional[int]) -> int:
    """Batch size for a generation request; a missing count means 1."""
    if count is None:
        return 1
    if count < MIN_BATCH_SIZE or count > MAX_BATCH_SIZE:
        raise ValidationError(
            f"count debe estar entre {MIN_BATCH_SIZE} y {MAX_BATCH_SIZE}"
        )
    return count


def _next_label_id(labels: List[Label]) -> int:
    return max([0] + [label.id for label in labels]) + 1


def _find_label(document: RegistryDocument, label_id: int) -> Label:
    for label in document.labels:
        if label.id == label_id:
            return label
    raise NotFoundError("Etiqueta no encontrada")


def list_labels(store: JsonLabelStore) -> List[Label]:
    """All labels in insertion order."""
    return store.load().labels


def generate_labels(
    store: JsonLabelStore,
    sequencer,
    count: Optional[int] = None,
    item: Any = None,
) -> LabelGenerateResponse:
    """
    Generate a batch of labels with consecutive codes.

    Args:
        store: Registry document store
        sequencer: DerivedSequencer or StoredSequencer
        count: Batch size, 1..999 (default 1)
        item: Optional display name shared by the whole batch;
            non-string values are ignored

    Returns:
        The added labels and the state after the batch

    Raises:
        ValidationError: If count is out of range
        ConflictError: If a generated code is already in use
    """
    batch_size = validate_batch_size(count)
    art = item.strip() if isinstance(item, str) else ""
    created_at = utc_now_iso()

    with store.transaction() as document:
        codes, default_names, new_state = sequencer.allocate(
            document.labels, document.state, batch_size
        )

        used_codes = {label.code for label in document.labels}
        clashes = [code for code in codes if code in used_codes]
        if clashes:
            raise ConflictError(f"code duplicado: {clashes[0]}")

        first_id = _next_label_id(document.labels)
        added = [
            Label(
                id=first_id + offset,
                code=code,
                art=art or default_name,
                created_at=created_at,
            )
            for offset, (code, default_name) in enumerate(zip(codes, default_names))
        ]

        document.labels.extend(added)
        if new_state is not None:
            document.state = new_state
        state = sequencer.current_state(document.labels, document.state)

    logger.info(f"Generated {len(added)} label(s): {added[0].code} .. {added[-1].code}")
    return LabelGenerateResponse(added=added, state=state)


def update_label(
    store: JsonLabelStore,
    label_id: int,
    art: Optional[str] = None,
    code: Optional[str] = None,
) -> Label:
    """
    Edit a label's display name and/or code.

    Args:
        store: Registry document store
        label_id: Label id
        art: New display name (trimmed), if given
        code: New code (trimmed), if given

    Returns:
        The updated label

    Raises:
        NotFoundError: If no label has this id
        ValidationError: If code is empty after trimming
        ConflictError: If code is used by a different label
    """
    with store.transaction() as document:
        label = _find_label(document, label_id)

        if art is not None:
            label.art = art.strip()

        if code is not None:
            new_code = code.strip()
            if not new_code:
                raise ValidationError("code no puede estar vacío")
            if any(
                other.code == new_code and other.id != label_id
                for other in document.labels
            ):
                raise ConflictError("code duplicado")
            label.code = new_code

    logger.info(f"Updated label {label_id}")
    return label


def delete_label(store: JsonLabelStore, label_id: int) -> None:
    """
    Remove a label.

    Raises:
        NotFoundError: If no label has this id
    """
    with store.transaction() as document:
        remaining = [label for label in document.labels if label.id != label_id]
        if len(remaining) == len(document.labels):
            raise NotFoundError("Etiqueta no encontrada")
        document.labels = remaining

    logger.info(f"Deleted label {label_id}")


def delete_all_labels(store: JsonLabelStore, sequencer) -> RegistryState:
    """
    Remove every label and reset the stored counter to 1.

    Only available in stored mode; derived mode has no counter to reset.

    Raises:
        NotFoundError: In derived mode
    """
    if not sequencer.stored:
        raise NotFoundError("Operación no disponible en modo derivado")

    with store.transaction() as document:
        removed = len(document.labels)
        document.labels = []
        document.state = document.state.model_copy(update={"next": 1})
        state = document.state

    logger.info(f"Deleted all labels ({removed}), counter reset to 1")
    return state
