"""
Label Routes - list, batch generation, edit and deletion
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from label_registry.dependencies.registry import get_sequencer, get_store
from label_registry.repositories.label_store import JsonLabelStore
from label_registry.schemas.label import (
    Label,
    LabelGenerateRequest,
    LabelUpdateRequest,
)
from label_registry.services.label_service import (
    delete_all_labels,
    delete_label,
    generate_labels,
    list_labels,
    update_label,
)

router = APIRouter(prefix="/api/labels", tags=["Labels"])


@router.get("", response_model=List[Label])
async def get_labels(store: JsonLabelStore = Depends(get_store)):
    return list_labels(store)


@router.post("/generate")
async def post_generate_labels(
    payload: Optional[LabelGenerateRequest] = None,
    store: JsonLabelStore = Depends(get_store),
    sequencer=Depends(get_sequencer),
):
    """Generate ``count`` labels (1-999), optionally sharing one item name."""
    payload = payload or LabelGenerateRequest()
    result = generate_labels(store, sequencer, payload.count, payload.item)
    return result.to_json_dict()


@router.put("/{label_id}", response_model=Label)
async def put_label(
    label_id: int,
    payload: Optional[LabelUpdateRequest] = None,
    store: JsonLabelStore = Depends(get_store),
):
    payload = payload or LabelUpdateRequest()
    return update_label(store, label_id, art=payload.art, code=payload.code)


@router.delete("/{label_id}")
async def remove_label(label_id: int, store: JsonLabelStore = Depends(get_store)):
    delete_label(store, label_id)
    return {"ok": True}


@router.delete("")
async def remove_all_labels(
    store: JsonLabelStore = Depends(get_store),
    sequencer=Depends(get_sequencer),
):
    """Clear the registry and reset the counter (stored mode only)."""
    state = delete_all_labels(store, sequencer)
    return {"ok": True, "state": state.to_json_dict()}
