"""
State Routes - numbering state read and patch
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from label_registry.dependencies.registry import get_sequencer, get_store
from label_registry.repositories.label_store import JsonLabelStore
from label_registry.services.state_service import get_state, patch_state

router = APIRouter(prefix="/api/state", tags=["State"])


@router.get("")
async def read_state(
    store: JsonLabelStore = Depends(get_store),
    sequencer=Depends(get_sequencer),
):
    return get_state(store, sequencer).to_json_dict()


@router.patch("")
async def update_state(
    payload: Any = Body(None),
    store: JsonLabelStore = Depends(get_store),
    sequencer=Depends(get_sequencer),
):
    """
    Patch prefix/digits/next in stored mode; no-op in derived mode.

    The body is validated by the service only in stored mode, so derived
    mode ignores it whatever its shape.
    """
    return patch_state(store, sequencer, payload).to_json_dict()
