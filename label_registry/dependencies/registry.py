"""
Registry Dependencies

FastAPI dependencies exposing the per-app store, sequencer and settings
created in ``create_app``.
"""

from fastapi import Request

from label_registry.config import Settings
from label_registry.repositories.label_store import JsonLabelStore


def get_store(request: Request) -> JsonLabelStore:
    return request.app.state.store


def get_sequencer(request: Request):
    return request.app.state.sequencer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
