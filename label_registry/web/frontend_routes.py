"""
Frontend Routes - static assets with index.html fallback

Must be included last: the catch-all path matches every GET not handled
by an API router.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, JSONResponse

from label_registry.config import Settings
from label_registry.dependencies.registry import get_settings
from label_registry.utils.file_utils import resolve_public_file

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Frontend"])

INDEX_FILE = "index.html"


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str, app_settings: Settings = Depends(get_settings)):
    asset = resolve_public_file(app_settings.PUBLIC_DIR, full_path)
    if asset is not None:
        return FileResponse(asset)

    index = Path(app_settings.PUBLIC_DIR) / INDEX_FILE
    if index.is_file():
        return FileResponse(index)

    logger.warning(f"Frontend entry document not found: {index}")
    return JSONResponse(content={"error": "No encontrado"}, status_code=404)
