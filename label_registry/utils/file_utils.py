"""
Filesystem helpers for serving the frontend.
"""

from pathlib import Path
from typing import Optional


def resolve_public_file(public_dir: str | Path, relative_path: str) -> Optional[Path]:
    """
    Resolve ``relative_path`` inside ``public_dir``.

    Returns:
        The file path if it exists and stays inside ``public_dir``,
        None otherwise (missing file, directory, or path traversal)
    """
    if not relative_path:
        return None

    root = Path(public_dir).resolve()
    candidate = (root / relative_path).resolve()

    if not candidate.is_relative_to(root):
        return None
    if not candidate.is_file():
        return None
    return candidate
