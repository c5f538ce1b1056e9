"""
JSON document store for the label registry.

The whole registry lives in a single JSON document::

    {"labels": [...]}                      # derived mode
    {"labels": [...], "state": {...}}      # stored mode

Every write replaces the whole document: the new content is written to a
temporary file next to the target and moved into place with ``os.replace``,
so a reader sees either the old or the new document, never a partial one.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import ValidationError as PydanticValidationError

from label_registry.config import Settings
from label_registry.schemas.label import Label
from label_registry.schemas.state import RegistryState

logger = logging.getLogger(__name__)


@dataclass
class RegistryDocument:
    labels: List[Label] = field(default_factory=list)
    state: Optional[RegistryState] = None


class JsonLabelStore:
    """
    Filesystem-backed registry document.

    A store built with ``default_state`` runs in stored mode: the document
    carries a ``state`` object and ``load()`` always returns one. Without it
    the store only keeps labels and drops any ``state`` key on save.
    """

    def __init__(self, path: Path, default_state: Optional[RegistryState] = None):
        self.path = Path(path)
        self.default_state = default_state
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "JsonLabelStore":
        default_state = None
        if app_settings.stored_mode:
            default_state = RegistryState(
                prefix=app_settings.BARCODE_PREFIX,
                digits=app_settings.BARCODE_DIGITS,
                next=1,
            )
        path = Path(app_settings.DATA_DIR) / app_settings.DATA_FILE_NAME
        return cls(path, default_state=default_state)

    @property
    def stored_mode(self) -> bool:
        return self.default_state is not None

    def _empty_document(self) -> RegistryDocument:
        state = self.default_state.model_copy() if self.stored_mode else None
        return RegistryDocument(labels=[], state=state)

    def ensure_data_file(self) -> None:
        """Create the data directory and an empty document if missing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            logger.info(f"Creating registry document at {self.path}")
            self.save(self._empty_document())

    def _read_raw(self) -> dict:
        try:
            parsed = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Malformed registry document {self.path}, using empty: {e}")
            return {}

        if not isinstance(parsed, dict):
            logger.warning(f"Registry document {self.path} is not an object, using empty")
            return {}
        return parsed

    def _parse_labels(self, raw_labels) -> List[Label]:
        if not isinstance(raw_labels, list):
            return []

        labels: List[Label] = []
        for entry in raw_labels:
            try:
                labels.append(Label.model_validate(entry))
            except PydanticValidationError:
                logger.warning(f"Skipping malformed label entry: {entry!r}")
        return labels

    def _parse_state(self, raw_state) -> RegistryState:
        try:
            return RegistryState.model_validate(raw_state)
        except PydanticValidationError:
            if raw_state is not None:
                logger.warning(f"Invalid stored state {raw_state!r}, using defaults")
            return self.default_state.model_copy()

    def load(self) -> RegistryDocument:
        """
        Load the registry document, creating it on first use.

        Malformed content is never fatal: an unreadable document is treated
        as empty and individual bad label entries are skipped.
        """
        self.ensure_data_file()
        raw = self._read_raw()

        document = RegistryDocument(labels=self._parse_labels(raw.get("labels")))
        if self.stored_mode:
            document.state = self._parse_state(raw.get("state"))
        return document

    def save(self, document: RegistryDocument) -> None:
        """Persist only the recognised shape of ``document``."""
        payload: dict = {"labels": [label.to_json_dict() for label in document.labels]}
        if self.stored_mode:
            state = document.state or self.default_state
            payload["state"] = state.to_json_dict()

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @contextmanager
    def transaction(self) -> Iterator[RegistryDocument]:
        """
        One load-modify-save cycle.

        The document is saved only when the block finishes without raising,
        so a failed operation leaves the file untouched. Transactions on the
        same store are serialised by an in-process lock; nothing protects
        against other processes writing the same file.
        """
        with self._lock:
            document = self.load()
            yield document
            self.save(document)
