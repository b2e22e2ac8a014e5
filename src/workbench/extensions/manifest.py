"""
Manifest of known extension paths.

One record per path, updated on register/unregister. The manifest is for
display and introspection only; control decisions never consult it.
"""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

from workbench.extensions.interfaces import Extension, ManifestRecord

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(list[ManifestRecord])


class ManifestStore:
    """In-memory manifest keyed by extension path, in insertion order."""

    def __init__(self) -> None:
        self._records: dict[str, ManifestRecord] = {}

    def upsert(self, path: str, extension: Extension) -> ManifestRecord:
        """Append a record for ``path`` or refresh and re-enable the existing one."""
        record = self._records.get(path)
        if record is None:
            record = ManifestRecord(type=extension.type.value, path=path)
            self._records[path] = record
            logger.debug(f"Manifest record added: {path}")

        record.type = extension.type.value
        record.name = extension.name or ""
        record.dev = extension.dev or ""
        record.enabled = True
        return record

    def set_enabled(self, path: str, enabled: bool) -> None:
        record = self._records.get(path)
        if record is None:
            logger.debug(f"No manifest record for {path}")
            return
        record.enabled = enabled

    def get(self, path: str) -> ManifestRecord | None:
        return self._records.get(path)

    def records(self) -> list[ManifestRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, path: object) -> bool:
        return path in self._records

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps([r.model_dump() for r in self._records.values()], indent=indent)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        logger.info(f"Manifest written to {path} ({len(self._records)} records)")

    def load(self, path: Path) -> None:
        """Replace the records with those stored at ``path``."""
        records = _records_adapter.validate_json(path.read_text(encoding="utf-8"))
        self._records = {r.path: r for r in records}
        logger.info(f"Manifest loaded from {path} ({len(self._records)} records)")
