"""
Persisted column mappings, keyed by source file name.

Re-uploading a file with the same name restores the last mapping used for it.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from bizpulse.config import config
from bizpulse.data.mapping import ColumnRoleMapping

logger = logging.getLogger(__name__)


def mapping_key(source_name: str) -> str:
    return f"mapping:{source_name}"


class MappingStore:
    """JSON file of {mapping:<source name>: mapping dict}."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else config.mapping_store_path

    def _read(self) -> Dict[str, dict]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable mapping store %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, source_name: str) -> Optional[ColumnRoleMapping]:
        """Return the saved mapping for a source, or None."""
        if not source_name:
            return None
        raw = self._read().get(mapping_key(source_name))
        if not isinstance(raw, dict):
            return None
        return ColumnRoleMapping.from_dict(raw)

    def save(self, source_name: str, mapping: ColumnRoleMapping):
        """Persist the mapping for a source (no-op without a source name)."""
        if not source_name:
            return
        data = self._read()
        data[mapping_key(source_name)] = mapping.to_dict()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug("Saved mapping for %s", source_name)

    def forget(self, source_name: str):
        data = self._read()
        if data.pop(mapping_key(source_name), None) is not None:
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
