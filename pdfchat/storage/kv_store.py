"""Key-value stores backing the persisted session list.

Values are strings, written and read whole, the way browser local storage
behaves. The UI uses NiceGUI's per-browser `app.storage.user` through
MappingKeyValueStore. When PDFCHAT_STORAGE_FILE is set it uses
JsonFileKeyValueStore instead, which keeps everything in one file shared by
every browser (single-user deployments).
"""

import json
import logging
import os
import tempfile
from collections.abc import MutableMapping
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal string key-value interface."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MappingKeyValueStore:
    """Key-value store over any mutable mapping.

    Wraps NiceGUI's `app.storage.user` in the UI, or a plain dict in tests.
    """

    def __init__(self, mapping: MutableMapping[str, str] | None = None) -> None:
        self._mapping: MutableMapping[str, str] = {} if mapping is None else mapping

    def get(self, key: str) -> str | None:
        value = self._mapping.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self._mapping[key] = value


class JsonFileKeyValueStore:
    """File-backed key-value store holding all keys in one JSON object.

    Writes go to a temporary file that replaces the target, so a crash never
    leaves a half-written file behind.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable store file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring store file {self._path}: not a JSON object")
            return {}
        return data

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def create_kv_store(
    storage_file: Path | str | None,
    mapping: MutableMapping[str, str] | None = None,
) -> KeyValueStore:
    """Pick the store for the session list.

    Args:
        storage_file: JSON file to share between browsers, or None.
        mapping: Mapping used when no file is configured, usually
            NiceGUI's `app.storage.user`.

    Returns:
        A JsonFileKeyValueStore when a file is configured, otherwise a
        MappingKeyValueStore over `mapping`.
    """
    if storage_file:
        logger.info(f"Using session file {storage_file}")
        return JsonFileKeyValueStore(storage_file)
    return MappingKeyValueStore(mapping)
