"""Persistence for chat sessions.

Responsibilities:
    - String key-value stores (NiceGUI browser storage, JSON file, in-memory)
    - Session store owning the session list and the active session id
"""

from pdfchat.storage.kv_store import (
    JsonFileKeyValueStore,
    KeyValueStore,
    MappingKeyValueStore,
    create_kv_store,
)
from pdfchat.storage.session_store import STORAGE_KEY, PersistenceReadError, SessionStore

__all__ = [
    "STORAGE_KEY",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MappingKeyValueStore",
    "PersistenceReadError",
    "SessionStore",
    "create_kv_store",
]
