"""Session store: the single owner of the chat session list.

Holds the sessions (most recent first) and the active session id, and
rewrites the whole list to the key-value store after every mutation.
Mutations replace the affected Session with an updated copy, so a Session
obtained from the store never changes after it was read.

All methods are synchronous. Under the asyncio event loop each call is
therefore applied as one step, which is what keeps overlapping uploads and
answers from losing updates.
"""

import logging
from typing import Any

from pydantic import ValidationError

from pdfchat.models.schemas import (
    DEFAULT_TITLE,
    Message,
    Sender,
    Session,
    dump_sessions,
    load_sessions,
    preview_title,
)
from pdfchat.storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "chatHistory"


class PersistenceReadError(Exception):
    """Raised when the persisted session list cannot be read."""

    pass


class SessionStore:
    """Owns the session list and the active session id.

    Args:
        storage: Key-value store the session list is persisted to.
        key: Key under which the JSON array is stored.
    """

    def __init__(self, storage: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._sessions: list[Session] = []
        self._active_id: str | None = None

    # --- reads ---

    @property
    def sessions(self) -> list[Session]:
        return list(self._sessions)

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def active_session(self) -> Session | None:
        """The active session, or None when unset or dangling."""
        if self._active_id is None:
            return None
        return self.get(self._active_id)

    def get(self, session_id: str) -> Session | None:
        for session in self._sessions:
            if session.id == session_id:
                return session
        return None

    # --- persistence ---

    def _read_persisted(self) -> list[Session]:
        raw = self._storage.get(self._key)
        if raw is None:
            return []
        try:
            sessions = load_sessions(raw)
        except ValidationError as e:
            raise PersistenceReadError(f"Invalid persisted session list: {e}") from e

        seen: set[str] = set()
        unique: list[Session] = []
        for session in sessions:
            if session.id in seen:
                logger.warning(f"Dropping duplicate persisted session {session.id}")
                continue
            seen.add(session.id)
            unique.append(session)
        return unique

    def load(self) -> list[Session]:
        """Restore the session list from storage.

        Never raises: missing or unreadable state yields an empty list.

        Returns:
            The restored sessions.
        """
        try:
            self._sessions = self._read_persisted()
        except PersistenceReadError as e:
            logger.warning(f"Starting with no sessions: {e}")
            self._sessions = []

        if self._active_id is not None and self.get(self._active_id) is None:
            self._active_id = None

        logger.debug(f"Loaded {len(self._sessions)} sessions")
        return self.sessions

    def _persist(self) -> None:
        self._storage.set(self._key, dump_sessions(self._sessions))

    def _replace(self, updated: Session) -> None:
        self._sessions = [updated if s.id == updated.id else s for s in self._sessions]
        self._persist()

    # --- mutations ---

    def create(self) -> str:
        """Prepend a new empty session and make it active.

        Returns:
            The new session id.
        """
        session = Session()
        while self.get(session.id) is not None:
            session = Session()

        self._sessions = [session, *self._sessions]
        self._active_id = session.id
        self._persist()
        logger.debug(f"Created session {session.id}")
        return session.id

    def delete(self, session_id: str) -> None:
        """Remove a session, clearing the active id if it pointed at it."""
        if self.get(session_id) is None:
            return

        self._sessions = [s for s in self._sessions if s.id != session_id]
        if self._active_id == session_id:
            self._active_id = None
        self._persist()
        logger.debug(f"Deleted session {session_id}")

    def set_active(self, session_id: str | None) -> None:
        self._active_id = session_id

    def append_message(self, session_id: str, message: Message) -> None:
        """Append a message to a session's transcript.

        Does nothing when the session was deleted in the meantime. The first
        user message in a session still carrying the default title renames
        it after the message.
        """
        session = self.get(session_id)
        if session is None:
            logger.debug(f"Dropping message for missing session {session_id}")
            return

        update: dict[str, Any] = {"messages": [*session.messages, message]}
        if (
            message.sender is Sender.USER
            and session.title == DEFAULT_TITLE
            and not any(m.sender is Sender.USER for m in session.messages)
        ):
            update["title"] = preview_title(message.content) or DEFAULT_TITLE

        self._replace(session.model_copy(update=update))

    def attach_document(self, session_id: str, payload: Any, label: str) -> None:
        """Attach a processed document to a session.

        Sets the document payload, retitles the session after the label and
        records a system message, all in one update. A previously attached
        document is replaced.
        """
        session = self.get(session_id)
        if session is None:
            logger.debug(f"Dropping document for missing session {session_id}")
            return

        notice = Message.system(f"Uploaded and processed PDF: {label}")
        self._replace(
            session.model_copy(
                update={
                    "processed_document": payload,
                    "title": f"PDF: {label}",
                    "messages": [*session.messages, notice],
                }
            )
        )
        logger.debug(f"Attached document '{label}' to session {session_id}")
