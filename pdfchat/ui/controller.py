"""Chat controller: the view state machine behind the chat page.

Translates user actions (new, select, delete, send, upload) into session
store mutations and calls to the two AI clients, tracks what the view
should show, and reports outcomes as notifications. Holds no NiceGUI
state, so the page stays a thin rendering layer.
"""

import logging
from collections.abc import Callable
from enum import Enum

from pdfchat.clients.conversation import ConversationClient
from pdfchat.clients.errors import IngestionError, QueryError
from pdfchat.clients.ingestion import DocumentIngestionClient
from pdfchat.models.schemas import Message, Session
from pdfchat.storage.session_store import SessionStore

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str | None, str], None]


class ViewState(str, Enum):
    """What the chat view is currently showing."""

    NO_ACTIVE_SESSION = "no_active_session"
    IDLE = "idle"
    UPLOADING = "uploading"
    WAITING_FOR_ANSWER = "waiting_for_answer"


class NotifyLevel(str, Enum):
    INFO = "info"
    POSITIVE = "positive"
    NEGATIVE = "negative"


def _log_notification(title: str, description: str | None, level: str) -> None:
    logger.info(f"[{level}] {title}" + (f": {description}" if description else ""))


class ChatController:
    """Coordinates the session store with the ingestion and conversation clients.

    Args:
        store: Session store owning the chat sessions.
        ingestion: Client for the document-processing service.
        conversation: Client for the answer-generation service.
        notify: Callback receiving (title, description, level) notifications.
    """

    def __init__(
        self,
        store: SessionStore,
        ingestion: DocumentIngestionClient,
        conversation: ConversationClient,
        notify: Notifier | None = None,
    ) -> None:
        self._store = store
        self._ingestion = ingestion
        self._conversation = conversation
        self._notify = notify or _log_notification
        # Calls still running, per session id
        self._uploads_in_flight: dict[str, int] = {}
        self._answers_in_flight: dict[str, int] = {}
        self._listeners: list[Callable[[], None]] = []

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def active_session(self) -> Session | None:
        return self._store.active_session

    @property
    def is_busy(self) -> bool:
        """Whether a call for the active session is still running."""
        return self.state in (ViewState.UPLOADING, ViewState.WAITING_FOR_ANSWER)

    @property
    def state(self) -> ViewState:
        session = self._store.active_session
        if session is None:
            return ViewState.NO_ACTIVE_SESSION
        if self._uploads_in_flight.get(session.id):
            return ViewState.UPLOADING
        if self._answers_in_flight.get(session.id):
            return ViewState.WAITING_FOR_ANSWER
        return ViewState.IDLE

    def on_change(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every state change."""
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in self._listeners:
            listener()

    @staticmethod
    def _track(counter: dict[str, int], session_id: str, delta: int) -> None:
        count = counter.get(session_id, 0) + delta
        if count > 0:
            counter[session_id] = count
        else:
            counter.pop(session_id, None)

    # --- session actions ---

    def new_session(self) -> str:
        session_id = self._store.create()
        self._changed()
        return session_id

    def select_session(self, session_id: str | None) -> None:
        self._store.set_active(session_id)
        self._changed()

    def delete_session(self, session_id: str) -> None:
        self._store.delete(session_id)
        self._notify("Chat deleted", None, NotifyLevel.INFO.value)
        self._changed()

    # --- async actions ---

    async def upload_file(self, filename: str, content: bytes) -> bool:
        """Process an uploaded PDF and attach it to the active session.

        The document goes to the session that was active when the upload
        started, even if the user switched sessions meanwhile.

        Returns:
            True if the document was attached, False on failure or when the
            session was deleted before processing finished.
        """
        session = self._store.active_session
        if session is None:
            return False

        self._track(self._uploads_in_flight, session.id, 1)
        self._changed()
        try:
            payload = await self._ingestion.process_document(filename, content)
        except IngestionError as e:
            logger.warning(f"Upload of {filename} failed: {e}")
            self._notify("Error", str(e) or "Failed to process PDF", NotifyLevel.NEGATIVE.value)
            return False
        finally:
            self._track(self._uploads_in_flight, session.id, -1)
            self._changed()

        if self._store.get(session.id) is None:
            logger.info(f"Session {session.id} was deleted while {filename} was processing")
            return False

        self._store.attach_document(session.id, payload, filename)
        self._notify(
            "PDF Processed",
            "The PDF has been successfully processed and is ready for querying.",
            NotifyLevel.POSITIVE.value,
        )
        self._changed()
        return True

    async def send_message(self, text: str) -> bool:
        """Send a user message and append the generated answer.

        The user message is appended before the call; the answer only when
        the call succeeds. The document attached at send time is used.

        Returns:
            True if an answer was appended.
        """
        session = self._store.active_session
        if session is None or not text.strip():
            return False

        self._store.append_message(session.id, Message.user(text))
        session = self._store.get(session.id)
        if session is None:
            return False

        self._track(self._answers_in_flight, session.id, 1)
        self._changed()
        try:
            answer = await self._conversation.get_answer(
                text, session.messages, session.processed_document
            )
        except QueryError as e:
            logger.warning(f"Answer for session {session.id} failed: {e}")
            self._notify(
                "Error getting response",
                str(e) or "Failed to get a response",
                NotifyLevel.NEGATIVE.value,
            )
            return False
        finally:
            self._track(self._answers_in_flight, session.id, -1)
            self._changed()

        self._store.append_message(session.id, Message.ai(answer))
        self._changed()
        return True
