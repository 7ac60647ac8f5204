import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

DEFAULT_TITLE = "New Chat"
TITLE_PREVIEW_LENGTH = 30


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Sender(str, Enum):
    """Author of a message in the transcript."""

    USER = "user"
    AI = "ai"
    SYSTEM = "system"


class _CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either form on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Message(_CamelModel):
    """A single turn in a conversation.

    Attributes:
        id: Unique message identifier.
        content: The message text.
        sender: Who produced the message (user, ai, or system).
        timestamp: ISO format creation time.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    content: str
    sender: Sender
    timestamp: str = Field(default_factory=_now)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(content=content, sender=Sender.USER)

    @classmethod
    def ai(cls, content: str) -> "Message":
        return cls(content=content, sender=Sender.AI)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(content=content, sender=Sender.SYSTEM)


class Session(_CamelModel):
    """One PDF-grounded conversation.

    Attributes:
        id: Unique session identifier.
        title: Label shown in the session list.
        messages: Transcript in insertion order.
        processed_document: Opaque payload from the document-processing
            service, absent until an upload succeeds.
        created_at: ISO format creation time.
    """

    id: str = Field(default_factory=_new_id)
    title: str = DEFAULT_TITLE
    messages: list[Message] = Field(default_factory=list)
    processed_document: Any = None
    created_at: str = Field(default_factory=_now)

    @property
    def has_document(self) -> bool:
        return self.processed_document is not None


class TranscriptEntry(BaseModel):
    """Message as sent to the answer-generation endpoint."""

    content: str
    sender: Sender
    timestamp: str


class AnswerRequest(BaseModel):
    """Request body for the answer-generation endpoint.

    Attributes:
        message: The newly sent user message.
        chat_history: Prior transcript, including the new message.
        context: Processed document payload, or None without an upload.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    chat_history: list[TranscriptEntry] = Field(default_factory=list)
    context: Any = None


class AnswerResponse(BaseModel):
    """Successful answer-generation response body."""

    answer: str


SessionList = TypeAdapter(list[Session])


def dump_sessions(sessions: list[Session]) -> str:
    """Serialize a session list to the persisted JSON layout."""
    return SessionList.dump_json(sessions, by_alias=True).decode()


def load_sessions(raw: str | bytes) -> list[Session]:
    """Parse the persisted JSON layout.

    Raises:
        pydantic.ValidationError: If the value is not a valid session list.
    """
    return SessionList.validate_json(raw)


def preview_title(text: str) -> str:
    """Derive a session title from the first user message."""
    text = " ".join(text.split())
    if len(text) <= TITLE_PREVIEW_LENGTH:
        return text
    return text[:TITLE_PREVIEW_LENGTH] + "..."
