"""Pydantic models for chat sessions and the answer-generation payloads.

Provides type safety, validation, and the persisted JSON layout.

Models:
    - Sender: Author of a message (user, ai, system)
    - Message: Individual turn in a conversation
    - Session: Conversation with its transcript and processed document
    - AnswerRequest / AnswerResponse: Answer-generation request and reply
"""

from pdfchat.models.schemas import (
    DEFAULT_TITLE,
    AnswerRequest,
    AnswerResponse,
    Message,
    Sender,
    Session,
    TranscriptEntry,
    dump_sessions,
    load_sessions,
    preview_title,
)

__all__ = [
    "DEFAULT_TITLE",
    "AnswerRequest",
    "AnswerResponse",
    "Message",
    "Sender",
    "Session",
    "TranscriptEntry",
    "dump_sessions",
    "load_sessions",
    "preview_title",
]
