"""In-process stand-ins for the external AI services.

Used by the tests and by the `fake` backend for running the UI offline.
Both record their calls so tests can assert on what was sent.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from pdfchat.clients.errors import IngestionError, QueryError
from pdfchat.models.schemas import Message


@dataclass
class IngestionCall:
    filename: str
    content: bytes


@dataclass
class AnswerCall:
    message: str
    prior_messages: list[Message]
    processed_document: Any


@dataclass
class FakeDocumentIngestionClient:
    """Returns a fixed payload, or raises a configured error.

    Without a payload, answers with the file name and size.
    """

    payload: Any = None
    error: IngestionError | None = None
    delay: float = 0.0
    calls: list[IngestionCall] = field(default_factory=list)

    async def process_document(self, filename: str, content: bytes) -> Any:
        self.calls.append(IngestionCall(filename=filename, content=content))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.payload is not None:
            return self.payload
        return {"filename": filename, "size": len(content)}


@dataclass
class FakeConversationClient:
    """Returns a fixed answer, or raises a configured error.

    Without an answer, echoes the message and notes whether a document was
    supplied.
    """

    answer: str | None = None
    error: QueryError | None = None
    delay: float = 0.0
    calls: list[AnswerCall] = field(default_factory=list)

    async def get_answer(
        self,
        message: str,
        prior_messages: Sequence[Message],
        processed_document: Any,
    ) -> str:
        self.calls.append(
            AnswerCall(
                message=message,
                prior_messages=list(prior_messages),
                processed_document=processed_document,
            )
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.answer is not None:
            return self.answer
        if processed_document is None:
            return f"No document is attached yet, so I can only echo: {message}"
        return f"You asked: {message}"
