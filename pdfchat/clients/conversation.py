"""Conversation client.

Sends a user message, the session transcript, and the processed document
to the external answer-generation service and returns the answer text.
"""

import logging
from collections.abc import Sequence
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from pdfchat.clients.base import auth_headers, describe_http_error
from pdfchat.clients.errors import QueryError
from pdfchat.models.schemas import AnswerRequest, AnswerResponse, Message, TranscriptEntry

logger = logging.getLogger(__name__)


class ConversationClient(Protocol):
    """Generates an answer for a message in the context of a session."""

    async def get_answer(
        self,
        message: str,
        prior_messages: Sequence[Message],
        processed_document: Any,
    ) -> str: ...


def build_answer_request(
    message: str,
    prior_messages: Sequence[Message],
    processed_document: Any,
) -> AnswerRequest:
    """Build the answer-generation request body."""
    return AnswerRequest(
        message=message,
        chat_history=[
            TranscriptEntry(content=m.content, sender=m.sender, timestamp=m.timestamp)
            for m in prior_messages
        ],
        context=processed_document,
    )


class HttpConversationClient:
    """Answer generation over HTTP JSON.

    Args:
        url: Full URL of the answer-generation endpoint.
        api_key: Optional bearer credential.
        timeout: Transport timeout in seconds.
        transport: Optional HTTPX transport, used by tests.
    """

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def get_answer(
        self,
        message: str,
        prior_messages: Sequence[Message],
        processed_document: Any,
    ) -> str:
        """Ask the answer-generation service about the message.

        Args:
            message: The user's message.
            prior_messages: Session transcript up to and including the message.
            processed_document: Payload from the ingestion service, or None.

        Returns:
            The generated answer text.

        Raises:
            QueryError: If the call fails, the service answers with a
                non-success status, or the body has no `answer` string.
        """
        body = build_answer_request(message, prior_messages, processed_document)

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self._url,
                    json=body.model_dump(mode="json", by_alias=True),
                    headers=auth_headers(self._api_key),
                )
            except httpx.RequestError as e:
                logger.warning(f"Answer request failed: {e}")
                raise QueryError(f"Connection failed: {e}") from e

        if not response.is_success:
            error = describe_http_error(response)
            logger.warning(f"Answer generation rejected the request: {error}")
            raise QueryError(error)

        try:
            answer = AnswerResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise QueryError("Answer service returned an unexpected response") from e

        logger.info(f"Received answer ({len(answer.answer)} chars)")
        return answer.answer
