"""Adapters for the external document-processing and answer-generation services.

Responsibilities:
    - Local PDF pre-check before upload
    - Multipart document upload returning an opaque processed-document payload
    - JSON answer requests carrying the transcript and the payload
    - Fake implementations for tests and offline use

Both adapters raise their own error type; callers surface it to the user.
"""

from pdfchat.clients.conversation import ConversationClient, HttpConversationClient
from pdfchat.clients.errors import ChatClientError, IngestionError, QueryError
from pdfchat.clients.fakes import FakeConversationClient, FakeDocumentIngestionClient
from pdfchat.clients.ingestion import DocumentIngestionClient, HttpDocumentIngestionClient
from pdfchat.config import AppConfig


def create_clients(config: AppConfig) -> tuple[DocumentIngestionClient, ConversationClient]:
    """Build the ingestion and conversation clients for the configured backend."""
    if config.backend == "fake":
        return FakeDocumentIngestionClient(), FakeConversationClient()

    return (
        HttpDocumentIngestionClient(
            config.ingestion_url,
            api_key=config.ingestion_api_key,
            timeout=config.request_timeout,
        ),
        HttpConversationClient(
            config.query_url,
            api_key=config.query_api_key,
            timeout=config.request_timeout,
        ),
    )


__all__ = [
    "ChatClientError",
    "ConversationClient",
    "DocumentIngestionClient",
    "FakeConversationClient",
    "FakeDocumentIngestionClient",
    "HttpConversationClient",
    "HttpDocumentIngestionClient",
    "IngestionError",
    "QueryError",
    "create_clients",
]
