class ChatClientError(Exception):
    """Base error for calls to the external AI services."""

    pass


class IngestionError(ChatClientError):
    """Raised when a document cannot be processed by the ingestion service."""

    pass


class QueryError(ChatClientError):
    """Raised when the answer-generation service call fails."""

    pass
