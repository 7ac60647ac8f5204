"""Document ingestion client.

Sends an uploaded PDF to the external document-processing service and
returns its processed-document payload. The payload is opaque to this
application: it is stored on the session and forwarded verbatim with each
question.
"""

import logging
from typing import Any, Protocol

import httpx

from pdfchat.clients.base import auth_headers, describe_http_error
from pdfchat.clients.errors import IngestionError
from pdfchat.clients.pdf_check import check_pdf

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "pdf"


class DocumentIngestionClient(Protocol):
    """Turns an uploaded PDF into a processed-document payload."""

    async def process_document(self, filename: str, content: bytes) -> Any: ...


class HttpDocumentIngestionClient:
    """Document ingestion over HTTP multipart upload.

    Args:
        url: Full URL of the document-processing endpoint.
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

    async def process_document(self, filename: str, content: bytes) -> Any:
        """Upload a PDF and return the processed-document payload.

        Args:
            filename: Original name of the uploaded file.
            content: Raw PDF bytes.

        Returns:
            The service's JSON response, unchanged. Any JSON value except
            `null` is accepted.

        Raises:
            IngestionError: If the file is not a readable PDF, the call fails,
                the service answers with a non-success status, or the body
                is not JSON or is `null`.
        """
        info = check_pdf(filename, content)

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self._url,
                    files={UPLOAD_FIELD: (info.filename, content, "application/pdf")},
                    headers=auth_headers(self._api_key),
                )
            except httpx.RequestError as e:
                logger.warning(f"Document upload failed for {info.filename}: {e}")
                raise IngestionError(f"Connection failed: {e}") from e

        if not response.is_success:
            message = describe_http_error(response)
            logger.warning(f"Document processing rejected {info.filename}: {message}")
            raise IngestionError(message)

        try:
            payload = response.json()
        except ValueError as e:
            raise IngestionError("Document service returned an invalid response") from e

        if payload is None:
            raise IngestionError("Document service returned an empty payload")

        logger.info(f"Processed {info.filename} ({info.pages} pages)")
        return payload
