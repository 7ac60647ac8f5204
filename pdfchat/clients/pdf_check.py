"""Local PDF pre-check using pypdf.

Confirms an upload is a readable PDF before it is sent to the
document-processing service. Text extraction is left to that service.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from pdfchat.clients.errors import IngestionError

logger = logging.getLogger(__name__)

PDF_MAGIC_BYTES = b"%PDF"


class PDFInfo(BaseModel):
    """Basic facts about an uploaded PDF.

    Attributes:
        filename: Name of the uploaded file.
        pages: Number of pages in the document.
        size: File size in bytes.
    """

    filename: str
    pages: int = Field(ge=1)
    size: int = Field(ge=1)


def _validate_file_name(filename: str | None) -> str:
    if not filename or not filename.strip():
        raise IngestionError("Filename is required")

    filename = filename.strip()
    if not filename.lower().endswith(".pdf"):
        raise IngestionError("Only PDF files are accepted")

    return filename


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before reading it.

    Raises:
        IngestionError: If the content is empty or lacks a PDF header.
    """
    if not file_content:
        raise IngestionError("Empty file provided")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise IngestionError("Invalid PDF: file does not start with PDF header")


def check_pdf(filename: str | None, file_content: bytes) -> PDFInfo:
    """Check that an upload is a readable PDF document.

    Args:
        filename: The uploaded file name.
        file_content: Raw bytes of the file.

    Returns:
        PDFInfo with the file name, page count, and size.

    Raises:
        IngestionError: If the file is not a PDF, is empty, or is corrupt.
    """
    name = _validate_file_name(filename)
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise IngestionError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise IngestionError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise IngestionError("PDF contains no pages")

    logger.debug(f"Checked {name}: {pages} pages, {len(file_content)} bytes")
    return PDFInfo(filename=name, pages=pages, size=len(file_content))
