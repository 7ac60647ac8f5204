"""Pytest fixtures and shared test configuration.

Fixtures:
    - pdf_bytes: A small valid PDF generated with pypdf
    - kv: In-memory key-value store
    - store: Session store over the in-memory key-value store
    - ingestion / conversation: Fake AI service clients
    - notifications / controller: Chat controller recording its notifications
    - async_client: HTTPX client for the FastAPI app
"""

import io
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from pdfchat.api.app import create_app
from pdfchat.clients.fakes import FakeConversationClient, FakeDocumentIngestionClient
from pdfchat.storage.kv_store import MappingKeyValueStore
from pdfchat.storage.session_store import SessionStore
from pdfchat.ui.controller import ChatController


def make_pdf(pages: int = 1) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def pdf_bytes() -> bytes:
    """Return a valid two-page PDF."""
    return make_pdf(pages=2)


@pytest.fixture
def kv() -> MappingKeyValueStore:
    return MappingKeyValueStore({})


@pytest.fixture
def store(kv: MappingKeyValueStore) -> SessionStore:
    return SessionStore(kv)


@pytest.fixture
def ingestion() -> FakeDocumentIngestionClient:
    return FakeDocumentIngestionClient()


@pytest.fixture
def conversation() -> FakeConversationClient:
    return FakeConversationClient()


@pytest.fixture
def notifications() -> list[tuple[str, str | None, str]]:
    return []


@pytest.fixture
def controller(
    store: SessionStore,
    ingestion: FakeDocumentIngestionClient,
    conversation: FakeConversationClient,
    notifications: list[tuple[str, str | None, str]],
) -> ChatController:
    """Chat controller wired to fakes, appending notifications to a list."""

    def notify(title: str, description: str | None, level: str) -> None:
        notifications.append((title, description, level))

    return ChatController(store, ingestion, conversation, notify=notify)


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
