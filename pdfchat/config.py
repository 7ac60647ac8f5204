"""Application configuration with environment variable loading.

Pydantic-based settings for the external AI services, the web server and
the per-browser storage. Values come from the environment, with a `.env`
file loaded first.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

BACKENDS = ("http", "fake")


class AppConfig(BaseModel):
    """Configuration for the PDF chat application.

    Attributes:
        api_base_url: Base URL of the service exposing both AI endpoints.
        ingestion_path: Path of the document-processing endpoint.
        query_path: Path of the answer-generation endpoint.
        ingestion_api_key: Credential for the document-processing service.
        query_api_key: Credential for the answer-generation service.
        request_timeout: Transport timeout in seconds for outbound calls.
        backend: "http" for the real services, "fake" for offline use.
        storage_file: Optional JSON file holding the sessions for every browser.
        storage_secret: Secret used by NiceGUI to sign per-browser storage.
        host: Interface the web server binds to.
        port: Port the web server listens on.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("PDFCHAT_API_BASE_URL", "http://localhost:5000"),
        description="Base URL for the document and answer endpoints",
    )
    ingestion_path: str = Field(
        default_factory=lambda: os.getenv("PDFCHAT_INGESTION_PATH", "/process-pdf"),
        description="Document-processing endpoint path",
    )
    query_path: str = Field(
        default_factory=lambda: os.getenv("PDFCHAT_QUERY_PATH", "/query"),
        description="Answer-generation endpoint path",
    )
    ingestion_api_key: str | None = Field(
        default_factory=lambda: os.getenv("COHERE_API_KEY") or None,
        description="API key sent to the document-processing endpoint",
    )
    query_api_key: str | None = Field(
        default_factory=lambda: os.getenv("GROQ_API_KEY") or None,
        description="API key sent to the answer-generation endpoint",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("PDFCHAT_REQUEST_TIMEOUT", "120")),
        gt=0.0,
        description="Transport timeout in seconds",
    )
    backend: str = Field(
        default_factory=lambda: os.getenv("PDFCHAT_BACKEND", "http"),
        description="Client implementation: 'http' or 'fake'",
    )
    storage_file: str | None = Field(
        default_factory=lambda: os.getenv("PDFCHAT_STORAGE_FILE") or None,
        description="JSON file shared by all browsers instead of per-browser storage",
    )
    storage_secret: str = Field(
        default_factory=lambda: os.getenv("NICEGUI_STORAGE_SECRET", "pdf-chat-secret"),
        description="Secret for NiceGUI browser storage",
    )
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(
        default_factory=lambda: int(os.getenv("PORT", "8000")),
        ge=1,
        le=65535,
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate that the base URL is non-empty and drop a trailing slash."""
        if not v or not v.strip():
            raise ValueError("API base URL required. Set PDFCHAT_API_BASE_URL in .env")
        return v.strip().rstrip("/")

    @field_validator("ingestion_path", "query_path")
    @classmethod
    def normalize_path(cls, v: str) -> str:
        v = v.strip()
        return v if v.startswith("/") else f"/{v}"

    @field_validator("storage_file")
    @classmethod
    def strip_storage_file(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("ingestion_api_key", "query_api_key")
    @classmethod
    def strip_api_key(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate that the backend is one of the supported client sets."""
        v = v.strip().lower()
        if v not in BACKENDS:
            raise ValueError(f"Unknown backend '{v}'. Use one of: {', '.join(BACKENDS)}")
        return v

    @property
    def ingestion_url(self) -> str:
        return f"{self.api_base_url}{self.ingestion_path}"

    @property
    def query_url(self) -> str:
        return f"{self.api_base_url}{self.query_path}"


def get_app_config() -> AppConfig:
    """Create application configuration from environment.

    Returns:
        Configured AppConfig instance.

    Raises:
        ValueError: If a setting fails validation.
    """
    return AppConfig()
