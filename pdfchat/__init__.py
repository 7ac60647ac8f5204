"""PDF Chat - multi-session chat over uploaded PDF documents.

Combines NiceGUI for the browser interface, FastAPI for the HTTP surface,
HTTPX for the calls to the external document-processing and
answer-generation services, and Pydantic for data validation.

Components:
    - config: Environment-driven application settings
    - models: Session and message schemas
    - storage: Key-value persistence and the session store
    - clients: Document ingestion and conversation adapters
    - ui: Chat controller and NiceGUI page
    - api: FastAPI application hosting the UI
"""

__version__ = "0.1.0"
