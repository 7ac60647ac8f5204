"""Test package for PDF Chat.

Structure:
    - unit/: Models, storage, clients, and controller in isolation
    - integration/: End-to-end chat flows and the FastAPI app

External AI services are replaced by fakes or httpx.MockTransport.
Leverages pytest with pytest-check for soft assertions.
"""
