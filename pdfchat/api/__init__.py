"""FastAPI application hosting the chat UI.

Endpoints:
    - GET /health: Service health status
    - GET /: NiceGUI chat page (mounted by the entry point)
"""

from pdfchat.api.app import create_app

__all__ = ["create_app"]
