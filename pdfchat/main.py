"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the chat interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run FastAPI with NiceGUI mounted on the same server."""
    import uvicorn
    from nicegui import ui

    from pdfchat.api.app import create_app
    from pdfchat.config import get_app_config
    from pdfchat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    config = get_app_config()
    app = create_app()

    ui.run_with(
        app,
        title="PDF Chat",
        favicon="📄",
        storage_secret=config.storage_secret,
    )

    logger.info(f"Chat UI available at http://localhost:{config.port}/")
    logger.info(f"API docs available at http://localhost:{config.port}/docs")

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
