"""Main application entry point.

Runs FastAPI (port 8000) with NiceGUI mounted for the case interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def check_configuration() -> None:
    """Validate analysis configuration before anything starts.

    Raises:
        SystemExit: If the API key is missing.
    """
    from multirag.analysis.config import get_analysis_config

    try:
        config = get_analysis_config()
    except ValidationError as e:
        logger.critical(f"Invalid configuration: {e}")
        raise SystemExit(1) from e

    logger.info(f"Using {config.fast_model} (fast) and {config.thinking_model} (thinking)")


def run() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI serves health and document previews, NiceGUI serves the UI.
    Both accessible on port 8000.
    """
    import uvicorn
    from nicegui import ui

    from multirag.api.app import create_app
    from multirag.ui.chat_page import cases_page  # noqa: F401 - Registers the page

    app = create_app()

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title="Multi-RAG Cases",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "multirag-cases-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Case UI available at http://localhost:{port}/")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def main() -> None:
    """Application entry point."""
    logger.info("Starting Multi-RAG Cases")
    check_configuration()
    run()


if __name__ == "__main__":
    main()
