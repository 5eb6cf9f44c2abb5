"""CLI entry point for launching the FastAPI app with uvicorn."""

import os

import uvicorn

from .app import create_app
from .dependencies import get_config


def main() -> None:
    """Run the diary analyzer API server (DIARY_ANALYZER_HOST / DIARY_ANALYZER_PORT)."""
    config = get_config()
    uvicorn.run(
        create_app(),
        host=os.getenv("DIARY_ANALYZER_HOST", "0.0.0.0"),
        port=int(os.getenv("DIARY_ANALYZER_PORT", "8000")),
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
