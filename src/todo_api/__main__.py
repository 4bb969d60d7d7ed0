"""
Run the todo backend with uvicorn.

Usage:
    python -m todo_api
"""
from __future__ import annotations

import logging

import uvicorn

from .main import app
from .settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logger.info("Todo backend server running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
