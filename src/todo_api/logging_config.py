from __future__ import annotations

import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(message)s"


def resolve_level(level: str) -> int:
    """Map a level name such as 'debug' to its logging constant; unknown names give INFO."""
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        return logging.INFO
    return resolved


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service."""
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT)
