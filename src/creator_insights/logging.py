from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_LEVEL_ENV = "CREATOR_INSIGHTS_LOG_LEVEL"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging; ``CREATOR_INSIGHTS_LOG_LEVEL`` applies when no level is given."""
    resolved = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("creator_insights").setLevel(resolved)
