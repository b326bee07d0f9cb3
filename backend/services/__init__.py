"""Service layer for soil data measurements."""

import logging
import os

LOG_LEVEL_ENV_VAR = "SOILDATA_LOG_LEVEL"

logger = logging.getLogger("soildata")
if not logger.handlers:
    logging.basicConfig(
        level=os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


__all__ = ["logger"]
