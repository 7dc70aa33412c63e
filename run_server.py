import os

import uvicorn

from app.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def warn_if_unconfigured() -> None:
    """
    Log startup warnings for settings that make every request fail or leak data:
    - GOOGLE_MAPS_API_KEY missing: every weather request answers 500.
    - APP_ENV=development: raw provider payloads are echoed to callers.
    """
    if not settings.google_maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not set; /api/weather will answer 500")
    if settings.is_development:
        logger.warning("Development mode: raw provider payloads are included in responses")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="voice-weather")
    warn_if_unconfigured()

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
