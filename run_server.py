import os

import uvicorn

from pollen_feed.config import settings
from utils.logging_utils import get_tagged_logger, mask_url, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def log_startup_summary() -> None:
    """Log where data comes from without leaking the vendor key."""
    logger.info(
        "Starting pollen feed",
        extra={
            "data_source": settings.data_source,
            "api_url": mask_url(settings.api_url),
            "api_key_configured": bool(settings.api_key),
            "cache_backend": "redis" if settings.cache_redis_url else "memory",
        },
    )
    if settings.data_source == "pollensense" and not settings.api_key:
        logger.warning("POLLEN_API_KEY is not set; sensor API requests will be rejected")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="pollen_feed")
    log_startup_summary()

    uvicorn.run(
        "pollen_feed.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
