# profile_processor/serve.py
import logging
import uvicorn

from profile_processor import settings
from profile_processor.setup_logging import setup_logging

log = logging.getLogger(__name__)


def main():
    """
    Start the API.
    In production uvicorn forks WORKERS processes (max 4) and restarts any
    that die; in development a single reloading process is used.
    """
    setup_logging(settings.LOG_LEVEL, settings.APP_ENV)
    log.info("Starting %d worker(s) on %s:%d (env=%s)",
             settings.WORKERS, settings.HOST, settings.PORT, settings.APP_ENV)
    uvicorn.run(
        "profile_processor.main:app",
        host=settings.HOST,
        port=settings.PORT,
        workers=settings.WORKERS,
        reload=not settings.IS_PRODUCTION and settings.WORKERS == 1,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
