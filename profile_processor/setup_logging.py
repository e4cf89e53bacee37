import logging, sys

class ServiceFilter(logging.Filter):
    """Stamp every record with the service name and deployment env."""
    def __init__(self, service: str, environment: str):
        super().__init__()
        self.service = service
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        record.environment = self.environment
        return True

def setup_logging(level: str = "INFO", environment: str = "development"):
    logger = logging.getLogger()
    if logger.handlers:  # don’t double add during reload or in forked workers
        return
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    h = logging.StreamHandler(sys.stdout)
    h.addFilter(ServiceFilter("profile-processor", environment))
    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s [%(environment)s pid=%(process)d] %(name)s :: %(message)s"
    )
    h.setFormatter(fmt)
    logger.addHandler(h)
