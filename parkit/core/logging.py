import logging
import sys
from pythonjsonlogger.jsonlogger import JsonFormatter
from parkit.core.config import get_settings

settings = get_settings()


def setup_logging(level: str = None, log_format: str = None):
    """
    Configure client logging with structured JSON format.
    
    Args:
        level: Log level name (default: settings.LOG_LEVEL)
        log_format: "json" or "text" (default: settings.LOG_FORMAT)
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper()))
    
    # Remove existing handlers
    logger.handlers = []
    
    handler = logging.StreamHandler(sys.stdout)
    
    if (log_format or settings.LOG_FORMAT) == "json":
        formatter = JsonFormatter(
            fmt='%(asctime)s %(name)s %(levelname)s %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    
    return logger
