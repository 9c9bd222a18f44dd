import logging
import time
from functools import wraps
from typing import Callable

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Sets up a logger with a standard format.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger

def configure_logging(level: str = "INFO") -> int:
    """
    Applies a level name (e.g. "DEBUG") to every trafficpulse logger.
    Unknown names fall back to INFO.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    for name in list(logging.root.manager.loggerDict):
        if name == "trafficpulse" or name.startswith("trafficpulse."):
            logging.getLogger(name).setLevel(numeric)
    return numeric

def log_execution_time(logger: logging.Logger, slow_threshold: float = 1.0):
    """
    Decorator to measure and log execution time of a function.
    Calls slower than `slow_threshold` seconds are logged as warnings.
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{func.__name__} failed after {time.time() - start:.3f}s: {e}")
                raise
            elapsed = time.time() - start
            if elapsed > slow_threshold:
                logger.warning(f"Slow call: {func.__name__} took {elapsed:.3f}s")
            else:
                logger.debug(f"{func.__name__} executed in {elapsed:.3f}s")
            return result
        return wrapper
    return decorator
