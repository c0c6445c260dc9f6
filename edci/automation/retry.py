import time
import logging
from functools import wraps

logger = logging.getLogger(__name__)

BACKOFF_MODES = ("constant", "linear")


def retry(times: int = 3, delay: float = 3, backoff: str = "constant", sleep=None):
    """
    Retry decorator for automation tasks.

    Args:
        times (int): Number of attempts, first call included
        delay (float): Base delay in seconds between attempts
        backoff (str): "constant" waits `delay` every time,
            "linear" waits `delay * attempt`
        sleep (callable): Sleep function, defaults to time.sleep
    """

    if times < 1:
        raise ValueError("times must be at least 1")
    if backoff not in BACKOFF_MODES:
        raise ValueError(f"Unknown backoff mode: {backoff}")

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            last_exception = None
            for attempt in range(1, times + 1):
                try:
                    logger.info(
                        "Attempt %s/%s for %s",
                        attempt,
                        times,
                        func.__name__,
                    )
                    return func(*args, **kwargs)
                except Exception as exc:
                    last_exception = exc
                    logger.error(
                        "Error on attempt %s for %s: %s",
                        attempt,
                        func.__name__,
                        exc,
                    )
                    if attempt < times:
                        wait = delay * attempt if backoff == "linear" else delay
                        (sleep or time.sleep)(wait)

            logger.critical(
                "All %s attempts failed for %s",
                times,
                func.__name__,
            )
            raise last_exception

        return wrapper

    return decorator
