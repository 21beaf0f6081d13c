"""Retry mechanisms with configurable policies."""

from abc import ABC, abstractmethod
from itertools import repeat
import logging
from time import sleep
from typing import Any, Callable


logger = logging.getLogger(__name__)


class RetryPolicy(ABC):
    """Abstract base class for retry policies."""

    @abstractmethod
    def waits(self):
        """Generate wait times between retries."""
        raise NotImplementedError


class Linear(RetryPolicy):
    """Constant delay between attempts, unbounded unless `times` is set."""

    def __init__(self, times: int | None = None, delay: float = 0):
        self.times = times
        self.delay = delay

    def waits(self):
        if self.times is None:
            yield from repeat(self.delay)
        else:
            yield from repeat(self.delay, times=self.times)


def retry(
    script: Callable,
    policy: RetryPolicy | None = None,
    on_failure: Callable[[Any], None] | None = None,
) -> Any:
    """Execute script with retries until it returns a truthy value.

    `on_failure` is called with each falsy result before waiting; without it
    failed attempts are logged at debug level.
    """
    policy = policy or Linear()
    script_name = getattr(script, "__name__", repr(script))

    def report(result):
        if on_failure:
            on_failure(result)
        else:
            logger.debug("%s returned %s", script_name, result)

    result = script()
    if result:
        return result
    for wait in policy.waits():
        report(result)
        sleep(wait)
        result = script()
        if result:
            return result
    report(result)
    logger.error("Unable to complete '%s'", script_name)
    return result
