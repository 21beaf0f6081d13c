"""Polling hosts until they accept TCP connections again."""

from functools import partial
import logging
import socket

from rollreboot.results import BooleanResult
from rollreboot.retries import Linear, RetryPolicy, retry


logger = logging.getLogger(__name__)


PROBE_TIMEOUT = 2
PROBE_INTERVAL = 1


def probe(host: str, port: int, timeout: float = PROBE_TIMEOUT) -> BooleanResult:
    """Attempt a single TCP connection to host:port (never raises)."""
    try:
        connection = socket.create_connection((host, int(port)), timeout=timeout)
    except OSError as error:
        return BooleanResult(False, str(error) or type(error).__name__)
    connection.close()
    return BooleanResult(True)


def wait_for_host(
    host: str, port: int, policy: RetryPolicy | None = None
) -> BooleanResult:
    """Block until host:port accepts a TCP connection.

    With the default policy this polls once per second forever: there is
    no timeout and no cancellation. Pass a bounded policy to give up.
    """
    policy = policy or Linear(delay=PROBE_INTERVAL)
    probe_host = partial(probe, host, port)
    probe_host.__name__ = f"probe {host}:{port}"

    def not_reachable(result: BooleanResult):
        logger.info("Host %s is not reachable yet: %s", host, result.message)

    result = retry(probe_host, policy=policy, on_failure=not_reachable)
    if result:
        logger.info("Host %s is back online", host)
    return result
