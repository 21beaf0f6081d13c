"""Rebooting hosts one at a time."""

import logging
from time import sleep
from typing import Iterable

from rollreboot.auth import AuthConfig
from rollreboot.devices import CommandType, RemoteHost
from rollreboot.hosts import Host
from rollreboot.reachability import wait_for_host
from rollreboot.results import Outcome
from rollreboot.retries import RetryPolicy


logger = logging.getLogger(__name__)


REBOOT_COMMAND = "sudo reboot"
# extra wait after each host is back, before moving on to the next
HOST_DELAY = 5


class RebootError(RuntimeError):
    """Raised when the reboot command fails on a host."""


class HostUnreachableError(RuntimeError):
    """Raised when a host does not come back within the polling policy."""


class RollingReboot:
    def __init__(
        self,
        auth: AuthConfig,
        port: int = 22,
        command: CommandType = REBOOT_COMMAND,
        delay: float = HOST_DELAY,
        policy: RetryPolicy | None = None,
    ):
        self.auth = auth
        self.port = int(port)
        self.command = command
        self.delay = delay
        self.policy = policy

    def create_device(self, host: Host) -> RemoteHost:
        return RemoteHost(host.hostname, port=self.port, auth=self.auth)

    def reboot(self, host: Host):
        device = self.create_device(host)
        result = device.run(self.command)
        if result.outcome is Outcome.NO_EXIT_STATUS:
            # the connection drops while the reboot is in progress
            logger.debug("%s closed the session without an exit status", host.hostname)
        elif not result:
            raise RebootError(f"Failed to reboot {host.hostname}: {result}")

    def process(self, host: Host):
        logger.info("Rebooting %s", host)
        self.reboot(host)
        if not wait_for_host(host.hostname, self.port, policy=self.policy):
            raise HostUnreachableError(
                f"Host {host.hostname} did not come back on port {self.port}"
            )

    def run(self, hosts: Iterable[Host]):
        """Reboot hosts in order, stopping at the first error."""
        for host in hosts:
            self.process(host)
            sleep(self.delay)
