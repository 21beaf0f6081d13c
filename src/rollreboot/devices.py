"""Remote hosts reachable over SSH."""

import logging
import shlex
from typing import Iterable

from fabric import Connection
from invoke.exceptions import Failure, ThreadException
from paramiko.ssh_exception import SSHException

from rollreboot.auth import AuthConfig
from rollreboot.results import CommandResult, Outcome, classify


logger = logging.getLogger(__name__)


CommandType = str | Iterable[str]


class HostConnectionError(RuntimeError):
    """Raised when an SSH connection to a host cannot be established."""

    def __init__(self, host: "RemoteHost", error: Exception):
        super().__init__(f"Can't connect to {host.address}: {error}")


class RemoteHost:
    """A machine accessible via SSH with the shared authentication config."""

    def __init__(self, host: str, port: int, auth: AuthConfig):
        self.host = host
        self.port = int(port)
        self.auth = auth

    def __str__(self):
        return f"{type(self).__name__}('{self.host}')"

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    @staticmethod
    def _process(command: CommandType) -> str:
        """Convert command to string (fabric doesn't support lists)."""
        if isinstance(command, str):
            return command
        return shlex.join(command)

    def create_connection(self) -> Connection:
        return Connection(
            self.host,
            user=self.auth.user,
            port=self.port,
            config=self.auth.config,
            connect_timeout=self.auth.timeout,
            connect_kwargs=self.auth.connect_kwargs,
        )

    def open(self, connection: Connection):
        try:
            connection.open()
        except (SSHException, OSError, EOFError) as error:
            raise HostConnectionError(self, error) from error

    def run(self, command: CommandType, **kwargs) -> CommandResult:
        """Execute a command remotely and classify its outcome.

        Raises HostConnectionError if no connection can be established;
        failures once the command has been sent are reported in the result.
        """
        command = self._process(command)
        with self.create_connection() as connection:
            self.open(connection)
            logger.debug("%s: %s", self.host, command)
            try:
                result = connection.run(command, warn=True, hide=True, **kwargs)
            except (SSHException, Failure, ThreadException, OSError, EOFError) as error:
                return CommandResult(Outcome.FAILED, command, repr(error))
        outcome = classify(result)
        message = (
            None
            if outcome is Outcome.SUCCEEDED
            else (result.stderr.strip() or f"exit status {result.exited}")
        )
        return CommandResult(outcome, command, message)
