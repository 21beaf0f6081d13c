"""Classified results for remote commands and probes."""

from enum import Enum
from typing import NamedTuple

from invoke import Result


# paramiko reports -1 when a channel closes without sending an exit status
MISSING_EXIT_STATUS = -1


class Outcome(Enum):
    SUCCEEDED = "succeeded"
    NO_EXIT_STATUS = "no-exit-status"
    FAILED = "failed"


def classify(result: Result) -> Outcome:
    """Classify the outcome of a command from its exit code."""
    if result.exited == 0:
        return Outcome.SUCCEEDED
    if result.exited == MISSING_EXIT_STATUS:
        return Outcome.NO_EXIT_STATUS
    return Outcome.FAILED


class CommandResult(NamedTuple):
    outcome: Outcome
    command: str
    message: str | None = None

    def __bool__(self) -> bool:
        return self.outcome is not Outcome.FAILED

    def __str__(self) -> str:
        return f"'{self.command}' {self.outcome.value}" + (
            f": {self.message}" if self.message else ""
        )


class BooleanResult(NamedTuple):
    ok: bool
    message: str | None = None

    def __bool__(self) -> bool:
        return self.ok

    def __str__(self) -> str:
        return f"[{self.ok}]" + (f" {self.message}" if self.message else "")
