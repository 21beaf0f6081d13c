"""Reading the list of hosts to reboot.

The hosts file holds one entry per line. Blank lines are ignored and each
remaining line is either a bare hostname or a hostname followed by a single
space and the word `workload`, which marks hosts that run workloads:
```
db1.example.com
worker1.example.com workload
```
"""

import logging
from pathlib import Path
from typing import NamedTuple


logger = logging.getLogger(__name__)


WORKLOAD_MARKER = "workload"


class HostFileError(RuntimeError):
    """Raised when the hosts file cannot be read."""


class HostParseError(ValueError):
    """Raised when a line of the hosts file is malformed."""

    def __init__(self, source: str, number: int, line: str):
        super().__init__(f"Can't parse line {number} of {source}: '{line}'")
        self.source = source
        self.number = number
        self.line = line


class Host(NamedTuple):
    hostname: str
    workload: bool = False

    def __str__(self) -> str:
        return self.hostname + (f" ({WORKLOAD_MARKER})" if self.workload else "")


def parse_line(line: str) -> Host | None:
    """Return the host described by a line (None for blank lines)."""
    line = line.strip()
    if not line:
        return None
    tokens = line.split(" ")
    if len(tokens) == 1:
        return Host(tokens[0])
    if len(tokens) == 2 and tokens[1] == WORKLOAD_MARKER:
        return Host(tokens[0], workload=True)
    raise ValueError(line)


def parse_hosts(text: str, source: str = "<string>") -> list[Host]:
    hosts = []
    for number, line in enumerate(text.split("\n"), start=1):
        try:
            host = parse_line(line)
        except ValueError as error:
            raise HostParseError(source, number, line.strip()) from error
        if host is not None:
            hosts.append(host)
    return hosts


def read_hosts(path: str | Path) -> list[Host]:
    """Read and parse a hosts file, preserving the order of its entries."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise HostFileError(f"Can't read file {path}: {error}") from error
    hosts = parse_hosts(text, source=str(path))
    logger.debug("Read %d host(s) from %s", len(hosts), path)
    return hosts
