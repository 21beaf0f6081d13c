from argparse import ArgumentParser
import logging
import os
import sys
from typing import List, Optional

from rollreboot.auth import AuthConfigError, create_auth_config
from rollreboot.devices import HostConnectionError
from rollreboot.hosts import HostFileError, HostParseError, read_hosts
from rollreboot.rolling import HostUnreachableError, RebootError, RollingReboot


logger = logging.getLogger(__name__)


def create_parser() -> ArgumentParser:
    parser = ArgumentParser(
        description="Reboot hosts one at a time, waiting for each to come back"
    )
    parser.add_argument("-user", "--user", default="root", help="SSH user name")
    parser.add_argument(
        "-key",
        "--key",
        default=os.path.expandvars("$HOME/.ssh/id_rsa"),
        help="Path to private key file",
    )
    parser.add_argument(
        "-passphrase", "--passphrase", default="", help="Passphrase for private key"
    )
    parser.add_argument("-port", "--port", type=int, default=22, help="SSH port")
    parser.add_argument(
        "-hosts", "--hosts", help="File with list of hosts to reboot"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(args: Optional[List[str]] = None):
    parser = create_parser()
    args = parser.parse_args(args)
    if not args.hosts:
        parser.error("no hosts file specified (-hosts)")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stdout,
    )
    # keep the SSH transport quiet unless debugging
    if not args.verbose:
        logging.getLogger("paramiko").setLevel(logging.WARNING)

    try:
        hosts = read_hosts(args.hosts)
        auth = create_auth_config(args.key, args.passphrase, args.user)
        RollingReboot(auth, port=args.port).run(hosts)
    except (
        HostFileError,
        HostParseError,
        AuthConfigError,
        HostConnectionError,
        RebootError,
        HostUnreachableError,
    ) as error:
        logger.error(error)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
