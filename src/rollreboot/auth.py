"""Shared SSH authentication configuration."""

from dataclasses import dataclass
from io import StringIO
import logging
from pathlib import Path

from fabric.config import Config
from paramiko import ECDSAKey, Ed25519Key, PKey, RSAKey
from paramiko.config import SSHConfig
from paramiko.ssh_exception import SSHException


logger = logging.getLogger(__name__)


CONNECT_TIMEOUT = 10

# key types tried, in order, when loading a private key
KEY_TYPES = (RSAKey, ECDSAKey, Ed25519Key)


class AuthConfigError(RuntimeError):
    """Raised when the authentication configuration cannot be created."""


def load_private_key(path: str | Path, passphrase: str | None = None) -> PKey:
    """Load a private key, decrypting it with the passphrase if one is given."""
    try:
        text = Path(path).read_text()
    except (OSError, UnicodeDecodeError) as error:
        raise AuthConfigError(f"Can't read private key file {path}") from error
    errors = []
    for key_type in KEY_TYPES:
        try:
            return key_type.from_private_key(
                StringIO(text), password=passphrase or None
            )
        except (SSHException, ValueError) as error:
            errors.append(f"{key_type.__name__}: {error}")
    logger.debug("Unable to load %s (%s)", path, "; ".join(errors))
    raise AuthConfigError(f"Can't parse private key file {path}")


@dataclass(frozen=True)
class AuthConfig:
    """Key-based credentials and client options shared by all connections."""

    ssh_options = [
        "StrictHostKeyChecking=no",
        "UserKnownHostsFile=/dev/null",
    ]

    user: str
    pkey: PKey
    timeout: int = CONNECT_TIMEOUT
    config: Config | None = None

    def __post_init__(self):
        if self.config is None:
            object.__setattr__(self, "config", self.create_config())

    def create_config(self) -> Config:
        options = self.ssh_options + [f"ConnectTimeout={self.timeout}"]
        return Config(ssh_config=SSHConfig.from_text("\n".join(options)))

    @property
    def connect_kwargs(self) -> dict:
        # authenticate with the given key only
        return {"pkey": self.pkey, "allow_agent": False, "look_for_keys": False}


def create_auth_config(
    key_path: str | Path, passphrase: str | None, user: str
) -> AuthConfig:
    pkey = load_private_key(key_path, passphrase)
    logger.debug("Loaded %s key from %s", pkey.get_name(), key_path)
    return AuthConfig(user=user, pkey=pkey)
