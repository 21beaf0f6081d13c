"""Tests for the rollreboot.auth module."""

import pytest
from fabric.config import Config
from paramiko import RSAKey

from rollreboot.auth import (
    CONNECT_TIMEOUT,
    AuthConfig,
    AuthConfigError,
    create_auth_config,
    load_private_key,
)


@pytest.fixture(scope="module")
def rsa_key():
    return RSAKey.generate(bits=2048)


class TestLoadPrivateKey:
    """Tests for load_private_key()."""

    def test_load_unencrypted_key(self, tmp_path, rsa_key):
        path = tmp_path / "id_rsa"
        rsa_key.write_private_key_file(str(path))

        key = load_private_key(path)

        assert isinstance(key, RSAKey)
        assert key.asbytes() == rsa_key.asbytes()

    def test_empty_passphrase_means_no_passphrase(self, tmp_path, rsa_key):
        path = tmp_path / "id_rsa"
        rsa_key.write_private_key_file(str(path))

        key = load_private_key(path, passphrase="")

        assert key.asbytes() == rsa_key.asbytes()

    def test_load_encrypted_key_with_passphrase(self, tmp_path, rsa_key):
        path = tmp_path / "id_rsa"
        rsa_key.write_private_key_file(str(path), password="secret")

        key = load_private_key(path, passphrase="secret")

        assert key.asbytes() == rsa_key.asbytes()

    @pytest.mark.parametrize("passphrase", [None, "", "wrong"])
    def test_encrypted_key_without_correct_passphrase(
        self, tmp_path, rsa_key, passphrase
    ):
        """Test that a missing or wrong passphrase is a parse error."""
        path = tmp_path / "id_rsa"
        rsa_key.write_private_key_file(str(path), password="secret")

        with pytest.raises(AuthConfigError) as exc_info:
            load_private_key(path, passphrase=passphrase)

        assert "Can't parse private key file" in str(exc_info.value)

    def test_unreadable_key_file(self, tmp_path):
        path = tmp_path / "missing"

        with pytest.raises(AuthConfigError) as exc_info:
            load_private_key(path)

        assert "Can't read private key file" in str(exc_info.value)

    def test_garbage_key_file(self, tmp_path):
        path = tmp_path / "id_rsa"
        path.write_text("this is not a private key\n")

        with pytest.raises(AuthConfigError) as exc_info:
            load_private_key(path)

        assert "Can't parse private key file" in str(exc_info.value)


class TestAuthConfig:
    """Tests for AuthConfig and create_auth_config()."""

    def test_create_auth_config(self, tmp_path, rsa_key):
        path = tmp_path / "id_rsa"
        rsa_key.write_private_key_file(str(path))

        auth = create_auth_config(path, "", "admin")

        assert auth.user == "admin"
        assert auth.pkey.asbytes() == rsa_key.asbytes()
        assert auth.timeout == CONNECT_TIMEOUT
        assert isinstance(auth.config, Config)

    def test_create_auth_config_propagates_key_errors(self, tmp_path, mocker):
        """Test that an unreadable key fails before any connection is made."""
        mock_connection = mocker.patch("rollreboot.devices.Connection")

        with pytest.raises(AuthConfigError):
            create_auth_config(tmp_path / "missing", "", "root")

        mock_connection.assert_not_called()

    def test_host_key_verification_disabled(self, mocker):
        auth = AuthConfig(user="root", pkey=mocker.Mock())
        ssh_config = auth.config.base_ssh_config.lookup("any.example")

        assert ssh_config["stricthostkeychecking"] == "no"
        assert ssh_config["userknownhostsfile"] == "/dev/null"
        assert ssh_config["connecttimeout"] == str(CONNECT_TIMEOUT)

    def test_connect_timeout_follows_timeout(self, mocker):
        auth = AuthConfig(user="root", pkey=mocker.Mock(), timeout=3)
        ssh_config = auth.config.base_ssh_config.lookup("any.example")

        assert auth.timeout == 3
        assert ssh_config["connecttimeout"] == "3"

    def test_connect_kwargs_use_key_only(self, mocker):
        pkey = mocker.Mock()
        auth = AuthConfig(user="root", pkey=pkey)

        assert auth.connect_kwargs == {
            "pkey": pkey,
            "allow_agent": False,
            "look_for_keys": False,
        }
