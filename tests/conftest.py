"""Shared fixtures for rollreboot tests."""

import pytest
from fabric import Connection
from invoke import Result

from rollreboot.auth import AuthConfig


@pytest.fixture
def auth(mocker):
    """Authentication config with a stand-in private key."""
    return AuthConfig(user="root", pkey=mocker.Mock())


@pytest.fixture
def make_connection(mocker):
    """Factory for mock fabric connections usable as context managers."""

    def make(result=None, open_error=None, run_error=None):
        connection = mocker.Mock(spec=Connection)
        connection.__enter__ = mocker.Mock(return_value=connection)
        # must not suppress exceptions raised inside the `with` block
        connection.__exit__ = mocker.Mock(return_value=False)
        connection.open.side_effect = open_error
        if run_error is not None:
            connection.run.side_effect = run_error
        else:
            connection.run.return_value = (
                result if result is not None else Result(exited=0)
            )
        return connection

    return make
