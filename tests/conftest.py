# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/conftest.py

"""
Shared test fixtures for the sshremote test suite.
"""

import io

import paramiko
import pytest

from sshremote.config.properties import RemoteProperties, RuntimeParameters

from tests.fixtures.fake_transport import FakeConnector


@pytest.fixture
def fake_connector():
    return FakeConnector()


@pytest.fixture
def remote_properties():
    """Properties for an absolute-path remote with a stored password."""
    return RemoteProperties(
        username="backup",
        address="nas.example.org",
        path="/srv/commits",
        password="s3cret",
    )


@pytest.fixture
def password_parameters():
    return RuntimeParameters(password="override")


@pytest.fixture(scope="session")
def rsa_key_text():
    """PEM text of a freshly generated RSA private key."""
    key = paramiko.RSAKey.generate(bits=1024)
    buffer = io.StringIO()
    key.write_private_key(buffer)
    return buffer.getvalue()
