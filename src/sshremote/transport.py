# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/transport.py

"""
SSH transport used by the commit repository.

The repository only needs two things from a transport: open a session for an
address and an authentication method, and run one shell command at a time on
it. Those seams are the Connector and Session protocols; ParamikoConnector is
the production implementation and tests substitute their own.
"""

from __future__ import annotations

import io
import socket
from dataclasses import dataclass
from typing import Optional, Protocol, Union

import paramiko
from loguru import logger

from sshremote.config.manager import ConnectorSettings
from sshremote.config.properties import REDACTED, RemoteProperties
from sshremote.credentials import ResolvedAuth
from sshremote.system.exceptions import CommandError, InvalidKeyError, SSHConnectionError

DEFAULT_PORT = 22

# Tried in order when parsing PEM / OpenSSH private key text
KEY_CLASSES = (paramiko.RSAKey, paramiko.ECDSAKey, paramiko.Ed25519Key)


@dataclass(frozen=True)
class ConnectionTarget:
    host: str
    username: str
    port: int = DEFAULT_PORT

    @classmethod
    def from_properties(cls, remote: RemoteProperties) -> "ConnectionTarget":
        return cls(
            host=remote.address,
            username=remote.username,
            port=remote.port if remote.port is not None else DEFAULT_PORT,
        )

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class PasswordAuth:
    password: str

    def __repr__(self) -> str:
        return f"PasswordAuth(password={REDACTED})"


@dataclass(frozen=True)
class KeyAuth:
    pkey: paramiko.PKey

    def __repr__(self) -> str:
        return f"KeyAuth({self.pkey.get_name()})"


AuthMethod = Union[PasswordAuth, KeyAuth]


@dataclass(frozen=True)
class CommandResult:
    """Exit status and combined output of a remote command."""
    ok: bool
    output: str


class Session(Protocol):
    """A connected session running one command at a time."""

    def run(self, command: str) -> CommandResult:
        ...

    def close(self) -> None:
        ...


class Connector(Protocol):
    """Factory for connected sessions."""

    def connect(self, target: ConnectionTarget, auth: AuthMethod) -> Session:
        ...


def parse_private_key(key: str) -> paramiko.PKey:
    """Parse private key text, trying each supported key type.

    Raises:
        InvalidKeyError: the text is not a supported unencrypted private key
    """
    last_error: Optional[Exception] = None
    for key_class in KEY_CLASSES:
        try:
            return key_class.from_private_key(io.StringIO(key))
        except (paramiko.SSHException, ValueError) as e:
            last_error = e
    raise InvalidKeyError(last_error)


def auth_method(resolved: ResolvedAuth) -> AuthMethod:
    """Turn resolved credentials into an auth method, parsing keys up front."""
    if resolved.key is not None:
        return KeyAuth(parse_private_key(resolved.key))
    return PasswordAuth(resolved.password)


class ParamikoSession:
    """Session backed by a connected paramiko.SSHClient."""

    def __init__(self, client: paramiko.SSHClient, target: ConnectionTarget):
        self.client = client
        self.target = target

    def run(self, command: str) -> CommandResult:
        logger.debug(f"Running on {self.target.address}: {command}")
        try:
            _, stdout, stderr = self.client.exec_command(command)
            # stderr shares the channel window with stdout; merge it so a
            # chatty stderr cannot stall the stdout read
            stdout.channel.set_combine_stderr(True)
            output = stdout.read().decode("utf-8", errors="replace")
            output += stderr.read().decode("utf-8", errors="replace")
            exit_code = stdout.channel.recv_exit_status()
        except (paramiko.SSHException, socket.error) as e:
            raise CommandError(command, str(e))
        return CommandResult(ok=exit_code == 0, output=output)

    def close(self) -> None:
        self.client.close()
        logger.debug(f"Closed SSH connection to {self.target.address}")


class ParamikoConnector:
    """Connector opening SSH sessions with paramiko."""

    def __init__(self, settings: Optional[ConnectorSettings] = None):
        self.settings = settings or ConnectorSettings()

    def _apply_host_key_policy(self, client: paramiko.SSHClient) -> None:
        policy = self.settings.host_key_policy
        if policy == "auto-add":
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
            return

        client.load_system_host_keys()
        if self.settings.known_hosts is not None:
            client.load_host_keys(str(self.settings.known_hosts.expanduser()))
        if policy == "warn":
            client.set_missing_host_key_policy(paramiko.WarningPolicy())
        else:
            client.set_missing_host_key_policy(paramiko.RejectPolicy())

    def connect(self, target: ConnectionTarget, auth: AuthMethod) -> ParamikoSession:
        client = paramiko.SSHClient()
        connect_kwargs = {
            "hostname": target.host,
            "port": target.port,
            "username": target.username,
            "timeout": self.settings.connect_timeout,
            "allow_agent": False,
            "look_for_keys": False,
        }
        if isinstance(auth, KeyAuth):
            connect_kwargs["pkey"] = auth.pkey
        else:
            connect_kwargs["password"] = auth.password

        try:
            self._apply_host_key_policy(client)
            client.connect(**connect_kwargs)
        except (paramiko.SSHException, socket.error) as e:
            client.close()
            logger.error(f"SSH connection failed to {target.address}: {e}")
            raise SSHConnectionError(target.address, e)

        logger.debug(f"Established SSH connection to {target.address}")
        return ParamikoSession(client, target)
