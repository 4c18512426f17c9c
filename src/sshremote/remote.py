# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/remote.py

"""
SSH remote plugin.

Implements the remote plugin contract on top of the URI codec, the property
validators, the credential resolver and the commit repository. The contract
works with the raw persisted maps; each method converts them to the typed
models at its boundary.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Final, Optional

from sshremote import uri
from sshremote.commits import Commit, Tag
from sshremote.config.properties import (
    RemoteProperties,
    RuntimeParameters,
    validate_parameters,
    validate_remote,
)
from sshremote.credentials import PasswordPrompt, resolve_parameters, terminal_password_prompt
from sshremote.repository import RemoteCommitRepository
from sshremote.transport import Connector

REMOTE_TYPE: Final = "ssh"


class SSHRemote:
    """Remote plugin for commit stores reached over SSH.

    Args:
        connector: Transport used to open sessions; a ParamikoConnector with
            default settings when omitted
        prompt: Hidden-input prompt used by get_parameters()
    """

    def __init__(self, connector: Optional[Connector] = None,
                 prompt: PasswordPrompt = terminal_password_prompt) -> None:
        self.connector = connector
        self.prompt = prompt

    def type(self) -> str:
        return REMOTE_TYPE

    def from_uri(self, remote_uri: str,
                 additional_properties: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
        return uri.from_uri(remote_uri, additional_properties)

    def to_uri(self, properties: Mapping[str, Any]) -> tuple[str, dict[str, str]]:
        return uri.to_uri(properties)

    def get_parameters(self, properties: Mapping[str, Any]) -> dict[str, Any]:
        remote = RemoteProperties.from_mapping(properties)
        return resolve_parameters(remote, self.prompt).to_mapping()

    def validate_remote(self, properties: Mapping[str, Any]) -> None:
        validate_remote(properties)

    def validate_parameters(self, parameters: Mapping[str, Any]) -> None:
        validate_parameters(parameters)

    def _repository(self, properties: Mapping[str, Any],
                    parameters: Optional[Mapping[str, Any]]) -> RemoteCommitRepository:
        return RemoteCommitRepository(
            RemoteProperties.from_mapping(properties),
            RuntimeParameters.from_mapping(parameters),
            connector=self.connector,
        )

    def list_commits(self, properties: Mapping[str, Any], parameters: Optional[Mapping[str, Any]],
                     tags: Optional[Iterable[Tag]] = None) -> list[Commit]:
        return self._repository(properties, parameters).list_commits(tags)

    def get_commit(self, properties: Mapping[str, Any], parameters: Optional[Mapping[str, Any]],
                   commit_id: str) -> Commit:
        return self._repository(properties, parameters).get_commit(commit_id)
