# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/repository.py

"""
Read-only access to the commits stored under a remote directory.

Remote layout:
    <path>/<commit id>/metadata.json

Every public operation opens its own connection and closes it before
returning, on success and on failure. Nothing is cached between calls.

Failure policy differs between the two reads:
- list_commits() skips a commit whose metadata cannot be read or parsed, so
  one corrupt commit does not hide the rest of the listing. The listing
  command itself failing still fails the call.
- get_commit() raises on any failure, since the caller named the commit.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Optional

import orjson
from loguru import logger

from sshremote.commits import Commit, Tag, matches, sort_descending_by_timestamp
from sshremote.config.properties import RemoteProperties, RuntimeParameters
from sshremote.credentials import resolve_auth
from sshremote.system.exceptions import CommandError, InvalidMetadataError
from sshremote.transport import (
    ConnectionTarget,
    Connector,
    ParamikoConnector,
    Session,
    auth_method,
)

METADATA_FILE = "metadata.json"


def list_command(path: str) -> str:
    return f'ls -1 "{path}"'


def metadata_command(path: str, commit_id: str) -> str:
    return f'cat "{path}/{commit_id}/{METADATA_FILE}"'


class RemoteCommitRepository:
    """Commit store living in a directory on an SSH host."""

    def __init__(self, remote: RemoteProperties, parameters: RuntimeParameters,
                 connector: Optional[Connector] = None) -> None:
        self.remote = remote
        self.parameters = parameters
        self.connector = connector or ParamikoConnector()
        self.target = ConnectionTarget.from_properties(remote)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        # Credential and key errors surface here, before any network attempt
        auth = auth_method(resolve_auth(self.remote, self.parameters))
        session = self.connector.connect(self.target, auth)
        try:
            yield session
        finally:
            session.close()

    def _run(self, session: Session, command: str) -> str:
        result = session.run(command)
        if not result.ok:
            raise CommandError(command, result.output)
        return result.output

    def _read_commit(self, session: Session, commit_id: str) -> Commit:
        output = self._run(session, metadata_command(self.remote.path, commit_id))
        try:
            metadata = orjson.loads(output)
        except orjson.JSONDecodeError as e:
            raise InvalidMetadataError(commit_id, str(e))
        if not isinstance(metadata, dict):
            raise InvalidMetadataError(commit_id, f"expected a JSON object, got {type(metadata).__name__}")
        return Commit(id=commit_id, properties=metadata)

    def list_commits(self, tags: Optional[Iterable[Tag]] = None) -> list[Commit]:
        """List commits matching every tag in `tags`, newest first.

        Raises:
            SSHConnectionError: the connection could not be established
            CommandError: the remote directory could not be listed
        """
        tags = list(tags or [])
        commits = []
        with self._session() as session:
            output = self._run(session, list_command(self.remote.path))
            for line in output.splitlines():
                commit_id = line.strip()
                if not commit_id:
                    continue
                try:
                    commit = self._read_commit(session, commit_id)
                except (CommandError, InvalidMetadataError) as e:
                    logger.debug(f"Skipping commit {commit_id}: {e}")
                    continue
                if matches(commit.properties, tags):
                    commits.append(commit)

        logger.debug(f"Found {len(commits)} matching commits on {self.target.address}")
        return sort_descending_by_timestamp(commits)

    def get_commit(self, commit_id: str) -> Commit:
        """Read a single commit.

        Raises:
            SSHConnectionError, CommandError, InvalidMetadataError
        """
        with self._session() as session:
            return self._read_commit(session, commit_id)
