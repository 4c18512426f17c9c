# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/test_repository.py

"""Tests for listing and reading commits over a fake SSH session."""

import pytest

from sshremote.commits import Tag
from sshremote.config.properties import RemoteProperties, RuntimeParameters
from sshremote.repository import RemoteCommitRepository, list_command, metadata_command
from sshremote.system.exceptions import (
    CommandError,
    ConflictingCredentialsError,
    InvalidKeyError,
    InvalidMetadataError,
    MissingCredentialsError,
    SSHConnectionError,
)
from sshremote.transport import ConnectionTarget, KeyAuth, PasswordAuth

PATH = "/srv/commits"
LS = 'ls -1 "/srv/commits"'


def cat(commit_id):
    return f'cat "/srv/commits/{commit_id}/metadata.json"'


def test_command_text():
    assert list_command(PATH) == LS
    assert metadata_command(PATH, "abc") == cat("abc")
    assert list_command("rel/dir") == 'ls -1 "rel/dir"'


class TestListCommits:
    def test_ordered_newest_first(self, remote_properties, fake_connector):
        fake_connector.respond(LS, "id1\nid2\n")
        fake_connector.respond_json(cat("id1"), {"timestamp": "2019-09-20T13:45:36Z"})
        fake_connector.respond_json(cat("id2"), {"timestamp": "2019-09-20T13:45:37Z"})

        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)
        commits = repo.list_commits()

        assert [c.id for c in commits] == ["id2", "id1"]
        assert commits[0].properties == {"timestamp": "2019-09-20T13:45:37Z"}
        assert fake_connector.commands == [LS, cat("id1"), cat("id2")]

    def test_tag_filter(self, remote_properties, fake_connector):
        fake_connector.respond(LS, "id1\nid2\n")
        fake_connector.respond_json(cat("id1"), {"timestamp": "2019-09-20T13:45:36Z",
                                                 "tags": {"a": "b"}})
        fake_connector.respond_json(cat("id2"), {"timestamp": "2019-09-20T13:45:37Z",
                                                 "tags": {"c": "d"}})

        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        assert [c.id for c in repo.list_commits([Tag("a", "b")])] == ["id1"]
        assert [c.id for c in repo.list_commits([Tag("c")])] == ["id2"]
        assert repo.list_commits([Tag("a", "x")]) == []

    def test_bad_metadata_is_skipped(self, remote_properties, fake_connector):
        fake_connector.respond(LS, "id1\nid2\nid3\n")
        fake_connector.respond(cat("id1"), "{not json")
        fake_connector.respond_json(cat("id2"), {"timestamp": "2019-09-20T13:45:37Z"})
        fake_connector.respond(cat("id3"), "cat: No such file or directory", ok=False)

        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        assert [c.id for c in repo.list_commits()] == ["id2"]

    def test_channel_failure_on_one_commit_is_skipped(self, remote_properties, fake_connector):
        fake_connector.respond(LS, "id1\nid2\n")
        fake_connector.raises[cat("id1")] = CommandError(cat("id1"), "ChannelException(2, 'Connect failed')")
        fake_connector.respond_json(cat("id2"), {"timestamp": "2019-09-20T13:45:37Z"})

        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        assert [c.id for c in repo.list_commits()] == ["id2"]
        assert fake_connector.sessions[0].closed

    def test_non_object_metadata_is_skipped(self, remote_properties, fake_connector):
        fake_connector.respond(LS, "id1\n")
        fake_connector.respond(cat("id1"), "[1, 2, 3]")

        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        assert repo.list_commits() == []

    def test_blank_lines_ignored(self, remote_properties, fake_connector):
        fake_connector.respond(LS, "\n  id1  \n\n")
        fake_connector.respond_json(cat("id1"), {"timestamp": "2019-09-20T13:45:36Z"})

        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        assert [c.id for c in repo.list_commits()] == ["id1"]
        assert fake_connector.commands == [LS, cat("id1")]

    def test_empty_directory(self, remote_properties, fake_connector):
        fake_connector.respond(LS, "")
        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)
        assert repo.list_commits() == []

    def test_listing_failure(self, remote_properties, fake_connector):
        fake_connector.respond(LS, "ls: cannot access '/srv/commits': No such file or directory", ok=False)

        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        with pytest.raises(CommandError) as exc_info:
            repo.list_commits()
        assert exc_info.value.command == LS
        assert LS in str(exc_info.value)
        assert "No such file or directory" in str(exc_info.value)
        assert fake_connector.sessions[0].closed

    def test_connection_failure(self, remote_properties, fake_connector):
        fake_connector.connect_error = SSHConnectionError("nas.example.org:22", OSError("refused"))
        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        with pytest.raises(SSHConnectionError):
            repo.list_commits()
        assert fake_connector.commands == []

    def test_session_closed_on_success(self, remote_properties, fake_connector):
        fake_connector.respond(LS, "")
        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)
        repo.list_commits()
        repo.list_commits()
        assert len(fake_connector.sessions) == 2
        assert all(session.closed for session in fake_connector.sessions)

    def test_session_closed_on_unexpected_error(self, remote_properties, fake_connector):
        fake_connector.raises[LS] = RuntimeError("channel dropped")
        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        with pytest.raises(RuntimeError):
            repo.list_commits()
        assert fake_connector.sessions[0].closed

    def test_relative_path_commands(self, fake_connector):
        remote = RemoteProperties(username="u", address="h", path="commits", password="p")
        fake_connector.respond('ls -1 "commits"', "id1\n")
        fake_connector.respond_json('cat "commits/id1/metadata.json"', {"timestamp": "2019-09-20T13:45:36Z"})

        repo = RemoteCommitRepository(remote, RuntimeParameters(), fake_connector)

        assert [c.id for c in repo.list_commits()] == ["id1"]


class TestGetCommit:
    def test_get(self, remote_properties, fake_connector):
        fake_connector.respond_json(cat("id1"), {"timestamp": "2019-09-20T13:45:36Z", "a": "b"})
        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        commit = repo.get_commit("id1")

        assert commit.id == "id1"
        assert commit.properties["a"] == "b"
        assert fake_connector.commands == [cat("id1")]
        assert fake_connector.sessions[0].closed

    def test_bad_metadata_raises(self, remote_properties, fake_connector):
        fake_connector.respond(cat("id1"), "{not json")
        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        with pytest.raises(InvalidMetadataError) as exc_info:
            repo.get_commit("id1")
        assert exc_info.value.commit_id == "id1"
        assert fake_connector.sessions[0].closed

    def test_command_failure_raises(self, remote_properties, fake_connector):
        fake_connector.respond(cat("id1"), "cat: Permission denied", ok=False)
        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        with pytest.raises(CommandError) as exc_info:
            repo.get_commit("id1")
        assert "Permission denied" in str(exc_info.value)
        assert exc_info.value.output == "cat: Permission denied"

    def test_connection_failure(self, remote_properties, fake_connector):
        fake_connector.connect_error = SSHConnectionError("nas.example.org:22", OSError("refused"))
        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector)

        with pytest.raises(SSHConnectionError):
            repo.get_commit("id1")


class TestAuthentication:
    def test_connects_with_target_and_stored_password(self, remote_properties, fake_connector):
        fake_connector.respond(LS, "")
        RemoteCommitRepository(remote_properties, RuntimeParameters(), fake_connector).list_commits()

        target, auth = fake_connector.connections[0]
        assert target == ConnectionTarget(host="nas.example.org", username="backup", port=22)
        assert auth == PasswordAuth("s3cret")

    def test_parameter_password_wins(self, remote_properties, password_parameters, fake_connector):
        fake_connector.respond(LS, "")
        RemoteCommitRepository(remote_properties, password_parameters, fake_connector).list_commits()

        _, auth = fake_connector.connections[0]
        assert auth == PasswordAuth("override")

    def test_key_auth(self, remote_properties, rsa_key_text, fake_connector):
        fake_connector.respond(LS, "")
        params = RuntimeParameters(key=rsa_key_text)
        RemoteCommitRepository(remote_properties, params, fake_connector).list_commits()

        _, auth = fake_connector.connections[0]
        assert isinstance(auth, KeyAuth)

    def test_invalid_key_before_connecting(self, remote_properties, fake_connector):
        repo = RemoteCommitRepository(remote_properties, RuntimeParameters(key="garbage"), fake_connector)
        with pytest.raises(InvalidKeyError):
            repo.list_commits()
        assert fake_connector.connections == []

    def test_missing_credentials(self, fake_connector):
        remote = RemoteProperties(username="u", address="h", path="/p")
        repo = RemoteCommitRepository(remote, RuntimeParameters(), fake_connector)
        with pytest.raises(MissingCredentialsError):
            repo.get_commit("id1")
        assert fake_connector.connections == []

    def test_conflicting_parameters(self, remote_properties, fake_connector):
        params = RuntimeParameters(password="p", key="k")
        repo = RemoteCommitRepository(remote_properties, params, fake_connector)
        with pytest.raises(ConflictingCredentialsError):
            repo.list_commits()
