# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/__init__.py

"""
SSH remote connector: treats a directory on an SSH host as a read-only store
of commits, each a subdirectory holding a metadata.json descriptor.

Importing the package registers SSHRemote under the "ssh" remote type.
"""

from .commits import Commit, Tag
from .config.properties import RemoteProperties, RuntimeParameters
from .remote import REMOTE_TYPE, SSHRemote
from .repository import RemoteCommitRepository
from . import registry

registry.register(SSHRemote())

__all__ = [
    'Commit',
    'Tag',
    'RemoteProperties',
    'RuntimeParameters',
    'RemoteCommitRepository',
    'SSHRemote',
    'REMOTE_TYPE',
    'registry',
]
