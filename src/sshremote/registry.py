# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/registry.py

"""Lookup table of remote plugins keyed by their type name."""

from typing import Protocol

from loguru import logger

from sshremote.system.exceptions import RegistryError


class Remote(Protocol):
    def type(self) -> str:
        ...


_remotes: dict[str, Remote] = {}


def register(remote: Remote) -> None:
    name = remote.type()
    if name in _remotes:
        raise RegistryError(f"remote type '{name}' is already registered")
    _remotes[name] = remote
    logger.debug(f"Registered remote type '{name}'")


def get(type_name: str) -> Remote:
    try:
        return _remotes[type_name]
    except KeyError:
        raise RegistryError(f"no remote registered for type '{type_name}'")


def registered_types() -> list[str]:
    return sorted(_remotes)
