# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/credentials.py

"""
Credential resolution for SSH remotes.

Authentication material can come from three places, highest priority first:

1. Runtime parameters supplied for this call (`key` or `password`)
2. A password stored in the remote properties
3. Nothing, in which case resolution fails

resolve_parameters() produces the runtime parameters before a call, reading
the configured key file or prompting for a password when the remote stores
neither.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Final, Optional

import typer
from loguru import logger

from sshremote.config.properties import REDACTED, RemoteProperties, RuntimeParameters
from sshremote.system.exceptions import (
    ConflictingCredentialsError,
    KeyFileReadError,
    MissingCredentialsError,
    PasswordPromptError,
)

PASSWORD_PROMPT: Final = "password: "

PasswordPrompt = Callable[[str], str]


@dataclass(frozen=True)
class ResolvedAuth:
    """Outcome of credential resolution; exactly one field is set."""
    password: Optional[str] = None
    key: Optional[str] = None

    def __repr__(self) -> str:
        kind = "key" if self.key is not None else "password"
        return f"ResolvedAuth({kind}={REDACTED})"


def resolve_auth(remote: RemoteProperties, parameters: RuntimeParameters) -> ResolvedAuth:
    """Choose the password or key to authenticate with.

    Runtime parameters always win over a stored remote password, so a caller
    can override the persisted secret without rewriting the configuration.

    Raises:
        ConflictingCredentialsError: both password and key were supplied
        MissingCredentialsError: no credential is available anywhere
    """
    if parameters.password is not None and parameters.key is not None:
        raise ConflictingCredentialsError()
    if parameters.key is not None:
        return ResolvedAuth(key=parameters.key)
    if parameters.password is not None:
        return ResolvedAuth(password=parameters.password)
    if remote.password is not None:
        return ResolvedAuth(password=remote.password)
    raise MissingCredentialsError()


def terminal_password_prompt(text: str) -> str:
    """Prompt on the controlling terminal without echoing the input."""
    return typer.prompt(text, hide_input=True, prompt_suffix="", show_default=False)


def resolve_parameters(remote: RemoteProperties,
                       prompt: PasswordPrompt = terminal_password_prompt) -> RuntimeParameters:
    """Gather the runtime parameters needed to reach a remote.

    Args:
        remote: Stored remote properties
        prompt: Hidden-input prompt used when no credential is stored

    Returns:
        RuntimeParameters with `key` set from the key file, `password` set
        from the prompt, or nothing when the remote already stores a password

    Raises:
        KeyFileReadError: the key file could not be read
        PasswordPromptError: the password could not be read
    """
    if remote.key_file:
        key_path = Path(remote.key_file).expanduser()
        try:
            key = key_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise KeyFileReadError(remote.key_file, e)
        logger.debug(f"Read private key from {key_path}")
        return RuntimeParameters(key=key)

    if remote.password is None:
        try:
            password = prompt(PASSWORD_PROMPT)
        except (typer.Abort, EOFError, OSError) as e:
            raise PasswordPromptError(e)
        return RuntimeParameters(password=password)

    return RuntimeParameters()
