# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/system/exceptions.py

"""
sshremote-specific exception classes.

Every error raised by the connector derives from SSHRemoteError so callers
can catch the whole family at the plugin boundary. Subclasses carry the
context needed to diagnose a remote-side misconfiguration (property name,
file path, command text, remote output) but never a secret value.
"""


class SSHRemoteError(Exception):
    """Base exception for all sshremote errors."""
    pass


class ConfigError(SSHRemoteError):
    """Raised when connector settings cannot be loaded or validated."""
    pass


class RegistryError(SSHRemoteError):
    """Raised on duplicate registration or lookup of an unknown remote type."""
    pass


# === URI ERRORS ===

class URIError(SSHRemoteError):
    """Base class for malformed remote URIs."""
    pass


class InvalidSchemeError(URIError):
    """URI scheme does not match the remote type."""

    def __init__(self, scheme: str):
        self.scheme = scheme
        super().__init__(f"invalid remote scheme '{scheme}'")


class MissingPathError(URIError):
    def __init__(self):
        super().__init__("missing remote path")


class MissingHostError(URIError):
    def __init__(self):
        super().__init__("missing remote host")


class MissingUsernameError(URIError):
    def __init__(self):
        super().__init__("missing remote username")


class InvalidPropertyError(URIError):
    """An additional property other than the recognized ones was supplied."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"invalid property '{name}'")


# === PROPERTY VALIDATION ERRORS ===

class ValidationError(SSHRemoteError):
    """Raised when a property or parameter map fails validation."""
    pass


class MissingPropertyError(ValidationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"missing required property '{name}'")


class UnknownPropertyError(ValidationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"invalid property '{name}'")


class InvalidValueError(ValidationError):
    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f"invalid value for property '{name}': {reason}")


class InvalidPortError(ValidationError):
    """Port is not numeric or lies outside 1-65535."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid port '{value}'")


# === CREDENTIAL ERRORS ===

class CredentialError(SSHRemoteError):
    """Base class for authentication material problems."""
    pass


class ConflictingCredentialsError(CredentialError):
    def __init__(self, message: str = "only one of password or key can be specified"):
        super().__init__(message)


class MissingCredentialsError(CredentialError):
    def __init__(self, message: str = "one of password or key must be specified"):
        super().__init__(message)


class KeyFileReadError(CredentialError):
    """Key file named by keyFile could not be read."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to read key file '{path}': {cause}")


class PasswordPromptError(CredentialError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"failed to read password: {cause}")


class InvalidKeyError(CredentialError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"failed to parse private key: {cause}")


# === TRANSPORT ERRORS ===

class TransportError(SSHRemoteError):
    """Base class for SSH transport and remote command errors."""
    pass


class SSHConnectionError(TransportError):
    """Connection or authentication against the remote host failed."""

    def __init__(self, address: str, cause: Exception):
        self.address = address
        self.cause = cause
        super().__init__(f"failed to connect to {address}: {cause}")


class CommandError(TransportError):
    """A remote shell command exited unsuccessfully or could not be run."""

    def __init__(self, command: str, output: str = ""):
        self.command = command
        self.output = output
        message = f"failed to run '{command}'"
        if output.strip():
            message = f"{message}: {output.strip()}"
        super().__init__(message)


# === REMOTE DATA ERRORS ===

class InvalidMetadataError(SSHRemoteError):
    """A commit's metadata.json is not a JSON object."""

    def __init__(self, commit_id: str, cause: str):
        self.commit_id = commit_id
        self.cause = cause
        super().__init__(f"invalid metadata for commit '{commit_id}': {cause}")
