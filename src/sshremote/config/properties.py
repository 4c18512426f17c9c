# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/config/properties.py

"""
Typed models for the persisted remote properties and the per-call runtime
parameters, plus the validators that guard the raw property maps.

The plugin contract exchanges loosely typed maps (they may have been
round-tripped through JSON, so a port can arrive as a float). Those maps are
validated and coerced once here; everything downstream works with
RemoteProperties / RuntimeParameters.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from typing import Any, Final, Optional

from pydantic import BaseModel, ConfigDict, Field

from sshremote.system.exceptions import (
    ConflictingCredentialsError,
    InvalidPortError,
    InvalidValueError,
    MissingPropertyError,
    UnknownPropertyError,
)


# ---- Constants ----

REDACTED: Final = "*****"

REMOTE_REQUIRED: Final[tuple[str, ...]] = ("username", "address", "path")
REMOTE_OPTIONAL: Final[tuple[str, ...]] = ("password", "port", "keyFile")

PARAMETERS_REQUIRED: Final[tuple[str, ...]] = ()
PARAMETERS_OPTIONAL: Final[tuple[str, ...]] = ("password", "key")

MIN_PORT: Final = 1
MAX_PORT: Final = 65535


def coerce_port(value: Any) -> int:
    """Coerce a port from its persisted representation to an int.

    Integers and real numbers with no fractional part (including numpy-style
    float32/float64 scalars) are accepted. Strings, booleans and anything
    outside 1-65535 raise InvalidPortError.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidPortError(value)
    if isinstance(value, numbers.Integral):
        port = int(value)
    else:
        as_float = float(value)
        if not as_float.is_integer():
            raise InvalidPortError(value)
        port = int(as_float)
    if port < MIN_PORT or port > MAX_PORT:
        raise InvalidPortError(value)
    return port


def _check_fields(properties: Mapping[str, Any], required: tuple[str, ...],
                  optional: tuple[str, ...]) -> None:
    for name in required:
        if name not in properties:
            raise MissingPropertyError(name)
    allowed = set(required) | set(optional)
    for name in properties:
        if name not in allowed:
            raise UnknownPropertyError(name)


def _check_string(properties: Mapping[str, Any], name: str, required: bool) -> None:
    value = properties.get(name)
    if value is None and not required:
        return
    if not isinstance(value, str):
        raise InvalidValueError(name, "must be a string")
    if required and not value:
        raise InvalidValueError(name, "must not be empty")


def validate_remote(properties: Mapping[str, Any]) -> None:
    """Validate a persisted remote property map.

    Raises:
        MissingPropertyError: a required key is absent
        UnknownPropertyError: a key outside the allowed set is present
        InvalidValueError: a value has the wrong type or is empty
        InvalidPortError: port is not numeric or out of range
        ConflictingCredentialsError: both password and keyFile are set
    """
    _check_fields(properties, REMOTE_REQUIRED, REMOTE_OPTIONAL)

    for name in ("username", "address"):
        _check_string(properties, name, required=True)
    if not isinstance(properties["path"], str):
        raise InvalidValueError("path", "must be a string")
    for name in ("password", "keyFile"):
        _check_string(properties, name, required=False)

    if properties.get("port") is not None:
        coerce_port(properties["port"])

    if properties.get("password") and properties.get("keyFile"):
        raise ConflictingCredentialsError("only one of password or key file can be specified")


def validate_parameters(parameters: Mapping[str, Any]) -> None:
    """Validate a runtime parameter map: only password and key are allowed."""
    _check_fields(parameters, PARAMETERS_REQUIRED, PARAMETERS_OPTIONAL)
    for name in PARAMETERS_OPTIONAL:
        _check_string(parameters, name, required=False)


class RemoteProperties(BaseModel):
    """Canonical description of an SSH remote."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    username: str
    address: str
    path: str
    password: Optional[str] = None
    port: Optional[int] = Field(default=None, ge=MIN_PORT, le=MAX_PORT)
    key_file: Optional[str] = Field(default=None, alias="keyFile")

    @classmethod
    def from_mapping(cls, properties: Mapping[str, Any]) -> "RemoteProperties":
        """Validate a raw property map and build the typed model from it."""
        validate_remote(properties)
        data = dict(properties)
        if data.get("port") is not None:
            data["port"] = coerce_port(data["port"])
        return cls.model_validate(data)

    def to_mapping(self) -> dict[str, Any]:
        """Persisted form: camelCase keys, unset keys omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @property
    def is_relative(self) -> bool:
        return not self.path.startswith("/")

    def __repr_args__(self):
        for name, value in super().__repr_args__():
            if name == "password" and value is not None:
                value = REDACTED
            yield name, value

    def __str__(self) -> str:
        port = f":{self.port}" if self.port is not None else ""
        return f"SSH remote {self.username}@{self.address}{port} at {self.path}"


class RuntimeParameters(BaseModel):
    """Per-call secret material: a password or PEM private key text."""
    model_config = ConfigDict(frozen=True)

    password: Optional[str] = None
    key: Optional[str] = None

    @classmethod
    def from_mapping(cls, parameters: Optional[Mapping[str, Any]]) -> "RuntimeParameters":
        parameters = parameters or {}
        validate_parameters(parameters)
        return cls.model_validate(dict(parameters))

    def to_mapping(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def __repr_args__(self):
        for name, value in super().__repr_args__():
            if value is not None:
                value = REDACTED
            yield name, value
