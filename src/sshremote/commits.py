# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/commits.py

"""Commit model, tag filters and canonical commit ordering."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class Commit(BaseModel):
    """A commit stored on the remote: its directory name plus metadata."""
    model_config = ConfigDict(frozen=True)

    id: str
    properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def timestamp(self) -> Optional[str]:
        return self.properties.get("timestamp")

    @property
    def tags(self) -> dict[str, Any]:
        tags = self.properties.get("tags")
        return tags if isinstance(tags, dict) else {}


@dataclass(frozen=True)
class Tag:
    """Filter predicate: the key must be present, and equal value if given."""
    key: str
    value: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "Tag":
        """Parse `key` or `key=value`."""
        key, sep, value = text.partition("=")
        return cls(key, value if sep else None)

    def __str__(self) -> str:
        return self.key if self.value is None else f"{self.key}={self.value}"


def matches(properties: Mapping[str, Any], tags: Optional[Iterable[Tag]]) -> bool:
    """True when the commit metadata satisfies every tag in the filter."""
    commit_tags = properties.get("tags")
    if not isinstance(commit_tags, Mapping):
        commit_tags = {}
    for tag in tags or ():
        if tag.key not in commit_tags:
            return False
        if tag.value is not None and commit_tags[tag.key] != tag.value:
            return False
    return True


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp; naive values are taken as UTC."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def sort_descending_by_timestamp(commits: Iterable[Commit]) -> list[Commit]:
    """Newest first. Commits without a usable timestamp go last, in input order."""
    return sorted(
        commits,
        key=lambda commit: parse_timestamp(commit.timestamp) or _OLDEST,
        reverse=True,
    )
