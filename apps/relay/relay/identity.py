"""GitHub login -> Slack user name mapping."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

logger = logging.getLogger(__name__)

PAIR_SEPARATOR = ";"
FIELD_SEPARATOR = ","


class ConfigError(ValueError):
    """Raised when process configuration cannot be loaded."""


class UserMapError(ConfigError):
    """Raised when a USERMAP entry is malformed."""


class IdentityMap:
    """Immutable lookup table from source-platform logins to chat user names."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def parse(cls, raw: str) -> IdentityMap:
        """Build a map from a ``src,dst;src,dst`` string.

        Args:
            raw: The USERMAP value. Blank segments are ignored.

        Returns:
            The parsed IdentityMap

        Raises:
            UserMapError: If a segment is missing its comma or either side is empty
        """
        entries: dict[str, str] = {}
        for segment in (raw or "").split(PAIR_SEPARATOR):
            segment = segment.strip()
            if not segment:
                continue
            source, sep, destination = segment.partition(FIELD_SEPARATOR)
            source = source.strip()
            destination = destination.strip()
            if not sep or not source or not destination:
                msg = f"Malformed USERMAP entry {segment!r}: expected 'github_login,slack_name'"
                raise UserMapError(msg)
            entries[source] = destination
        logger.debug("Loaded %d USERMAP entries", len(entries))
        return cls(entries)

    def resolve(self, source_id: str) -> str:
        """Return the mapped name for ``source_id``, or ``""`` when unmapped."""
        return self._entries.get(source_id, "")

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
