# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Process-wide registry of declared configuration entries.

Every entry registers itself here when it is constructed. The registry is
append-only: keys are claimed once for the lifetime of the registry and never
released. It exists for introspection and documentation tooling; resolving a
value through ``ConfigEntry.read_from`` never consults it.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from configentry.docs import describe_entry
from configentry.exceptions import DuplicateConfigEntryError
from configentry.logging import structured_extra
from configentry.model_types import LogComponent

if TYPE_CHECKING:
    from collections.abc import Iterator

    from configentry.docs import ConfigEntryDescription
    from configentry.entry import ConfigEntry

logger: logging.Logger = logging.getLogger("configentry.registry")


class ConfigRegistry:
    """Thread-safe mapping from key to config entry.

    Entries of any value type share one registry, so lookups return
    ``ConfigEntry[Any]``; typed reads stay on the entry objects held by
    their declaring modules.
    """

    def __init__(self) -> None:
        super().__init__()
        self._entries: dict[str, ConfigEntry[Any]] = {}
        self._lock = threading.Lock()

    def register(self, entry: ConfigEntry[Any]) -> None:
        """Insert ``entry`` under its key unless the key is already taken.

        Args:
            entry: Entry to register.

        Raises:
            DuplicateConfigEntryError: If another entry already owns the key.
        """
        with self._lock:
            if entry.key in self._entries:
                raise DuplicateConfigEntryError(entry.key)
            self._entries[entry.key] = entry
        logger.debug(
            "Registered config entry %s",
            entry.key,
            extra=structured_extra(
                component=LogComponent.REGISTRY,
                key=entry.key,
                entry_kind=entry.kind,
            ),
        )

    def find(self, key: str) -> ConfigEntry[Any] | None:
        """Return the entry registered under ``key``, or ``None``."""
        with self._lock:
            return self._entries.get(key)

    def keys(self) -> list[str]:
        """Return registered keys in registration order."""
        with self._lock:
            return list(self._entries)

    def entries(self) -> list[ConfigEntry[Any]]:
        """Return registered entries in registration order."""
        with self._lock:
            return list(self._entries.values())

    def describe(self, *, include_internal: bool = True) -> list[ConfigEntryDescription]:
        """Describe registered entries for reference documentation.

        Args:
            include_internal: Whether internal (non-public) entries are listed.

        Returns:
            Descriptions sorted by key.
        """
        selected = [entry for entry in self.entries() if include_internal or entry.is_public]
        return [describe_entry(entry) for entry in sorted(selected, key=lambda item: item.key)]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())


_DEFAULT_REGISTRY = ConfigRegistry()


def default_registry() -> ConfigRegistry:
    """Return the process-wide registry used when no registry is injected."""
    return _DEFAULT_REGISTRY


__all__ = ["ConfigRegistry", "default_registry"]
