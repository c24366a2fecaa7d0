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

"""Raw configuration lookup and variable substitution.

Entries only rely on ``ConfigReaderProtocol``: a ``get`` returning the raw
string for a key (or ``None``) and a ``substitute`` expanding references in a
template. ``ConfigReader`` is the bundled implementation. It reads from a
``ConfigProvider`` and expands ``${key}`` and ``${prefix:key}`` references,
where each prefix is bound to its own provider (``env`` is bound to the
process environment by default).
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

from configentry.compat import Self
from configentry.entry import (
    ConfigEntryWithDefault,
    ConfigEntryWithDefaultFunction,
    ConfigEntryWithDefaultString,
    FallbackConfigEntry,
)
from configentry.exceptions import CircularReferenceError
from configentry.logging import structured_extra
from configentry.model_types import LogComponent
from configentry.registry import default_registry

if TYPE_CHECKING:
    from configentry.registry import ConfigRegistry

logger: logging.Logger = logging.getLogger("configentry.reader")

REF_RE: Final[re.Pattern[str]] = re.compile(r"\$\{(?:(\w+?):)?(\S+?)\}")
ENV_PREFIX: Final[str] = "env"


@runtime_checkable
class ConfigReaderProtocol(Protocol):
    """Contract consumed by ``ConfigEntry.read_from``."""

    def get(self, key: str) -> str | None: ...

    def substitute(self, template: str) -> str: ...


@runtime_checkable
class ConfigProvider(Protocol):
    """Source of raw string values."""

    def get(self, key: str) -> str | None: ...


class MapProvider:
    """Provider backed by an in-memory mapping."""

    def __init__(self, values: Mapping[str, str]) -> None:
        super().__init__()
        self._values = values

    def get(self, key: str) -> str | None:
        return self._values.get(key)


class EnvProvider:
    """Provider backed by environment variables.

    Args:
        environ: Mapping to read from. ``None`` reads ``os.environ`` at lookup
            time so later changes to the environment are visible.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        super().__init__()
        self._environ = environ

    def get(self, key: str) -> str | None:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(key)


class ConfigReader:
    """Reads raw values from a provider and expands ``${...}`` references.

    Unprefixed references resolve against the main provider, then against the
    documented default of a registered entry with that key. References that
    resolve to nothing are left in place verbatim.

    Args:
        conf: Main provider, or a mapping wrapped in ``MapProvider``.
        registry: Registry consulted for entry defaults during substitution.
    """

    def __init__(
        self,
        conf: ConfigProvider | Mapping[str, str],
        *,
        registry: ConfigRegistry | None = None,
    ) -> None:
        super().__init__()
        self._conf: ConfigProvider = MapProvider(conf) if isinstance(conf, Mapping) else conf
        self._registry = registry if registry is not None else default_registry()
        self._bindings: dict[str | None, ConfigProvider] = {None: self._conf}
        self.bind_env(EnvProvider())

    def bind(self, prefix: str | None, provider: ConfigProvider) -> Self:
        """Bind ``provider`` to references written as ``${prefix:key}``.

        Returns:
            The reader, for chaining.
        """
        self._bindings[prefix] = provider
        return self

    def bind_env(self, provider: ConfigProvider) -> Self:
        return self.bind(ENV_PREFIX, provider)

    def get(self, key: str) -> str | None:
        """Return the substituted raw value for ``key``, or ``None`` when unset."""
        value = self._conf.get(key)
        return None if value is None else self.substitute(value)

    def substitute(self, template: str) -> str:
        """Expand every ``${key}`` / ``${prefix:key}`` reference in ``template``.

        Raises:
            CircularReferenceError: If expansion revisits a reference.
        """
        if template is None:
            return template
        return self._substitute(template, frozenset())

    def _substitute(self, template: str, used_refs: frozenset[str]) -> str:
        def replace(match: re.Match[str]) -> str:
            prefix, name = match.group(1), match.group(2)
            ref = name if prefix is None else f"{prefix}:{name}"
            if ref in used_refs:
                raise CircularReferenceError(template, ref)
            provider = self._bindings.get(prefix)
            value = None if provider is None else self._get_or_default(provider, name)
            if value is None:
                logger.debug(
                    "Leaving unresolved reference %s in place",
                    match.group(0),
                    extra=structured_extra(component=LogComponent.READER, key=ref),
                )
                return match.group(0)
            return self._substitute(value, used_refs | {ref})

        return REF_RE.sub(replace, template)

    def _get_or_default(self, provider: ConfigProvider, key: str) -> str | None:
        value = provider.get(key)
        if value is not None:
            return value
        entry = self._registry.find(key)
        if isinstance(
            entry,
            ConfigEntryWithDefault | ConfigEntryWithDefaultString | ConfigEntryWithDefaultFunction,
        ):
            return entry.default_value_string
        if isinstance(entry, FallbackConfigEntry):
            return self._get_or_default(provider, entry.fallback.key)
        return None


__all__ = [
    "ENV_PREFIX",
    "REF_RE",
    "ConfigProvider",
    "ConfigReader",
    "ConfigReaderProtocol",
    "EnvProvider",
    "MapProvider",
]
