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

"""Typed configuration entries and their default-resolution policies.

A ``ConfigEntry`` knows its key, the legacy alias keys it also accepts, how to
convert a raw string into its value type and back, its documentation and its
visibility. Lookup is shared by every entry: the primary key is tried first,
then each alias in declaration order, and the first present value wins. The
concrete classes differ only in what happens when none of those keys is set:

- ``ConfigEntryWithDefault``: return a fixed value.
- ``ConfigEntryWithDefaultFunction``: call a supplier on every read.
- ``ConfigEntryWithDefaultString``: substitute a raw template via the reader,
  then convert it.
- ``OptionalConfigEntry``: return ``None``.
- ``FallbackConfigEntry``: resolve another entry against the same reader.

Constructing an entry registers it; a key can only be registered once per
registry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Final, Generic, TypeVar

from configentry.compat import override
from configentry.exceptions import ConfigConversionError
from configentry.model_types import EntryKind
from configentry.registry import default_registry

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from configentry.reader import ConfigReaderProtocol
    from configentry.registry import ConfigRegistry

T = TypeVar("T")

UNDEFINED: Final[str] = "<undefined>"


class ConfigEntry(ABC, Generic[T]):
    """Base class for a single named, typed configuration item.

    Attributes are read-only once the entry is constructed.
    """

    kind: ClassVar[EntryKind]

    def __init__(
        self,
        key: str,
        alternatives: Iterable[str],
        value_converter: Callable[[str], T],
        string_converter: Callable[[T], str],
        doc: str = "",
        is_public: bool = True,
        *,
        registry: ConfigRegistry | None = None,
    ) -> None:
        if isinstance(alternatives, str):
            message = f"alternatives for {key} must be a sequence of keys, not a string"
            raise TypeError(message)
        self._key = key
        self._alternatives = tuple(alternatives)
        self._value_converter = value_converter
        self._string_converter = string_converter
        self._doc = doc
        self._is_public = is_public
        object.__setattr__(self, "_sealed", True)
        (registry if registry is not None else default_registry()).register(self)

    @override
    def __setattr__(self, name: str, value: object) -> None:
        if getattr(self, "_sealed", False):
            message = f"{type(self).__name__} is immutable; cannot set {name!r}"
            raise AttributeError(message)
        object.__setattr__(self, name, value)

    @property
    def key(self) -> str:
        return self._key

    @property
    def alternatives(self) -> tuple[str, ...]:
        """Alias keys, tried in this order after the primary key."""
        return self._alternatives

    @property
    def value_converter(self) -> Callable[[str], T]:
        return self._value_converter

    @property
    def string_converter(self) -> Callable[[T], str]:
        return self._string_converter

    @property
    def doc(self) -> str:
        return self._doc

    @property
    def is_public(self) -> bool:
        return self._is_public

    @property
    def default_value(self) -> T | None:
        """Typed default, or ``None`` when the entry has no concrete default."""
        return None

    @property
    @abstractmethod
    def default_value_string(self) -> str:
        """Human-readable default for documentation; never reads configuration."""

    @abstractmethod
    def read_from(self, reader: ConfigReaderProtocol) -> T:
        """Resolve the entry's value from ``reader``.

        Raises:
            ConfigConversionError: If a located raw value fails to convert.
        """

    def _read_string(self, reader: ConfigReaderProtocol) -> str | None:
        value = reader.get(self._key)
        if value is not None:
            return value
        for alternative in self._alternatives:
            value = reader.get(alternative)
            if value is not None:
                return value
        return None

    def _convert(self, raw: str) -> T:
        try:
            return self._value_converter(raw)
        except ConfigConversionError:
            raise
        except (ValueError, TypeError) as exc:
            raise ConfigConversionError(self._key, raw, str(exc)) from exc

    @override
    def __repr__(self) -> str:
        public = "true" if self._is_public else "false"
        return (
            f"ConfigEntry(key={self._key}, defaultValue={self.default_value_string}, "
            f"doc={self._doc}, public={public})"
        )


class ConfigEntryWithDefault(ConfigEntry[T]):
    """Entry that falls back to a fixed value captured at construction."""

    kind: ClassVar[EntryKind] = EntryKind.DEFAULT

    def __init__(
        self,
        key: str,
        alternatives: Iterable[str],
        default: T,
        value_converter: Callable[[str], T],
        string_converter: Callable[[T], str],
        doc: str = "",
        is_public: bool = True,
        *,
        registry: ConfigRegistry | None = None,
    ) -> None:
        self._default = default
        super().__init__(
            key,
            alternatives,
            value_converter,
            string_converter,
            doc,
            is_public,
            registry=registry,
        )

    @property
    @override
    def default_value(self) -> T:
        return self._default

    @property
    @override
    def default_value_string(self) -> str:
        return self.string_converter(self._default)

    @override
    def read_from(self, reader: ConfigReaderProtocol) -> T:
        raw = self._read_string(reader)
        return self._default if raw is None else self._convert(raw)


class ConfigEntryWithDefaultFunction(ConfigEntry[T]):
    """Entry whose default is produced by a supplier on every read.

    The supplier is not memoized, so defaults that depend on the runtime
    environment (for example the number of available CPUs) stay current.
    """

    kind: ClassVar[EntryKind] = EntryKind.DEFAULT_FUNCTION

    def __init__(
        self,
        key: str,
        alternatives: Iterable[str],
        default_function: Callable[[], T],
        value_converter: Callable[[str], T],
        string_converter: Callable[[T], str],
        doc: str = "",
        is_public: bool = True,
        *,
        registry: ConfigRegistry | None = None,
    ) -> None:
        self._default_function = default_function
        super().__init__(
            key,
            alternatives,
            value_converter,
            string_converter,
            doc,
            is_public,
            registry=registry,
        )

    @property
    @override
    def default_value(self) -> T:
        return self._default_function()

    @property
    @override
    def default_value_string(self) -> str:
        return self.string_converter(self._default_function())

    @override
    def read_from(self, reader: ConfigReaderProtocol) -> T:
        raw = self._read_string(reader)
        return self._default_function() if raw is None else self._convert(raw)


class ConfigEntryWithDefaultString(ConfigEntry[T]):
    """Entry whose default is an unconverted string template.

    On a miss the template goes through ``reader.substitute`` and the expanded
    string is converted like any configured value, so a bad default fails the
    same way a bad configured value does.
    """

    kind: ClassVar[EntryKind] = EntryKind.DEFAULT_STRING

    def __init__(
        self,
        key: str,
        alternatives: Iterable[str],
        default: str,
        value_converter: Callable[[str], T],
        string_converter: Callable[[T], str],
        doc: str = "",
        is_public: bool = True,
        *,
        registry: ConfigRegistry | None = None,
    ) -> None:
        self._default_string = default
        super().__init__(
            key,
            alternatives,
            value_converter,
            string_converter,
            doc,
            is_public,
            registry=registry,
        )

    @property
    @override
    def default_value(self) -> T:
        return self._convert(self._default_string)

    @property
    @override
    def default_value_string(self) -> str:
        return self._default_string

    @override
    def read_from(self, reader: ConfigReaderProtocol) -> T:
        raw = self._read_string(reader)
        if raw is None:
            raw = reader.substitute(self._default_string)
        return self._convert(raw)


class OptionalConfigEntry(ConfigEntry[T | None]):
    """Entry without a default; an unset key reads as ``None``."""

    kind: ClassVar[EntryKind] = EntryKind.OPTIONAL

    def __init__(
        self,
        key: str,
        alternatives: Iterable[str],
        value_converter: Callable[[str], T],
        string_converter: Callable[[T], str],
        doc: str = "",
        is_public: bool = True,
        *,
        registry: ConfigRegistry | None = None,
    ) -> None:
        self._raw_value_converter = value_converter
        self._raw_string_converter = string_converter

        def render(value: T | None) -> str:
            return UNDEFINED if value is None else string_converter(value)

        super().__init__(
            key,
            alternatives,
            value_converter,
            render,
            doc,
            is_public,
            registry=registry,
        )

    @property
    def raw_value_converter(self) -> Callable[[str], T]:
        return self._raw_value_converter

    @property
    def raw_string_converter(self) -> Callable[[T], str]:
        return self._raw_string_converter

    @property
    @override
    def default_value_string(self) -> str:
        return UNDEFINED

    @override
    def read_from(self, reader: ConfigReaderProtocol) -> T | None:
        raw = self._read_string(reader)
        return None if raw is None else self._convert(raw)


class FallbackConfigEntry(ConfigEntry[T]):
    """Entry whose default is the full resolution of another entry.

    Fallback targets may themselves be fallback entries; the chain ends at an
    entry with a concrete default policy.
    """

    kind: ClassVar[EntryKind] = EntryKind.FALLBACK

    def __init__(
        self,
        key: str,
        alternatives: Iterable[str],
        doc: str,
        is_public: bool,
        fallback: ConfigEntry[T],
        *,
        registry: ConfigRegistry | None = None,
    ) -> None:
        self._fallback = fallback
        super().__init__(
            key,
            alternatives,
            fallback.value_converter,
            fallback.string_converter,
            doc,
            is_public,
            registry=registry,
        )

    @property
    def fallback(self) -> ConfigEntry[T]:
        return self._fallback

    @property
    @override
    def default_value_string(self) -> str:
        return f"<value of {self._fallback.key}>"

    @override
    def read_from(self, reader: ConfigReaderProtocol) -> T:
        raw = self._read_string(reader)
        return self._fallback.read_from(reader) if raw is None else self._convert(raw)


__all__ = [
    "UNDEFINED",
    "ConfigEntry",
    "ConfigEntryWithDefault",
    "ConfigEntryWithDefaultFunction",
    "ConfigEntryWithDefaultString",
    "FallbackConfigEntry",
    "OptionalConfigEntry",
]
