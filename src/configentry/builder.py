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

"""Fluent helpers for declaring config entries.

Example:
    >>> from configentry import ConfigRegistry
    >>> registry = ConfigRegistry()
    >>> PORT = (
    ...     ConfigBuilder("server.port", registry=registry)
    ...     .doc("Port the server listens on.")
    ...     .with_alternative("port")
    ...     .int_conf()
    ...     .create_with_default(8080)
    ... )
    >>> PORT.default_value_string
    '8080'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Generic, TypeVar

from configentry.compat import Self
from configentry.converters import (
    bool_to_string,
    seq_to_string,
    string_to_seq,
    to_bool,
    to_float,
    to_int,
    to_str,
)
from configentry.entry import (
    ConfigEntry,
    ConfigEntryWithDefault,
    ConfigEntryWithDefaultFunction,
    ConfigEntryWithDefaultString,
    FallbackConfigEntry,
    OptionalConfigEntry,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from configentry.registry import ConfigRegistry

T = TypeVar("T")


@dataclass(slots=True)
class ConfigBuilder:
    """Collects the untyped attributes of an entry before its type is chosen."""

    key: str
    registry: ConfigRegistry | None = None
    alternatives: list[str] = field(default_factory=list)
    documentation: str = ""
    is_public: bool = True

    def doc(self, text: str) -> Self:
        self.documentation = text
        return self

    def internal(self) -> Self:
        self.is_public = False
        return self

    def with_alternative(self, key: str) -> Self:
        """Accept ``key`` as a legacy alias, tried after earlier aliases."""
        self.alternatives.append(key)
        return self

    def int_conf(self) -> TypedConfigBuilder[int]:
        return TypedConfigBuilder(self, to_int, str)

    def float_conf(self) -> TypedConfigBuilder[float]:
        return TypedConfigBuilder(self, to_float, str)

    def bool_conf(self) -> TypedConfigBuilder[bool]:
        return TypedConfigBuilder(self, to_bool, bool_to_string)

    def string_conf(self) -> TypedConfigBuilder[str]:
        return TypedConfigBuilder(self, to_str, to_str)

    def fallback_conf(self, fallback: ConfigEntry[T]) -> FallbackConfigEntry[T]:
        """Create an entry that resolves ``fallback`` when its own keys are unset."""
        return FallbackConfigEntry(
            self.key,
            self.alternatives,
            self.documentation,
            self.is_public,
            fallback,
            registry=self.registry,
        )


class TypedConfigBuilder(Generic[T]):
    """Builder with converters fixed; its ``create_*`` methods register the entry."""

    def __init__(
        self,
        parent: ConfigBuilder,
        value_converter: Callable[[str], T],
        string_converter: Callable[[T], str],
    ) -> None:
        super().__init__()
        self.parent = parent
        self.value_converter = value_converter
        self.string_converter = string_converter

    def to_sequence(self) -> TypedConfigBuilder[list[T]]:
        """Switch to a comma-separated list of the current type."""
        return TypedConfigBuilder(
            self.parent,
            partial(string_to_seq, converter=self.value_converter),
            partial(seq_to_string, converter=self.string_converter),
        )

    def create_with_default(self, default: T) -> ConfigEntryWithDefault[T]:
        return ConfigEntryWithDefault(
            self.parent.key,
            self.parent.alternatives,
            default,
            self.value_converter,
            self.string_converter,
            self.parent.documentation,
            self.parent.is_public,
            registry=self.parent.registry,
        )

    def create_with_default_function(
        self,
        default_function: Callable[[], T],
    ) -> ConfigEntryWithDefaultFunction[T]:
        return ConfigEntryWithDefaultFunction(
            self.parent.key,
            self.parent.alternatives,
            default_function,
            self.value_converter,
            self.string_converter,
            self.parent.documentation,
            self.parent.is_public,
            registry=self.parent.registry,
        )

    def create_with_default_string(self, default: str) -> ConfigEntryWithDefaultString[T]:
        """Create an entry whose default template is substituted and converted on read."""
        return ConfigEntryWithDefaultString(
            self.parent.key,
            self.parent.alternatives,
            default,
            self.value_converter,
            self.string_converter,
            self.parent.documentation,
            self.parent.is_public,
            registry=self.parent.registry,
        )

    def create_optional(self) -> OptionalConfigEntry[T]:
        return OptionalConfigEntry(
            self.parent.key,
            self.parent.alternatives,
            self.value_converter,
            self.string_converter,
            self.parent.documentation,
            self.parent.is_public,
            registry=self.parent.registry,
        )


__all__ = ["ConfigBuilder", "TypedConfigBuilder"]
