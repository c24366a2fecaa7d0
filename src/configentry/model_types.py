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

"""Enumerations shared across configentry modules."""

from __future__ import annotations

from configentry.compat import StrEnum


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable components.

    Attributes:
        REGISTRY: Entry registration.
        READER: Raw value lookup and reference substitution.
        DOCS: Reference documentation rendering.
        CLI: Command-line interface.
    """

    REGISTRY = "registry"
    READER = "reader"
    DOCS = "docs"
    CLI = "cli"


class EntryKind(StrEnum):
    """Default-resolution policy carried by a config entry."""

    DEFAULT = "default"
    DEFAULT_FUNCTION = "default_function"
    DEFAULT_STRING = "default_string"
    OPTIONAL = "optional"
    FALLBACK = "fallback"


class ReferenceFormat(StrEnum):
    """Output formats supported by the reference documentation renderer."""

    MARKDOWN = "markdown"
    JSON = "json"


__all__ = ["EntryKind", "LogComponent", "LogFormat", "ReferenceFormat"]
