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

"""Common exception hierarchy for configentry."""

from __future__ import annotations

__all__ = [
    "CircularReferenceError",
    "ConfigConversionError",
    "ConfigEntryError",
    "DuplicateConfigEntryError",
]


class ConfigEntryError(Exception):
    """Base error for all configentry exceptions."""


class DuplicateConfigEntryError(ConfigEntryError, ValueError):
    """Raised when an entry is declared under a key that is already registered."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Config entry {key} already registered!")


class ConfigConversionError(ConfigEntryError, ValueError):
    """Raised when a located raw string cannot be converted to the entry's type.

    Attributes:
        key: Key of the entry whose value failed to convert.
        raw_value: The raw string handed to the value converter.
    """

    def __init__(self, key: str, raw_value: str, reason: str) -> None:
        self.key = key
        self.raw_value = raw_value
        super().__init__(f"Invalid value {raw_value!r} for config entry {key}: {reason}")


class CircularReferenceError(ConfigEntryError, ValueError):
    """Raised when variable substitution encounters a reference cycle."""

    def __init__(self, template: str, reference: str) -> None:
        self.template = template
        self.reference = reference
        super().__init__(f"Circular reference in {template}: {reference}")
