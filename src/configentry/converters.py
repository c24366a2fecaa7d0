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

"""String converters for typed config entries.

Each ``to_*`` function parses a raw configuration string and raises
``ValueError`` when it cannot; entries wrap that failure with the offending
key. The ``*_to_string`` helpers render typed values back for documentation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

T = TypeVar("T")


def to_int(raw: str) -> int:
    """Parse a base-10 integer, ignoring surrounding whitespace."""
    text = raw.strip()
    try:
        return int(text)
    except ValueError as exc:
        message = f"should be int, but was {raw!r}"
        raise ValueError(message) from exc


def to_float(raw: str) -> float:
    """Parse a floating point number, ignoring surrounding whitespace."""
    text = raw.strip()
    try:
        return float(text)
    except ValueError as exc:
        message = f"should be float, but was {raw!r}"
        raise ValueError(message) from exc


def to_bool(raw: str) -> bool:
    """Parse ``true`` or ``false`` case-insensitively.

    Raises:
        ValueError: For anything else, including ``1``/``0`` and ``yes``/``no``.
    """
    match raw.strip().lower():
        case "true":
            return True
        case "false":
            return False
        case _:
            message = f"should be boolean, but was {raw!r}"
            raise ValueError(message)


def to_str(raw: str) -> str:
    return raw


def bool_to_string(value: bool) -> str:
    return "true" if value else "false"


def string_to_seq(raw: str, converter: Callable[[str], T]) -> list[T]:
    """Split a comma-separated string and convert each non-empty item.

    Args:
        raw: Comma-separated raw value.
        converter: Converter applied to each trimmed item.

    Returns:
        Converted items in their original order.
    """
    return [converter(item) for item in (part.strip() for part in raw.split(",")) if item]


def seq_to_string(values: Sequence[T], converter: Callable[[T], str]) -> str:
    """Join converted items with commas."""
    return ",".join(converter(value) for value in values)


__all__ = [
    "bool_to_string",
    "seq_to_string",
    "string_to_seq",
    "to_bool",
    "to_float",
    "to_int",
    "to_str",
]
