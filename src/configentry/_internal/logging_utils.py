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

"""Logging setup and structured ``extra`` payloads for configentry.

Every module logs through a ``configentry.<component>`` logger. The CLI calls
:func:`configure_logging` once; library users who never call it get the
standard library defaults and see nothing below WARNING.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Final

from configentry.compat import TypedDict, Unpack, override
from configentry.model_types import LogComponent, LogFormat

ROOT_LOGGER_NAME: Final[str] = "configentry"
LOG_FORMAT_ENV: Final[str] = "CONFIGENTRY_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "CONFIGENTRY_LOG_LEVEL"

_LEVEL_VALUES: Final[Mapping[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
_FALLBACK_LEVEL: Final[str] = "info"

LOG_FORMATS: Final[tuple[str, ...]] = tuple(member.value for member in LogFormat)
LOG_LEVELS: Final[tuple[str, ...]] = tuple(_LEVEL_VALUES)


class _StructuredFields(TypedDict, total=False):
    key: str
    entry_kind: str
    details: Mapping[str, object]


class StructuredLogExtra(_StructuredFields):
    """``extra=`` mapping attached to configentry log records."""

    component: LogComponent


_RECORD_FIELDS: Final[tuple[str, ...]] = ("component", "key", "entry_kind", "details")


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Format and level chosen by :func:`configure_logging`."""

    format: LogFormat
    level: int
    level_name: str


class JSONLogFormatter(logging.Formatter):
    """One JSON object per record, structured fields at the top level."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, object] = {
            "timestamp": created.isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (field, record.__dict__[field]) for field in _RECORD_FIELDS if field in record.__dict__
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class TextLogFormatter(logging.Formatter):
    """``[LEVEL] message`` lines for terminals."""

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")


def _from_env(explicit: str | int | None, variable: str) -> str | int | None:
    if explicit is not None:
        return explicit
    return os.environ.get(variable) or None


def _level_of(requested: str | int | None) -> tuple[int, str]:
    if isinstance(requested, int):
        return requested, logging.getLevelName(requested).lower()
    name = (requested or _FALLBACK_LEVEL).strip().lower()
    if name not in _LEVEL_VALUES:
        name = _FALLBACK_LEVEL
    return _LEVEL_VALUES[name], name


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Install a single handler on the ``configentry`` logger tree.

    Args:
        log_format: ``text`` or ``json``. When omitted, ``CONFIGENTRY_LOG_FORMAT``
            is consulted, then ``text``.
        log_level: Level name or number. When omitted,
            ``CONFIGENTRY_LOG_LEVEL`` is consulted, then ``info``. Unknown
            names resolve to ``info``.

    Returns:
        The resolved configuration.

    Raises:
        ValueError: If the requested format is not a known ``LogFormat``.
    """
    requested_format = _from_env(log_format, LOG_FORMAT_ENV)
    if isinstance(requested_format, LogFormat):
        selected = requested_format
    else:
        selected = LogFormat.from_str(str(requested_format or LogFormat.TEXT.value))
    level, level_name = _level_of(_from_env(log_level, LOG_LEVEL_ENV))

    handler = logging.StreamHandler()
    handler.setFormatter(JSONLogFormatter() if selected is LogFormat.JSON else TextLogFormatter())

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False
    for component in LogComponent:
        logging.getLogger(f"{ROOT_LOGGER_NAME}.{component.value}").setLevel(level)
    return LogConfig(format=selected, level=level, level_name=level_name)


def structured_extra(
    component: LogComponent,
    **fields: Unpack[_StructuredFields],
) -> StructuredLogExtra:
    """Build the ``extra=`` payload for a log call.

    ``key`` and ``entry_kind`` are stringified; empty ``details`` are dropped.
    """
    extra: StructuredLogExtra = {"component": component}
    if fields.get("key") is not None:
        extra["key"] = str(fields["key"])
    if fields.get("entry_kind") is not None:
        extra["entry_kind"] = str(fields["entry_kind"])
    details = fields.get("details")
    if details:
        extra["details"] = dict(details)
    return extra


__all__ = [
    "LOG_FORMATS",
    "LOG_LEVELS",
    "LogConfig",
    "StructuredLogExtra",
    "configure_logging",
    "structured_extra",
]
