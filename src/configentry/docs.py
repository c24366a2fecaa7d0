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

"""Reference documentation for declared configuration entries.

Descriptions are built from an entry's static metadata only. Rendering never
resolves a value against a reader, so computed and fallback defaults are shown
by their documented default string rather than by their current value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from configentry.logging import structured_extra
from configentry.model_types import EntryKind, LogComponent

if TYPE_CHECKING:
    from configentry.entry import ConfigEntry
    from configentry.registry import ConfigRegistry

logger: logging.Logger = logging.getLogger("configentry.docs")

STRICT_MODEL_CONFIG: ConfigDict = ConfigDict(extra="forbid", frozen=True)


class ConfigEntryDescription(BaseModel):
    """Serializable description of a single config entry.

    Attributes:
        key: Primary key of the entry.
        alternatives: Alias keys in lookup order.
        default: Human-readable rendering of the default.
        doc: Free-text documentation.
        public: Whether the entry is part of the public surface.
        kind: Default-resolution policy of the entry.
    """

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    key: str
    alternatives: list[str] = Field(default_factory=list)
    default: str | None = None
    doc: str = ""
    public: bool = True
    kind: EntryKind


_DESCRIPTION_LIST: TypeAdapter[list[ConfigEntryDescription]] = TypeAdapter(
    list[ConfigEntryDescription],
)


def describe_entry(entry: ConfigEntry[Any]) -> ConfigEntryDescription:
    """Build the documentation description of ``entry``."""
    return ConfigEntryDescription(
        key=entry.key,
        alternatives=list(entry.alternatives),
        default=entry.default_value_string,
        doc=entry.doc,
        public=entry.is_public,
        kind=entry.kind,
    )


def _md_escape(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def _md_row(description: ConfigEntryDescription) -> str:
    aliases = ", ".join(f"`{alias}`" for alias in description.alternatives) or "-"
    default = "-" if description.default is None else f"`{_md_escape(description.default)}`"
    return (
        f"| `{description.key}` | {default} | {aliases} | {_md_escape(description.doc)} |"
    )


def render_reference_markdown(
    registry: ConfigRegistry,
    *,
    include_internal: bool = False,
) -> str:
    """Render the registry as a Markdown reference table.

    Args:
        registry: Registry whose entries are documented.
        include_internal: Whether internal entries are included.

    Returns:
        Markdown document with one table row per entry, sorted by key.
    """
    descriptions = registry.describe(include_internal=include_internal)
    lines: list[str] = [
        "# Configuration reference",
        "",
        "| Key | Default | Aliases | Description |",
        "| --- | --- | --- | --- |",
    ]
    lines.extend(_md_row(description) for description in descriptions)
    lines.append("")
    logger.debug(
        "Rendered %d config entries as markdown",
        len(descriptions),
        extra=structured_extra(component=LogComponent.DOCS),
    )
    return "\n".join(lines)


def render_reference_json(
    registry: ConfigRegistry,
    *,
    include_internal: bool = False,
) -> str:
    """Render the registry as a JSON array of entry descriptions.

    Args:
        registry: Registry whose entries are documented.
        include_internal: Whether internal entries are included.

    Returns:
        Indented JSON document, sorted by key.
    """
    descriptions = registry.describe(include_internal=include_internal)
    payload = _DESCRIPTION_LIST.dump_json(descriptions, indent=2).decode("utf-8")
    logger.debug(
        "Rendered %d config entries as json",
        len(descriptions),
        extra=structured_extra(component=LogComponent.DOCS),
    )
    return f"{payload}\n"


__all__ = [
    "ConfigEntryDescription",
    "describe_entry",
    "render_reference_json",
    "render_reference_markdown",
]
