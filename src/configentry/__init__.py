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

"""configentry - typed configuration entries.

Declare configuration keys once, with their legacy aliases, converters,
documentation and default policy, then resolve them against any reader that
can look up raw strings and substitute ``${...}`` references.
"""

from __future__ import annotations

from .builder import ConfigBuilder, TypedConfigBuilder
from .docs import (
    ConfigEntryDescription,
    describe_entry,
    render_reference_json,
    render_reference_markdown,
)
from .entry import (
    UNDEFINED,
    ConfigEntry,
    ConfigEntryWithDefault,
    ConfigEntryWithDefaultFunction,
    ConfigEntryWithDefaultString,
    FallbackConfigEntry,
    OptionalConfigEntry,
)
from .error_codes import error_code_catalog, error_code_for
from .exceptions import (
    CircularReferenceError,
    ConfigConversionError,
    ConfigEntryError,
    DuplicateConfigEntryError,
)
from .reader import ConfigProvider, ConfigReader, ConfigReaderProtocol, EnvProvider, MapProvider
from .registry import ConfigRegistry, default_registry

__all__ = [
    "UNDEFINED",
    "CircularReferenceError",
    "ConfigBuilder",
    "ConfigConversionError",
    "ConfigEntry",
    "ConfigEntryDescription",
    "ConfigEntryError",
    "ConfigEntryWithDefault",
    "ConfigEntryWithDefaultFunction",
    "ConfigEntryWithDefaultString",
    "ConfigProvider",
    "ConfigReader",
    "ConfigReaderProtocol",
    "ConfigRegistry",
    "DuplicateConfigEntryError",
    "EnvProvider",
    "FallbackConfigEntry",
    "MapProvider",
    "OptionalConfigEntry",
    "TypedConfigBuilder",
    "__version__",
    "default_registry",
    "describe_entry",
    "error_code_catalog",
    "error_code_for",
    "render_reference_json",
    "render_reference_markdown",
]

__version__ = "0.1.0"
