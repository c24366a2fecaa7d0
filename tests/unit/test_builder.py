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

"""Unit tests for the fluent entry builder."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from configentry.builder import ConfigBuilder
from configentry.entry import (
    ConfigEntryWithDefault,
    ConfigEntryWithDefaultFunction,
    ConfigEntryWithDefaultString,
    FallbackConfigEntry,
    OptionalConfigEntry,
)
from configentry.exceptions import DuplicateConfigEntryError
from tests.fixtures.readers import RecordingReader

if TYPE_CHECKING:
    from configentry.registry import ConfigRegistry

pytestmark = pytest.mark.unit


def test_int_conf_with_default(registry: ConfigRegistry) -> None:
    entry = (
        ConfigBuilder("server.port", registry=registry)
        .doc("Listening port.")
        .with_alternative("port")
        .with_alternative("legacy.port")
        .int_conf()
        .create_with_default(8080)
    )
    assert isinstance(entry, ConfigEntryWithDefault)
    assert entry.alternatives == ("port", "legacy.port")
    assert entry.doc == "Listening port."
    assert entry.is_public is True
    assert entry.default_value_string == "8080"
    assert entry.read_from(RecordingReader({"legacy.port": "9090"})) == 9090
    assert registry.find("server.port") is entry


def test_internal_marks_entry_private(registry: ConfigRegistry) -> None:
    entry = ConfigBuilder("x", registry=registry).internal().bool_conf().create_with_default(True)
    assert entry.is_public is False
    assert entry.default_value_string == "true"


def test_float_and_string_conf(registry: ConfigRegistry) -> None:
    ratio = ConfigBuilder("ratio", registry=registry).float_conf().create_with_default(0.5)
    name = ConfigBuilder("name", registry=registry).string_conf().create_optional()
    assert ratio.default_value_string == "0.5"
    assert ratio.read_from(RecordingReader({"ratio": "0.25"})) == 0.25
    assert isinstance(name, OptionalConfigEntry)
    assert name.read_from(RecordingReader()) is None


def test_sequence_conf(registry: ConfigRegistry) -> None:
    entry = (
        ConfigBuilder("hosts", registry=registry).string_conf().to_sequence().create_with_default(["a", "b"])
    )
    assert entry.default_value_string == "a,b"
    assert entry.read_from(RecordingReader({"hosts": "x, y"})) == ["x", "y"]


def test_int_sequence_conf(registry: ConfigRegistry) -> None:
    entry = ConfigBuilder("ports", registry=registry).int_conf().to_sequence().create_optional()
    assert entry.read_from(RecordingReader({"ports": "80,443"})) == [80, 443]


def test_default_function_and_string(registry: ConfigRegistry) -> None:
    cores = ConfigBuilder("cores", registry=registry).int_conf().create_with_default_function(lambda: 4)
    memory = ConfigBuilder("memory", registry=registry).int_conf().create_with_default_string("${cores}00")
    assert isinstance(cores, ConfigEntryWithDefaultFunction)
    assert isinstance(memory, ConfigEntryWithDefaultString)
    assert memory.read_from(RecordingReader({"cores": "2"})) == 200


def test_fallback_conf(registry: ConfigRegistry) -> None:
    target = ConfigBuilder("base", registry=registry).int_conf().create_with_default(42)
    entry = ConfigBuilder("derived", registry=registry).doc("Derived.").fallback_conf(target)
    assert isinstance(entry, FallbackConfigEntry)
    assert entry.read_from(RecordingReader()) == 42
    assert entry.doc == "Derived."


def test_builder_changes_after_create_do_not_leak(registry: ConfigRegistry) -> None:
    builder = ConfigBuilder("k", registry=registry).with_alternative("a")
    entry = builder.int_conf().create_with_default(1)
    _ = builder.with_alternative("b")
    assert entry.alternatives == ("a",)


def test_builder_duplicate_key(registry: ConfigRegistry) -> None:
    _ = ConfigBuilder("k", registry=registry).int_conf().create_with_default(1)
    with pytest.raises(DuplicateConfigEntryError):
        _ = ConfigBuilder("k", registry=registry).int_conf().create_optional()
