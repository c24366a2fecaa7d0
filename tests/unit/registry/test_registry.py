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

"""Unit tests for ConfigRegistry."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import TYPE_CHECKING

import pytest

from configentry.converters import to_int
from configentry.entry import ConfigEntryWithDefault, OptionalConfigEntry
from configentry.exceptions import DuplicateConfigEntryError
from configentry.model_types import EntryKind
from configentry.registry import ConfigRegistry, default_registry

if TYPE_CHECKING:
    from configentry.entry import ConfigEntry

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("first_optional", [True, False])
def test_duplicate_fails_in_either_order(registry: ConfigRegistry, first_optional: bool) -> None:
    def build(optional: bool) -> ConfigEntry[int] | ConfigEntry[int | None]:
        if optional:
            return OptionalConfigEntry("dup", [], to_int, str, registry=registry)
        return ConfigEntryWithDefault("dup", [], 1, to_int, str, registry=registry)

    first = build(first_optional)
    with pytest.raises(DuplicateConfigEntryError) as excinfo:
        _ = build(not first_optional)
    assert excinfo.value.key == "dup"
    assert registry.find("dup") is first
    assert registry.keys() == ["dup"]


def test_find_missing_returns_none(registry: ConfigRegistry) -> None:
    assert registry.find("missing") is None
    assert "missing" not in registry


def test_registration_order_preserved(registry: ConfigRegistry) -> None:
    for key in ("b", "a", "c"):
        _ = ConfigEntryWithDefault(key, [], 0, to_int, str, registry=registry)
    assert registry.keys() == ["b", "a", "c"]
    assert list(registry) == ["b", "a", "c"]
    assert [entry.key for entry in registry.entries()] == ["b", "a", "c"]


def test_isolated_registries_do_not_share_keys() -> None:
    first = ConfigRegistry()
    second = ConfigRegistry()
    _ = ConfigEntryWithDefault("shared", [], 0, to_int, str, registry=first)
    _ = ConfigEntryWithDefault("shared", [], 1, to_int, str, registry=second)
    assert first.find("shared") is not second.find("shared")


def test_default_registry_is_process_wide() -> None:
    assert default_registry() is default_registry()
    assert isinstance(default_registry(), ConfigRegistry)


def test_concurrent_registration_has_single_winner(registry: ConfigRegistry) -> None:
    workers = 16
    barrier = threading.Barrier(workers)

    def declare(index: int) -> ConfigEntry[int] | None:
        barrier.wait()
        try:
            return ConfigEntryWithDefault("race", [], index, to_int, str, registry=registry)
        except DuplicateConfigEntryError:
            return None

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(declare, range(workers)))

    winners = [entry for entry in results if entry is not None]
    assert len(winners) == 1
    assert registry.find("race") is winners[0]
    assert len(registry) == 1


def test_lookups_wait_for_in_flight_registration(registry: ConfigRegistry) -> None:
    entry = ConfigEntryWithDefault("held", [], 1, to_int, str, registry=registry)
    lookups = {
        "find": lambda: registry.find("held"),
        "contains": lambda: "held" in registry,
        "len": lambda: len(registry),
    }

    with ThreadPoolExecutor(max_workers=len(lookups)) as pool:
        with registry._lock:
            futures = {name: pool.submit(lookup) for name, lookup in lookups.items()}
            finished, _ = wait(futures.values(), timeout=0.2)
            assert not finished
        results = {name: future.result(timeout=5) for name, future in futures.items()}

    assert results == {"find": entry, "contains": True, "len": 1}


def test_describe_filters_internal_and_sorts(registry: ConfigRegistry) -> None:
    _ = ConfigEntryWithDefault("z.public", [], 1, to_int, str, "Z", registry=registry)
    _ = ConfigEntryWithDefault("a.internal", [], 2, to_int, str, "A", False, registry=registry)
    _ = OptionalConfigEntry("m.public", ["m.old"], to_int, str, "M", registry=registry)

    everything = registry.describe()
    assert [item.key for item in everything] == ["a.internal", "m.public", "z.public"]

    public = registry.describe(include_internal=False)
    assert [item.key for item in public] == ["m.public", "z.public"]
    assert public[0].kind is EntryKind.OPTIONAL
    assert public[0].alternatives == ["m.old"]
    assert public[0].default == "<undefined>"


def test_registration_logged_at_debug(
    registry: ConfigRegistry,
    caplog: pytest.LogCaptureFixture,
) -> None:
    logging.getLogger("configentry").propagate = True
    with caplog.at_level(logging.DEBUG, logger="configentry.registry"):
        _ = ConfigEntryWithDefault("logged", [], 1, to_int, str, registry=registry)
    records = [record for record in caplog.records if record.name == "configentry.registry"]
    assert len(records) == 1
    assert records[0].levelno == logging.DEBUG
    assert getattr(records[0], "key", None) == "logged"
    assert getattr(records[0], "entry_kind", None) == "default"
