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

"""Fixtures shared across all unit tests."""

from __future__ import annotations

import pytest

from configentry.registry import ConfigRegistry
from tests.fixtures.readers import RecordingReader


@pytest.fixture
def registry() -> ConfigRegistry:
    """Provide an isolated registry so tests never share declared keys."""
    return ConfigRegistry()


@pytest.fixture
def empty_reader() -> RecordingReader:
    return RecordingReader()
