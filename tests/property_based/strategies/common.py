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

"""Shared Hypothesis strategies for property-based tests."""

from __future__ import annotations

from hypothesis import strategies as st

__all__ = [
    "config_keys",
    "key_chains",
    "raw_values",
    "seq_items",
]


def config_keys() -> st.SearchStrategy[str]:
    """Return a strategy that yields dotted configuration keys."""
    segment = st.from_regex(r"[a-z][a-z0-9_]{0,7}", fullmatch=True)
    return st.lists(segment, min_size=1, max_size=3).map(".".join)


def key_chains(max_aliases: int = 4) -> st.SearchStrategy[list[str]]:
    """Return distinct keys: the primary key followed by its aliases.

    Args:
        max_aliases: Maximum number of alias keys after the primary key.

    Returns:
        Hypothesis strategy producing lists of at least one unique key.
    """
    return st.lists(config_keys(), min_size=1, max_size=max_aliases + 1, unique=True)


def raw_values() -> st.SearchStrategy[str]:
    """Raw strings free of substitution markers."""
    return st.text(alphabet=st.characters(exclude_characters="${}"), max_size=12)


def seq_items() -> st.SearchStrategy[list[str]]:
    """Non-empty comma-free items without surrounding whitespace."""
    item = st.from_regex(r"[A-Za-z0-9_./-]{1,8}", fullmatch=True)
    return st.lists(item, max_size=6)
