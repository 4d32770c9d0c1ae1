# Copyright 2026 Pennyworth Technologies, Inc.
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

"""Edge-level data models: edge keys, pair calls and pair call maps.

A pair call map is one profiling snapshot: every key names a directed
caller->callee edge and every value holds the cost aggregated on it.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

SEPARATOR = "==>"


def parse_pair_name(key: str) -> tuple[str, str]:
    """Split an edge key into (parent, child).

    Splits on the first separator only, so ``"a==>b==>c"`` yields
    ``("a", "b==>c")``. A key without separator is the root call and
    yields an empty parent.
    """
    parent, sep, child = key.partition(SEPARATOR)
    if not sep:
        return "", key
    return parent, child


@dataclass(frozen=True)
class EdgeKey:
    """A parsed edge key."""

    has_parent: bool
    parent: str
    child: str

    @classmethod
    def parse(cls, key: str) -> EdgeKey:
        parent, child = parse_pair_name(key)
        return cls(has_parent=SEPARATOR in key, parent=parent, child=child)

    @classmethod
    def root(cls, child: str) -> EdgeKey:
        return cls(has_parent=False, parent="", child=child)

    @property
    def is_root(self) -> bool:
        return not self.has_parent

    def __str__(self) -> str:
        if self.has_parent:
            return f"{self.parent}{SEPARATOR}{self.child}"
        return self.child


@dataclass(frozen=True)
class PairCall:
    """Cost attributed to one caller->callee edge."""

    count: int = 0
    wall_time: float = 0.0
    cpu_time: float = 0.0
    memory: float = 0.0

    @classmethod
    def zero(cls) -> PairCall:
        return cls()

    def __add__(self, other: PairCall) -> PairCall:
        if not isinstance(other, PairCall):
            return NotImplemented
        return PairCall(
            count=self.count + other.count,
            wall_time=self.wall_time + other.wall_time,
            cpu_time=self.cpu_time + other.cpu_time,
            memory=self.memory + other.memory,
        )

    def __sub__(self, other: PairCall) -> PairCall:
        if not isinstance(other, PairCall):
            return NotImplemented
        return PairCall(
            count=self.count - other.count,
            wall_time=self.wall_time - other.wall_time,
            cpu_time=self.cpu_time - other.cpu_time,
            memory=self.memory - other.memory,
        )

    def __neg__(self) -> PairCall:
        return PairCall(
            count=-self.count,
            wall_time=-self.wall_time,
            cpu_time=-self.cpu_time,
            memory=-self.memory,
        )

    def time_and_count(self) -> PairCall:
        """Project onto wall time and count, dropping cpu and memory."""
        return PairCall(count=self.count, wall_time=self.wall_time)


class PairCallMap(Mapping[str, PairCall]):
    """Immutable mapping from edge key to :class:`PairCall`.

    The constructor copies its input, so later changes to the source
    mapping are not visible through the map.
    """

    __slots__ = ("_calls",)

    def __init__(self, calls: Mapping[str, PairCall] | None = None):
        self._calls: dict[str, PairCall] = dict(calls or {})

    def __getitem__(self, key: str) -> PairCall:
        return self._calls[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._calls)

    def __len__(self) -> int:
        return len(self._calls)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PairCallMap):
            return self._calls == other._calls
        if isinstance(other, Mapping):
            return self._calls == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PairCallMap({self._calls!r})"

    def __sub__(self, other: PairCallMap) -> PairCallMap:
        if not isinstance(other, PairCallMap):
            return NotImplemented
        return self.subtract(other)

    def edges(self) -> Iterator[tuple[EdgeKey, PairCall]]:
        """Iterate over (parsed key, cost) pairs."""
        for key, call in self._calls.items():
            yield EdgeKey.parse(key), call

    def subtract(self, other: PairCallMap) -> PairCallMap:
        """Shortcut for :func:`xhprof_rollup.aggregation.subtract`."""
        from xhprof_rollup.aggregation.reducers import subtract

        return subtract(self, other)

    def flatten(self):
        """Shortcut for :func:`xhprof_rollup.aggregation.flatten`."""
        from xhprof_rollup.aggregation.flatten import flatten

        return flatten(self)

    def nearest_family(self, name: str):
        """Shortcut for :func:`xhprof_rollup.aggregation.nearest_family`."""
        from xhprof_rollup.aggregation.family import nearest_family

        return nearest_family(self, name)
