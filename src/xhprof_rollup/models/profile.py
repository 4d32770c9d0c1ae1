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

"""Function-level data models derived from a pair call map."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any

from xhprof_rollup.errors import InvalidFieldError, MissingRootError
from xhprof_rollup.models.paircall import PairCallMap

# Public metric names mapped to Call attributes.
SORT_FIELDS: dict[str, str] = {
    "Count": "count",
    "WallTime": "wall_time",
    "ExclusiveWallTime": "exclusive_wall_time",
    "CpuTime": "cpu_time",
    "ExclusiveCpuTime": "exclusive_cpu_time",
    "Memory": "memory",
    "ExclusiveMemory": "exclusive_memory",
    "IoTime": "io_time",
    "ExclusiveIoTime": "exclusive_io_time",
}


def resolve_sort_field(name: str) -> str:
    """Return the Call attribute for a public metric name such as ``WallTime``."""
    if name in SORT_FIELDS:
        return SORT_FIELDS[name]
    raise InvalidFieldError(name, tuple(SORT_FIELDS))


@dataclass(frozen=True)
class Call:
    """Inclusive and exclusive cost of one function."""

    name: str
    count: int = 0
    wall_time: float = 0.0
    exclusive_wall_time: float = 0.0
    cpu_time: float = 0.0
    exclusive_cpu_time: float = 0.0
    memory: float = 0.0
    exclusive_memory: float = 0.0
    io_time: float = 0.0
    exclusive_io_time: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Profile:
    """Flattened snapshot: one Call per function plus the root call."""

    calls: tuple[Call, ...] = ()
    main_name: str | None = None

    @property
    def main(self) -> Call:
        """The call reached through the root edge."""
        if self.main_name is None:
            raise MissingRootError("Snapshot has no root call")
        call = self.get(self.main_name)
        if call is None:
            raise MissingRootError(f"Root call '{self.main_name}' not in profile")
        return call

    def get(self, name: str) -> Call | None:
        for call in self.calls:
            if call.name == name:
                return call
        return None

    def __len__(self) -> int:
        return len(self.calls)

    def sort_by(self, field_name: str) -> Profile:
        """Return a copy ordered by ``field_name``, largest first.

        The sort is stable: calls with equal values keep their relative
        order.

        Raises:
            InvalidFieldError: If the field is not a known metric
        """
        attr = resolve_sort_field(field_name)
        ordered = sorted(self.calls, key=lambda c: getattr(c, attr), reverse=True)
        return replace(self, calls=tuple(ordered))

    def top(self, limit: int | None) -> Profile:
        if limit is None:
            return self
        return replace(self, calls=self.calls[:limit])

    def to_dict(self) -> dict[str, Any]:
        return {
            "main": self.main_name,
            "calls": [c.to_dict() for c in self.calls],
        }


@dataclass(frozen=True)
class NearestFamily:
    """Direct callers and callees of one function.

    Neighbor entries only carry wall time and count. Instances are
    unhashable, like the PairCallMaps they hold.
    """

    __hash__ = None  # type: ignore[assignment]

    name: str
    children: PairCallMap = field(default_factory=PairCallMap)
    parents: PairCallMap = field(default_factory=PairCallMap)
    children_count: int = 0
    parents_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "children": {
                k: {"count": v.count, "wall_time": v.wall_time}
                for k, v in self.children.items()
            },
            "parents": {
                k: {"count": v.count, "wall_time": v.wall_time}
                for k, v in self.parents.items()
            },
            "children_count": self.children_count,
            "parents_count": self.parents_count,
        }
