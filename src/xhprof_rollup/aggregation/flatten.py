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

"""Flatten a pair call map into per-function inclusive/exclusive costs."""

from __future__ import annotations

import logging

from xhprof_rollup.errors import AmbiguousRootError
from xhprof_rollup.models.paircall import PairCall, PairCallMap
from xhprof_rollup.models.profile import Call, Profile

logger = logging.getLogger(__name__)


def _build_call(name: str, inclusive: PairCall, outgoing: PairCall) -> Call:
    exclusive = inclusive - outgoing
    return Call(
        name=name,
        count=inclusive.count,
        wall_time=inclusive.wall_time,
        exclusive_wall_time=exclusive.wall_time,
        cpu_time=inclusive.cpu_time,
        exclusive_cpu_time=exclusive.cpu_time,
        memory=inclusive.memory,
        exclusive_memory=exclusive.memory,
        io_time=inclusive.wall_time - inclusive.cpu_time,
        exclusive_io_time=exclusive.wall_time - exclusive.cpu_time,
    )


def flatten(pair_calls: PairCallMap) -> Profile:
    """Compute one Call per function named in the snapshot.

    Inclusive cost of a function is the sum over every edge into it;
    exclusive cost subtracts the sum over every edge out of it. A name
    that only ever appears as a caller gets zero inclusive cost.

    Args:
        pair_calls: The snapshot to flatten

    Returns:
        Profile with calls in first-appearance order

    Raises:
        AmbiguousRootError: If more than one edge has no caller
    """
    zero = PairCall.zero()
    inclusive: dict[str, PairCall] = {}
    outgoing: dict[str, PairCall] = {}
    # dict keeps first-appearance order
    names: dict[str, None] = {}
    roots: list[str] = []

    for edge, cost in pair_calls.edges():
        if edge.is_root:
            roots.append(edge.child)
        else:
            names.setdefault(edge.parent, None)
            outgoing[edge.parent] = outgoing.get(edge.parent, zero) + cost

        names.setdefault(edge.child, None)
        inclusive[edge.child] = inclusive.get(edge.child, zero) + cost

    if len(roots) > 1:
        raise AmbiguousRootError(roots)
    if not roots:
        logger.warning("Snapshot of %d edges has no root call", len(pair_calls))

    calls = tuple(
        _build_call(name, inclusive.get(name, zero), outgoing.get(name, zero))
        for name in names
    )

    logger.debug("Flattened %d edges into %d calls", len(pair_calls), len(calls))
    return Profile(calls=calls, main_name=roots[0] if roots else None)
