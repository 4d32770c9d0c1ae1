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

"""Reducers combining several snapshots into one."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from functools import reduce

from xhprof_rollup.errors import EmptyInputError
from xhprof_rollup.models.paircall import PairCall, PairCallMap

logger = logging.getLogger(__name__)


def _union_keys(maps: Sequence[PairCallMap]) -> list[str]:
    keys: dict[str, None] = {}
    for m in maps:
        for key in m:
            keys.setdefault(key, None)
    return list(keys)


def _truncated_div(total: int, n: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(total) // n
    return quotient if total >= 0 else -quotient


def average(maps: Sequence[PairCallMap]) -> PairCallMap:
    """Average several snapshots edge by edge.

    The result holds every key found in any input. A snapshot missing a
    key counts as a zero sample for it, and every sum is divided by the
    number of snapshots. Count uses integer division truncated toward
    zero.

    Args:
        maps: Snapshots to average

    Returns:
        A new PairCallMap

    Raises:
        EmptyInputError: If ``maps`` is empty
    """
    if not maps:
        raise EmptyInputError("Cannot average zero snapshots")

    n = len(maps)
    zero = PairCall.zero()
    result: dict[str, PairCall] = {}

    for key in _union_keys(maps):
        samples = [m.get(key, zero) for m in maps]
        result[key] = PairCall(
            count=_truncated_div(sum(int(s.count) for s in samples), n),
            wall_time=math.fsum(s.wall_time for s in samples) / n,
            cpu_time=math.fsum(s.cpu_time for s in samples) / n,
            memory=math.fsum(s.memory for s in samples) / n,
        )

    logger.info("Averaged %d snapshots into %d edges", n, len(result))
    return PairCallMap(result)


# Name kept for callers that know the operation by its profile-tool name
avg_pair_call_maps = average


def subtract(left: PairCallMap, right: PairCallMap) -> PairCallMap:
    """Edge-by-edge difference ``left - right``.

    Keys missing on one side count as zero. Negative values are kept;
    they mark edges that got cheaper (or disappeared) in ``left``.
    """
    zero = PairCall.zero()
    result = {
        key: left.get(key, zero) - right.get(key, zero)
        for key in _union_keys([left, right])
    }
    logger.debug(
        "Subtracted snapshots of %d and %d edges into %d edges",
        len(left),
        len(right),
        len(result),
    )
    return PairCallMap(result)


def reduce_pairwise(
    maps: Sequence[PairCallMap],
    op: Callable[[PairCallMap, PairCallMap], PairCallMap],
) -> PairCallMap:
    """Fold snapshots left to right with a binary operation."""
    if not maps:
        raise EmptyInputError("Cannot reduce zero snapshots")
    return reduce(op, maps)
