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

"""Nearest family extraction: direct callers and callees of a function."""

from __future__ import annotations

import logging

from xhprof_rollup.models.paircall import PairCall, PairCallMap
from xhprof_rollup.models.profile import NearestFamily

logger = logging.getLogger(__name__)


def nearest_family(pair_calls: PairCallMap, name: str) -> NearestFamily:
    """Collect the direct neighborhood of ``name``.

    Children are keyed by callee and parents by caller. The root edge
    counts as an incoming edge from the empty-named caller ``""``.
    Entries keep wall time and count only. Should the same neighbor be
    reached through more than one edge, its entries are summed.
    """
    zero = PairCall.zero()
    children: dict[str, PairCall] = {}
    parents: dict[str, PairCall] = {}
    children_count = 0
    parents_count = 0

    for edge, cost in pair_calls.edges():
        if edge.has_parent and edge.parent == name:
            children[edge.child] = children.get(edge.child, zero) + cost.time_and_count()
            children_count += cost.count
        if edge.child == name:
            parents[edge.parent] = parents.get(edge.parent, zero) + cost.time_and_count()
            parents_count += cost.count

    logger.debug(
        "Nearest family of %s: %d children, %d parents",
        name,
        len(children),
        len(parents),
    )
    return NearestFamily(
        name=name,
        children=PairCallMap(children),
        parents=PairCallMap(parents),
        children_count=children_count,
        parents_count=parents_count,
    )
