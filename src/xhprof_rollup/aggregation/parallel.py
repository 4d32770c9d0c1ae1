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

"""Fan-out helpers for processing many snapshots."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from xhprof_rollup.aggregation.flatten import flatten
from xhprof_rollup.models.paircall import PairCallMap
from xhprof_rollup.models.profile import Profile

logger = logging.getLogger(__name__)


def flatten_many(
    maps: Sequence[PairCallMap],
    max_workers: int | None = None,
) -> list[Profile]:
    """Flatten every snapshot on a thread pool.

    Results come back in input order. The first failing snapshot's
    exception is re-raised.
    """
    if not maps:
        return []

    logger.debug("Flattening %d snapshots (max_workers=%s)", len(maps), max_workers)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(flatten, maps))
