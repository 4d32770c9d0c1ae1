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

"""Aggregation engine: pure operations over pair call maps."""

from xhprof_rollup.aggregation.family import nearest_family
from xhprof_rollup.aggregation.flatten import flatten
from xhprof_rollup.aggregation.parallel import flatten_many
from xhprof_rollup.aggregation.reducers import (
    average,
    avg_pair_call_maps,
    reduce_pairwise,
    subtract,
)

__all__ = [
    "average",
    "avg_pair_call_maps",
    "flatten",
    "flatten_many",
    "nearest_family",
    "reduce_pairwise",
    "subtract",
]
