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

"""xhprof-rollup: call-graph aggregation for function-level profiles.

Public API:
    - flatten: PairCallMap -> Profile (inclusive/exclusive costs per function)
    - average: [PairCallMap] -> PairCallMap
    - subtract: PairCallMap, PairCallMap -> PairCallMap
    - nearest_family: PairCallMap, name -> NearestFamily

Example:
    from xhprof_rollup import PairCall, PairCallMap, flatten

    snapshot = PairCallMap({
        "main()": PairCall(count=1, wall_time=1000, cpu_time=400, memory=1500),
        "main()==>foo": PairCall(count=2, wall_time=500, cpu_time=200, memory=700),
    })
    profile = flatten(snapshot).sort_by("ExclusiveWallTime")
"""

from xhprof_rollup.aggregation import (
    average,
    avg_pair_call_maps,
    flatten,
    flatten_many,
    nearest_family,
    reduce_pairwise,
    subtract,
)
from xhprof_rollup.errors import (
    AmbiguousRootError,
    EmptyInputError,
    InvalidFieldError,
    MissingRootError,
    RollupError,
    RootError,
    SnapshotLoadError,
)
from xhprof_rollup.models import (
    SEPARATOR,
    SORT_FIELDS,
    Call,
    EdgeKey,
    NearestFamily,
    PairCall,
    PairCallMap,
    Profile,
    parse_pair_name,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Models
    "SEPARATOR",
    "SORT_FIELDS",
    "Call",
    "EdgeKey",
    "NearestFamily",
    "PairCall",
    "PairCallMap",
    "Profile",
    "parse_pair_name",
    # Operations
    "average",
    "avg_pair_call_maps",
    "flatten",
    "flatten_many",
    "nearest_family",
    "reduce_pairwise",
    "subtract",
    # Errors
    "AmbiguousRootError",
    "EmptyInputError",
    "InvalidFieldError",
    "MissingRootError",
    "RollupError",
    "RootError",
    "SnapshotLoadError",
]
