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

"""Reading and writing xhprof JSON snapshots.

An xhprof snapshot maps each edge key to its raw metrics::

    {
        "main()": {"ct": 1, "wt": 1000, "cpu": 400, "mu": 1500, "pmu": 1600},
        "main()==>foo": {"ct": 2, "wt": 500, "cpu": 200, "mu": 700}
    }

``pmu`` and any other unknown metric are ignored. Missing metrics read
as zero.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from xhprof_rollup.errors import SnapshotLoadError
from xhprof_rollup.models.paircall import PairCall, PairCallMap

logger = logging.getLogger(__name__)

# xhprof metric key -> PairCall attribute
METRIC_KEYS = {
    "ct": "count",
    "wt": "wall_time",
    "cpu": "cpu_time",
    "mu": "memory",
}


def _parse_pair_call(key: str, raw: Any) -> PairCall:
    if not isinstance(raw, dict):
        raise SnapshotLoadError(f"Edge '{key}' must map to an object, got {type(raw).__name__}")

    values: dict[str, Any] = {}
    for metric, attr in METRIC_KEYS.items():
        value = raw.get(metric, 0)
        try:
            values[attr] = _parse_metric(value, integral=attr == "count")
        except (TypeError, ValueError):
            raise SnapshotLoadError(f"Edge '{key}' has invalid {metric}: {value!r}")
    return PairCall(**values)


def _parse_metric(value: Any, integral: bool) -> float:
    # JSON true/false would otherwise read as 1/0
    if isinstance(value, bool):
        raise TypeError(f"boolean metric {value!r}")
    if integral and isinstance(value, int):
        return value
    number = float(value)
    if not integral:
        return number
    if not number.is_integer():
        raise ValueError(f"non-integral count {value!r}")
    return int(number)


def parse_pair_call_map(data: Any) -> PairCallMap:
    """Build a PairCallMap from decoded xhprof JSON."""
    if not isinstance(data, dict):
        raise SnapshotLoadError(
            f"Snapshot must be a JSON object, got {type(data).__name__}"
        )
    return PairCallMap({key: _parse_pair_call(key, raw) for key, raw in data.items()})


def load_pair_call_map(path: Path) -> PairCallMap:
    """Load a snapshot file.

    Raises:
        SnapshotLoadError: If the file cannot be read or is not valid xhprof JSON
    """
    try:
        content = path.read_text()
    except OSError as e:
        raise SnapshotLoadError(f"Error reading {path}: {e}")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise SnapshotLoadError(f"Invalid JSON in {path}: {e}")

    pair_calls = parse_pair_call_map(data)
    logger.info("Loaded snapshot: %d edges from %s", len(pair_calls), path.name)
    return pair_calls


def dump_pair_call_map(pair_calls: PairCallMap) -> dict[str, dict[str, float]]:
    """Convert a PairCallMap back to xhprof JSON shape."""
    return {
        key: {metric: getattr(call, attr) for metric, attr in METRIC_KEYS.items()}
        for key, call in pair_calls.items()
    }


def save_pair_call_map(pair_calls: PairCallMap, path: Path) -> None:
    path.write_text(json.dumps(dump_pair_call_map(pair_calls), indent=2))
    logger.info("Saved snapshot: %d edges to %s", len(pair_calls), path.name)
