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

"""Pytest configuration and shared fixtures for xhprof-rollup tests."""

import json
import pytest

from xhprof_rollup.models.paircall import PairCall, PairCallMap


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch):
    """Keep user and project config files out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for var in (
        "XHPROF_ROLLUP_SORT_FIELD",
        "XHPROF_ROLLUP_OUTPUT_FORMAT",
        "XHPROF_ROLLUP_LIMIT",
        "XHPROF_ROLLUP_MAX_WORKERS",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def simple_map():
    """main() -> foo -> bar."""
    return PairCallMap({
        "main()": PairCall(wall_time=1000, count=1, cpu_time=400, memory=1500),
        "main()==>foo": PairCall(wall_time=500, count=2, cpu_time=200, memory=700),
        "foo==>bar": PairCall(wall_time=200, count=10, cpu_time=100, memory=300),
    })


@pytest.fixture
def fleet_maps():
    """Three snapshots; foo==>bar only shows up in the first."""
    m1 = PairCallMap({
        "main()": PairCall(wall_time=800, count=1, cpu_time=400, memory=1000),
        "main()==>foo": PairCall(wall_time=600, count=2, cpu_time=300, memory=900),
        "foo==>bar": PairCall(wall_time=300, count=10, cpu_time=150, memory=300),
    })
    m2 = PairCallMap({
        "main()": PairCall(wall_time=300, count=1, cpu_time=100, memory=200),
    })
    m3 = PairCallMap({
        "main()": PairCall(wall_time=700, count=1, cpu_time=400, memory=900),
        "main()==>foo": PairCall(wall_time=300, count=4, cpu_time=210, memory=600),
    })
    return [m1, m2, m3]


@pytest.fixture
def snapshot_file(tmp_path):
    """Write the simple map as an xhprof JSON file."""
    path = tmp_path / "run.json"
    path.write_text(json.dumps({
        "main()": {"ct": 1, "wt": 1000, "cpu": 400, "mu": 1500, "pmu": 1600},
        "main()==>foo": {"ct": 2, "wt": 500, "cpu": 200, "mu": 700, "pmu": 800},
        "foo==>bar": {"ct": 10, "wt": 200, "cpu": 100, "mu": 300, "pmu": 300},
    }))
    return path
