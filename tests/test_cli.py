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

"""Tests for CLI commands: flatten, average, diff, family, config."""

import json
import logging

import pytest
from click.testing import CliRunner

from xhprof_rollup.cli import main


def _write(path, data):
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def fleet_files(tmp_path):
    """The three fleet snapshots as xhprof JSON files."""
    return [
        _write(tmp_path / "r1.json", {
            "main()": {"ct": 1, "wt": 800, "cpu": 400, "mu": 1000},
            "main()==>foo": {"ct": 2, "wt": 600, "cpu": 300, "mu": 900},
            "foo==>bar": {"ct": 10, "wt": 300, "cpu": 150, "mu": 300},
        }),
        _write(tmp_path / "r2.json", {
            "main()": {"ct": 1, "wt": 300, "cpu": 100, "mu": 200},
        }),
        _write(tmp_path / "r3.json", {
            "main()": {"ct": 1, "wt": 700, "cpu": 400, "mu": 900},
            "main()==>foo": {"ct": 4, "wt": 300, "cpu": 210, "mu": 600},
        }),
    ]


def test_flatten_table(snapshot_file):
    runner = CliRunner()
    result = runner.invoke(main, ["flatten", str(snapshot_file)])
    assert result.exit_code == 0, result.output
    assert "main()" in result.output
    assert "bar" in result.output


def test_flatten_json_sorted(snapshot_file):
    runner = CliRunner()
    result = runner.invoke(main, [
        "--format", "json",
        "flatten", str(snapshot_file),
        "--sort", "Count",
        "--limit", "2",
    ])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [c["name"] for c in data["calls"]] == ["bar", "foo"]


def test_flatten_uses_config_sort_field(snapshot_file, monkeypatch):
    monkeypatch.setenv("XHPROF_ROLLUP_SORT_FIELD", "ExclusiveWallTime")
    runner = CliRunner()
    result = runner.invoke(main, ["--format", "json", "flatten", str(snapshot_file)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [c["name"] for c in data["calls"]] == ["main()", "foo", "bar"]
    assert data["calls"][0]["exclusive_wall_time"] == 500


def test_flatten_several_snapshots(fleet_files):
    runner = CliRunner()
    result = runner.invoke(main, ["flatten", *map(str, fleet_files)])
    assert result.exit_code == 0, result.output
    for path in fleet_files:
        assert path.name in result.output


def test_flatten_rejects_unknown_sort_field(snapshot_file):
    runner = CliRunner()
    result = runner.invoke(main, ["flatten", str(snapshot_file), "--sort", "Name"])
    assert result.exit_code != 0


def test_flatten_ambiguous_root_fails(tmp_path):
    path = _write(tmp_path / "bad.json", {"a": {"ct": 1}, "b": {"ct": 1}})
    runner = CliRunner()
    result = runner.invoke(main, ["flatten", str(path)])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_flatten_invalid_snapshot_fails(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{oops")
    runner = CliRunner()
    result = runner.invoke(main, ["flatten", str(path)])
    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_average_no_flatten_prints_snapshot(fleet_files):
    runner = CliRunner()
    result = runner.invoke(main, ["average", *map(str, fleet_files), "--no-flatten"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["foo==>bar"] == {"ct": 3, "wt": 100.0, "cpu": 50.0, "mu": 100.0}
    assert data["main()==>foo"]["cpu"] == 170.0


def test_average_writes_output(fleet_files, tmp_path):
    out = tmp_path / "avg.json"
    runner = CliRunner()
    result = runner.invoke(main, ["average", *map(str, fleet_files), "--output", str(out)])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text())["main()"]["wt"] == 600.0
    assert "main()" in result.output


def test_diff(fleet_files):
    r1, r2, _ = fleet_files
    runner = CliRunner()
    result = runner.invoke(main, [
        "--format", "json", "diff", str(r2), str(r1), "--sort", "WallTime",
    ])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    by_name = {c["name"]: c for c in data["calls"]}
    assert by_name["main()"]["wall_time"] == -500
    assert by_name["bar"]["count"] == -10


def test_diff_no_flatten(fleet_files):
    r1, r2, _ = fleet_files
    runner = CliRunner()
    result = runner.invoke(main, ["diff", str(r1), str(r2), "--no-flatten"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["main()"]["wt"] == 500.0
    assert data["foo==>bar"]["ct"] == 10


def test_family(snapshot_file):
    runner = CliRunner()
    result = runner.invoke(main, ["--format", "json", "family", str(snapshot_file), "foo"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["children_count"] == 10
    assert data["parents_count"] == 2


def test_family_table(snapshot_file):
    runner = CliRunner()
    result = runner.invoke(main, ["family", str(snapshot_file), "foo"])
    assert result.exit_code == 0, result.output
    assert "Parents of foo" in result.output


def test_missing_snapshot_file(tmp_path):
    runner = CliRunner()
    result = runner.invoke(main, ["flatten", str(tmp_path / "missing.json")])
    assert result.exit_code != 0


def test_config_show(tmp_path):
    (tmp_path / ".xhprof_rollup.json").write_text(json.dumps({"display": {"limit": 4}}))
    runner = CliRunner()
    result = runner.invoke(main, ["config", "show"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["display"]["limit"] == 4


def test_explicit_config_path(tmp_path):
    path = _write(tmp_path / "custom.json", {"display": {"sort_field": "Memory"}})
    runner = CliRunner()
    result = runner.invoke(main, ["--config", str(path), "config", "show"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["display"]["sort_field"] == "Memory"


def test_invalid_config_fails(tmp_path):
    (tmp_path / ".xhprof_rollup.json").write_text("{")
    runner = CliRunner()
    result = runner.invoke(main, ["config", "show"])
    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_non_integer_limit_in_config_fails(tmp_path, snapshot_file):
    (tmp_path / ".xhprof_rollup.json").write_text(json.dumps({"display": {"limit": "10"}}))
    runner = CliRunner()
    result = runner.invoke(main, ["flatten", str(snapshot_file)])
    assert result.exit_code == 1
    assert "limit must be an integer" in result.output


def test_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "xhprof-rollup" in result.output


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def test_log_level_case_insensitive(snapshot_file):
    runner = CliRunner()
    result = runner.invoke(main, ["--log-level", "debug", "flatten", str(snapshot_file)])
    assert result.exit_code == 0, result.output


def test_log_level_rejects_unknown(snapshot_file):
    runner = CliRunner()
    result = runner.invoke(main, ["--log-level", "LOUD", "flatten", str(snapshot_file)])
    assert result.exit_code != 0


def test_snapshot_load_logs_info(snapshot_file, caplog):
    from xhprof_rollup.snapshot import load_pair_call_map

    with caplog.at_level(logging.INFO, logger="xhprof_rollup.snapshot"):
        load_pair_call_map(snapshot_file)
    assert any("Loaded snapshot: 3 edges" in r.message for r in caplog.records)


def test_family_unknown_function_warns(snapshot_file, caplog):
    runner = CliRunner()
    with caplog.at_level(logging.WARNING, logger="xhprof_rollup.cli"):
        result = runner.invoke(main, ["family", str(snapshot_file), "nope"])
    assert result.exit_code == 0
    assert any("not found" in r.message for r in caplog.records)
