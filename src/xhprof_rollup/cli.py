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

"""xhprof-rollup CLI - flatten, average and diff xhprof snapshots."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console

from xhprof_rollup import __version__
from xhprof_rollup.aggregation import average, flatten, flatten_many, nearest_family, subtract
from xhprof_rollup.config import (
    VALID_OUTPUT_FORMATS,
    ConfigLoadError,
    ConfigValidationError,
    RollupConfig,
    get_config,
)
from xhprof_rollup.errors import RollupError
from xhprof_rollup.models.paircall import PairCallMap
from xhprof_rollup.models.profile import SORT_FIELDS
from xhprof_rollup.renderers import JSONRenderer, get_renderer
from xhprof_rollup.snapshot import load_pair_call_map, save_pair_call_map

logger = logging.getLogger(__name__)

console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

SNAPSHOT_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(1)


def _config(ctx: click.Context) -> RollupConfig:
    return ctx.obj["config"]


def _output_format(ctx: click.Context) -> str:
    return ctx.obj.get("output_format") or _config(ctx).display.output_format


def _load(path: Path) -> PairCallMap:
    try:
        return load_pair_call_map(path)
    except RollupError as e:
        _fail(str(e))


def _render_profile(ctx: click.Context, pair_calls: PairCallMap, sort: str | None, limit: int | None, title: str | None = None) -> None:
    """Flatten, sort and print a snapshot."""
    display = _config(ctx).display
    try:
        profile = flatten(pair_calls).sort_by(sort or display.sort_field)
    except RollupError as e:
        _fail(str(e))

    renderer = get_renderer(_output_format(ctx))
    output = renderer.render_profile(
        profile,
        limit=limit if limit is not None else display.limit,
        title=title,
    )
    click.echo(output.rstrip("\n"))


def _emit_snapshot(ctx: click.Context, pair_calls: PairCallMap, output: Path | None, do_flatten: bool, sort: str | None, limit: int | None) -> None:
    if output is not None:
        save_pair_call_map(pair_calls, output)
    if do_flatten:
        _render_profile(ctx, pair_calls, sort, limit)
    elif output is None:
        click.echo(JSONRenderer().render_snapshot(pair_calls))


sort_option = click.option(
    "--sort", "-s",
    type=click.Choice(list(SORT_FIELDS)),
    default=None,
    help="Metric to sort by, largest first (default from config: WallTime)",
)
limit_option = click.option(
    "--limit", "-n",
    type=click.IntRange(min=1),
    default=None,
    help="Only show the top N functions",
)
output_option = click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the resulting snapshot as xhprof JSON",
)
flatten_option = click.option(
    "--flatten/--no-flatten",
    "do_flatten",
    default=True,
    help="Print the flattened profile (default) or the raw snapshot JSON",
)


@click.group()
@click.version_option(__version__, prog_name="xhprof-rollup")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    help="Logging verbosity",
)
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(list(VALID_OUTPUT_FORMATS)),
    default=None,
    help="Output format: table (default) or json",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of ./.xhprof_rollup.json",
)
@click.pass_context
def main(ctx: click.Context, log_level: str, output_format: str | None, config_path: Path | None) -> None:
    """xhprof-rollup - call-graph aggregation for xhprof snapshots."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["output_format"] = output_format
    try:
        ctx.obj["config"] = get_config(config_path)
    except (ConfigLoadError, ConfigValidationError) as e:
        _fail(str(e))


@main.command("flatten")
@click.argument("snapshots", nargs=-1, required=True, type=SNAPSHOT_PATH)
@sort_option
@limit_option
@click.pass_context
def flatten_cmd(ctx: click.Context, snapshots: tuple[Path, ...], sort: str | None, limit: int | None) -> None:
    """Show inclusive and exclusive cost per function.

    With several snapshots, each one is flattened and shown on its own.
    """
    if len(snapshots) == 1:
        _render_profile(ctx, _load(snapshots[0]), sort, limit)
        return

    maps = [_load(path) for path in snapshots]
    try:
        profiles = flatten_many(maps, max_workers=_config(ctx).aggregation.max_workers)
    except RollupError as e:
        _fail(str(e))

    display = _config(ctx).display
    renderer = get_renderer(_output_format(ctx))
    for path, profile in zip(snapshots, profiles):
        try:
            profile = profile.sort_by(sort or display.sort_field)
        except RollupError as e:
            _fail(str(e))
        output = renderer.render_profile(
            profile,
            limit=limit if limit is not None else display.limit,
            title=path.name,
        )
        click.echo(output.rstrip("\n"))


@main.command("average")
@click.argument("snapshots", nargs=-1, required=True, type=SNAPSHOT_PATH)
@output_option
@flatten_option
@sort_option
@limit_option
@click.pass_context
def average_cmd(
    ctx: click.Context,
    snapshots: tuple[Path, ...],
    output: Path | None,
    do_flatten: bool,
    sort: str | None,
    limit: int | None,
) -> None:
    """Average several snapshots into one representative snapshot."""
    maps = [_load(path) for path in snapshots]
    try:
        averaged = average(maps)
    except RollupError as e:
        _fail(str(e))
    _emit_snapshot(ctx, averaged, output, do_flatten, sort, limit)


@main.command("diff")
@click.argument("left", type=SNAPSHOT_PATH)
@click.argument("right", type=SNAPSHOT_PATH)
@output_option
@flatten_option
@sort_option
@limit_option
@click.pass_context
def diff_cmd(
    ctx: click.Context,
    left: Path,
    right: Path,
    output: Path | None,
    do_flatten: bool,
    sort: str | None,
    limit: int | None,
) -> None:
    """Show LEFT minus RIGHT; negative values mean LEFT is cheaper."""
    delta = subtract(_load(left), _load(right))
    _emit_snapshot(ctx, delta, output, do_flatten, sort, limit)


@main.command("family")
@click.argument("snapshot", type=SNAPSHOT_PATH)
@click.argument("name")
@click.pass_context
def family_cmd(ctx: click.Context, snapshot: Path, name: str) -> None:
    """Show the direct callers and callees of NAME."""
    family = nearest_family(_load(snapshot), name)
    if not family.parents and not family.children:
        logger.warning("Function %s not found in %s", name, snapshot.name)
    renderer = get_renderer(_output_format(ctx))
    click.echo(renderer.render_family(family).rstrip("\n"))


@main.group()
def config() -> None:
    """Configuration commands."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the merged configuration as JSON."""
    click.echo(json.dumps(_config(ctx).to_dict(), indent=2))


if __name__ == "__main__":
    main()
