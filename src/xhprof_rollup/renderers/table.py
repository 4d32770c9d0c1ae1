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

"""Terminal table renderer using Rich."""

import io

from rich.console import Console
from rich.table import Table
from rich.text import Text

from xhprof_rollup.models.paircall import PairCallMap
from xhprof_rollup.models.profile import NearestFamily, Profile
from xhprof_rollup.renderers.base import OutputFormat

# (header, Call attribute)
PROFILE_COLUMNS = [
    ("Calls", "count"),
    ("Wall", "wall_time"),
    ("Excl. Wall", "exclusive_wall_time"),
    ("CPU", "cpu_time"),
    ("Excl. CPU", "exclusive_cpu_time"),
    ("IO", "io_time"),
    ("Excl. IO", "exclusive_io_time"),
    ("Memory", "memory"),
    ("Excl. Memory", "exclusive_memory"),
]


class TableRenderer:
    """Renders profiles and families as Rich tables."""

    format = OutputFormat.TABLE

    def render_profile(self, profile: Profile, *, limit: int | None = None, **options) -> str:
        """Render the profile, one row per function.

        The root call is shown in bold. Negative values (from diffs) are
        shown in red.
        """
        table = Table(title=options.get("title"))
        table.add_column("Function", overflow="fold")
        for header, _ in PROFILE_COLUMNS:
            table.add_column(header, justify="right")

        for call in profile.top(limit).calls:
            name_style = "bold" if call.name == profile.main_name else ""
            row = [Text(call.name, style=name_style)]
            row.extend(self._number(getattr(call, attr)) for _, attr in PROFILE_COLUMNS)
            table.add_row(*row)

        return self._export(table, options)

    def render_family(self, family: NearestFamily, **options) -> str:
        """Render parents and children of a function as two tables."""
        parents = self._family_table(
            f"Parents of {family.name} ({family.parents_count} calls)", family.parents
        )
        children = self._family_table(
            f"Children of {family.name} ({family.children_count} calls)", family.children
        )
        return self._export(parents, options) + self._export(children, options)

    def _family_table(self, title: str, neighbors: PairCallMap) -> Table:
        table = Table(title=title, min_width=len(title) + 4)
        table.add_column("Function", overflow="fold")
        table.add_column("Calls", justify="right")
        table.add_column("Wall", justify="right")
        for name, call in neighbors.items():
            table.add_row(name or "(root)", self._number(call.count), self._number(call.wall_time))
        return table

    def _number(self, value: float) -> Text:
        style = "red" if value < 0 else ""
        if float(value).is_integer():
            return Text(f"{int(value):,}", style=style)
        return Text(f"{value:,.2f}", style=style)

    def _export(self, table: Table, options: dict) -> str:
        console = Console(
            file=io.StringIO(),
            force_terminal=options.get("color", False),
            width=options.get("width", 160),
            record=True,
        )
        console.print(table)
        return console.export_text()
