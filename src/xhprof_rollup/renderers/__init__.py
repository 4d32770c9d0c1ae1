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

"""Renderers for profiles, families and snapshots."""

from xhprof_rollup.renderers.base import OutputFormat, ProfileRenderer
from xhprof_rollup.renderers.json_renderer import JSONRenderer
from xhprof_rollup.renderers.table import TableRenderer


def get_renderer(format: OutputFormat | str) -> ProfileRenderer:
    """Return the renderer for an output format."""
    if OutputFormat(format) == OutputFormat.JSON:
        return JSONRenderer()
    return TableRenderer()


__all__ = [
    "OutputFormat",
    "ProfileRenderer",
    "JSONRenderer",
    "TableRenderer",
    "get_renderer",
]
