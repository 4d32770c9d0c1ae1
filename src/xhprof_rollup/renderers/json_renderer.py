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

"""JSON renderer for profiles and snapshots."""

import json

from xhprof_rollup.models.paircall import PairCallMap
from xhprof_rollup.models.profile import NearestFamily, Profile
from xhprof_rollup.renderers.base import OutputFormat
from xhprof_rollup.snapshot import dump_pair_call_map


class JSONRenderer:
    """Renders profiles, families and snapshots as JSON."""

    format = OutputFormat.JSON

    def render_profile(self, profile: Profile, *, limit: int | None = None, **options) -> str:
        data = profile.top(limit).to_dict()
        return json.dumps(data, indent=options.get("indent", 2))

    def render_family(self, family: NearestFamily, **options) -> str:
        return json.dumps(family.to_dict(), indent=options.get("indent", 2))

    def render_snapshot(self, pair_calls: PairCallMap, **options) -> str:
        """Render a PairCallMap in xhprof JSON shape."""
        return json.dumps(dump_pair_call_map(pair_calls), indent=options.get("indent", 2))
