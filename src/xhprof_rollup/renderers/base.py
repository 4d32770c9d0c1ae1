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

"""Base renderer and output format definitions."""

from enum import Enum
from typing import Protocol

from xhprof_rollup.models.profile import NearestFamily, Profile


class OutputFormat(str, Enum):
    """Output format for rendering."""

    TABLE = "table"
    JSON = "json"


class ProfileRenderer(Protocol):
    """Protocol for profile renderers."""

    format: OutputFormat

    def render_profile(self, profile: Profile, *, limit: int | None = None, **options) -> str:
        """Render a flattened profile.

        Args:
            profile: The profile to render, already in display order
            limit: Maximum number of calls to render (None for all)
            **options: Additional format-specific options

        Returns:
            Rendered output
        """
        ...

    def render_family(self, family: NearestFamily, **options) -> str:
        """Render the nearest family of a function."""
        ...
