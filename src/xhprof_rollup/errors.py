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

"""Exceptions raised by the rollup engine."""


class RollupError(Exception):
    """Base class for all rollup errors."""

    pass


class InvalidFieldError(RollupError, ValueError):
    """Raised when a profile is sorted by an unknown metric field."""

    def __init__(self, field_name: str, valid: tuple[str, ...]):
        self.field_name = field_name
        self.valid = valid
        super().__init__(
            f"Invalid sort field '{field_name}'. "
            f"Valid values: {', '.join(valid)}"
        )


class EmptyInputError(RollupError, ValueError):
    """Raised when a reduction is given no snapshots."""

    pass


class RootError(RollupError):
    """Raised when the root call of a snapshot cannot be determined."""

    pass


class MissingRootError(RootError):
    """The snapshot has no edge without a caller."""

    pass


class AmbiguousRootError(RootError):
    """The snapshot has more than one edge without a caller."""

    def __init__(self, roots: list[str]):
        self.roots = roots
        super().__init__(
            f"Snapshot has {len(roots)} root calls, expected one: {', '.join(roots)}"
        )


class SnapshotLoadError(RollupError):
    """Raised when a snapshot file cannot be read or parsed."""

    pass
