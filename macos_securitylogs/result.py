# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Query outcomes."""

from dataclasses import dataclass
from typing import Tuple, Union

from .entry import LogEntry
from .error import ErrorKind


@dataclass(frozen=True)
class Success:
    """Query completed; ``entries`` keeps the store's ordering."""
    entries: Tuple[LogEntry, ...] = ()

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Query could not run."""
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return ()


QueryResult = Union[Success, Failure]
