# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Abstract base class for log stores."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List

from .categories import Predicate
from .entry import RawEntry


@dataclass
class StoreHandle:
    """An opened store.

    ``source`` names what was opened (a binary or a file path) for log
    messages; ``payload`` is private to the store that produced the handle.
    """
    source: str
    payload: Any = None


class LogStore(ABC):
    """Implementing this class allows library consumers to query arbitrary
    log backends.

    Stores are treated as shared, read-only resources: ``fetch`` may be called
    from several worker threads at once and must not mutate the backend.
    """

    @abstractmethod
    def open(self) -> StoreHandle:
        """Open the store for reading.

        Raises:
            StoreUnavailableError: If the store cannot be opened
        """
        pass

    @abstractmethod
    def fetch(self, handle: StoreHandle, since: datetime, predicate: Predicate) -> List[RawEntry]:
        """Return records at or after ``since`` matching ``predicate``.

        Records come back in the store's own order. Stores may return records
        that carry no textual message.

        Raises:
            QueryFailedError: If the query cannot execute
        """
        pass

    def close(self, handle: StoreHandle) -> None:
        """Release the handle. Stores without resources to release keep this no-op."""
        pass
