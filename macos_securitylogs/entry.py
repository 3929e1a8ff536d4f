# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Log records as returned by a store and as handed to callers."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class RawEntry:
    """Record as returned by a log store.

    ``message`` is None for structured records that carry no composed text
    (activities, signposts, state dumps, loss markers).
    """
    timestamp: datetime
    message: Optional[str] = None
    subsystem: str = ""
    category: str = ""
    process: str = ""
    message_type: str = ""
    event_type: str = ""

    @property
    def is_textual(self) -> bool:
        return self.message is not None


@dataclass(frozen=True)
class LogEntry:
    """Security log entry returned by a query."""
    timestamp: datetime
    message: str
    subsystem: str = ""
    category: str = ""
    process: str = ""
    message_type: str = ""

    @classmethod
    def from_raw(cls, raw: RawEntry) -> 'LogEntry':
        """Build an entry from a textual store record.

        Raises:
            ValueError: If the record carries no message
        """
        if raw.message is None:
            raise ValueError("Store record has no textual message")
        return cls(
            timestamp=raw.timestamp,
            message=raw.message,
            subsystem=raw.subsystem,
            category=raw.category,
            process=raw.process,
            message_type=raw.message_type,
        )
