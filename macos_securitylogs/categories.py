# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Security categories, query windows and their log predicates."""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Predicate:
    """Case-insensitive filter on subsystem OR message text.

    A record matches when its subsystem contains ``subsystem_term`` or its
    message contains ``message_term``, ignoring case.
    """
    subsystem_term: str
    message_term: str

    def matches(self, subsystem: Optional[str], message: Optional[str]) -> bool:
        """Check a record's subsystem and message against this predicate."""
        if subsystem and self.subsystem_term.casefold() in subsystem.casefold():
            return True
        if message and self.message_term.casefold() in message.casefold():
            return True
        return False

    def to_log_predicate(self) -> str:
        """Render the predicate in the syntax accepted by ``log show --predicate``."""
        return (
            f'subsystem CONTAINS[c] "{_escape(self.subsystem_term)}" '
            f'OR eventMessage CONTAINS[c] "{_escape(self.message_term)}"'
        )


def _escape(term: str) -> str:
    return term.replace('\\', '\\\\').replace('"', '\\"')


class SecurityCategory(Enum):
    """Security subsystems whose log entries can be queried."""
    Gatekeeper = "Gatekeeper"
    XProtect = "XProtect"
    TCC = "TCC"

    @property
    def predicate(self) -> Predicate:
        """Return the log predicate selecting this category's entries."""
        return _PREDICATES[self]

    @classmethod
    def parse(cls, text: str) -> 'SecurityCategory':
        """Look up a category by name, ignoring case.

        Raises:
            ValueError: If ``text`` names no category
        """
        for category in cls:
            if category.value.casefold() == text.strip().casefold():
                return category
        raise ValueError(f"Unknown security category: {text!r}")


_PREDICATES = {
    SecurityCategory.Gatekeeper: Predicate("com.apple.security", "Gatekeeper"),
    SecurityCategory.XProtect: Predicate("com.apple.XProtect", "XProtect"),
    SecurityCategory.TCC: Predicate("com.apple.TCC", "TCC"),
}


class TimeWindow(Enum):
    """How far back a query reaches, relative to the time it runs."""
    FifteenMinutes = "15m"
    OneHour = "1h"
    SixHours = "6h"
    TwelveHours = "12h"
    TwentyFourHours = "24h"

    @property
    def minutes(self) -> int:
        return _MINUTES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def duration(self) -> timedelta:
        return timedelta(seconds=self.minutes * 60)

    @classmethod
    def parse(cls, text: str) -> 'TimeWindow':
        """Look up a window by short token (``1h``) or label (``1 hr``).

        Raises:
            ValueError: If ``text`` names no window
        """
        wanted = text.strip().lower()
        for window in cls:
            if wanted in (window.value, window.label):
                return window
        raise ValueError(f"Unknown time window: {text!r}")


_MINUTES = {
    TimeWindow.FifteenMinutes: 15,
    TimeWindow.OneHour: 60,
    TimeWindow.SixHours: 360,
    TimeWindow.TwelveHours: 720,
    TimeWindow.TwentyFourHours: 1440,
}

_LABELS = {
    TimeWindow.FifteenMinutes: "15 min",
    TimeWindow.OneHour: "1 hr",
    TimeWindow.SixHours: "6 hr",
    TimeWindow.TwelveHours: "12 hr",
    TimeWindow.TwentyFourHours: "24 hr",
}
