# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Querying a log store for security category entries."""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from .categories import SecurityCategory, TimeWindow
from .entry import LogEntry, RawEntry
from .error import ErrorKind, SecurityLogError
from .result import Failure, QueryResult, Success
from .traits import LogStore
from .util import ensure_aware

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LogQueryService:
    """Translates a (category, time window) pair into a store query.

    ``query`` blocks until the store answers and may take a long time on a
    live system; run it on a worker thread (see ``BackgroundQueryRunner``).
    The service holds no state between calls: nothing is cached and nothing
    is retried.
    """

    def __init__(self, store: LogStore, clock: Optional[Callable[[], datetime]] = None):
        """Initialize the service.

        Args:
            store: Backend to query
            clock: Returns the current time; defaults to the UTC wall clock
        """
        self._store = store
        self._clock = clock or _utcnow

    @property
    def store(self) -> LogStore:
        return self._store

    def query(self, category: SecurityCategory, window: TimeWindow) -> QueryResult:
        """Fetch the entries of ``category`` recorded within ``window``.

        Args:
            category: Security subsystem to select
            window: How far back from now to reach

        Returns:
            Success with entries in store order, or Failure describing why
            the store could not be opened or queried
        """
        since = ensure_aware(self._clock()) - window.duration
        predicate = category.predicate

        try:
            handle = self._store.open()
        except SecurityLogError as e:
            logger.warning(f"[macos-securitylogs] Failed to open log store: {e}")
            return Failure(ErrorKind.StoreUnavailable, str(e))
        except Exception as e:
            logger.exception(f"[macos-securitylogs] Unexpected error opening log store: {e}")
            return Failure(ErrorKind.StoreUnavailable, str(e))

        try:
            raw_entries = self._store.fetch(handle, since, predicate)
        except SecurityLogError as e:
            logger.warning(f"[macos-securitylogs] {category.value} query failed: {e}")
            return Failure(e.kind, str(e))
        except Exception as e:
            logger.exception(f"[macos-securitylogs] Unexpected error querying log store: {e}")
            return Failure(ErrorKind.QueryFailed, str(e))
        finally:
            self._close(handle)

        entries = select_entries(raw_entries, since, category)
        logger.info(f"{category.value} query over {window.label} returned {len(entries)} entries")
        return Success(tuple(entries))

    def _close(self, handle) -> None:
        try:
            self._store.close(handle)
        except Exception as e:
            logger.exception(f"[macos-securitylogs] Failed to close log store: {e}")


def select_entries(raw_entries: List[RawEntry], since: datetime, category: SecurityCategory) -> List[LogEntry]:
    """Keep textual records within the time bound that match the category.

    Records without a composed message are dropped without error. Order is
    preserved.
    """
    predicate = category.predicate
    entries: List[LogEntry] = []
    skipped = 0

    for raw in raw_entries:
        if not raw.is_textual:
            skipped += 1
            continue
        if ensure_aware(raw.timestamp) < since:
            continue
        if not predicate.matches(raw.subsystem, raw.message):
            continue
        entries.append(LogEntry.from_raw(raw))

    if skipped:
        logger.debug(f"Discarded {skipped} records without a textual message")

    return entries
