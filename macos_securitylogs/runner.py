# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Running queries off the interactive thread."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from .categories import SecurityCategory, TimeWindow
from .query import LogQueryService
from .result import QueryResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[QueryResult], None]


class BackgroundQueryRunner:
    """Submits queries to a worker pool and reports only the newest result.

    Every submission gets a generation number. When a query finishes after a
    newer one was submitted its result is dropped instead of handed to the
    callback; the older query itself is not cancelled. Callbacks run on the
    worker thread, so a UI must marshal them back to its own thread.
    """

    def __init__(self, service: LogQueryService, max_workers: int = 1):
        self._service = service
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="securitylogs-query")
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        """Generation number of the most recent submission."""
        with self._lock:
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def submit(
        self,
        category: SecurityCategory,
        window: TimeWindow,
        callback: Optional[ResultCallback] = None,
    ) -> 'Future[QueryResult]':
        """Start a query on the worker pool.

        Args:
            category: Security subsystem to select
            window: How far back from now to reach
            callback: Called with the result unless a newer query was
                submitted in the meantime

        Returns:
            Future resolving to the query result, superseded or not
        """
        with self._lock:
            self._generation += 1
            generation = self._generation

        future = self._executor.submit(self._service.query, category, window)
        if callback is not None:
            future.add_done_callback(lambda done: self._deliver(done, generation, callback))
        return future

    def _deliver(self, future: 'Future[QueryResult]', generation: int, callback: ResultCallback) -> None:
        if future.cancelled():
            return
        if not self.is_current(generation):
            logger.debug(f"Dropping superseded query result (generation {generation})")
            return
        try:
            callback(future.result())
        except Exception as e:
            logger.exception(f"[macos-securitylogs] Query result callback failed: {e}")

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> 'BackgroundQueryRunner':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)
