# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Unit tests for the background query runner."""

import threading
from datetime import datetime
from typing import List

from macos_securitylogs import (
    BackgroundQueryRunner,
    LogQueryService,
    Predicate,
    RawEntry,
    SecurityCategory,
    StoreHandle,
    TimeWindow,
)

from .conftest import FakeLogStore, raw


class GatedStore(FakeLogStore):
    """Store whose first fetch blocks until released."""

    def __init__(self, records):
        super().__init__(records)
        self.release = threading.Event()
        self.first_started = threading.Event()
        self._first = True
        self._lock = threading.Lock()

    def fetch(self, handle: StoreHandle, since: datetime, predicate: Predicate) -> List[RawEntry]:
        with self._lock:
            first, self._first = self._first, False
        if first:
            self.first_started.set()
            self.release.wait(timeout=5)
        return super().fetch(handle, since, predicate)


class TestBackgroundQueryRunner:
    """Test BackgroundQueryRunner class."""

    def test_submit_delivers_result(self, clock):
        """Test a single query reaches the callback."""
        store = FakeLogStore([raw(1, "TCC prompt", subsystem="com.apple.TCC")])
        received = []
        with BackgroundQueryRunner(LogQueryService(store, clock=clock)) as runner:
            future = runner.submit(SecurityCategory.TCC, TimeWindow.OneHour, received.append)
            result = future.result(timeout=5)

        assert result.ok
        assert received == [result]

    def test_superseded_result_dropped(self, clock):
        """Test only the newest submission reaches the callback."""
        store = GatedStore([raw(1, "TCC prompt", subsystem="com.apple.TCC")])
        received = []
        with BackgroundQueryRunner(LogQueryService(store, clock=clock), max_workers=2) as runner:
            stale = runner.submit(SecurityCategory.TCC, TimeWindow.OneHour, received.append)
            assert store.first_started.wait(timeout=5)
            fresh = runner.submit(SecurityCategory.XProtect, TimeWindow.OneHour, received.append)
            fresh_result = fresh.result(timeout=5)
            store.release.set()
            stale_result = stale.result(timeout=5)

        assert received == [fresh_result]
        # the superseded query still ran to completion
        assert stale_result.ok
        assert len(stale_result.entries) == 1

    def test_generation_counter(self, service):
        """Test each submission advances the generation."""
        with BackgroundQueryRunner(service) as runner:
            assert runner.generation == 0
            runner.submit(SecurityCategory.Gatekeeper, TimeWindow.OneHour).result(timeout=5)
            runner.submit(SecurityCategory.Gatekeeper, TimeWindow.OneHour).result(timeout=5)
            assert runner.generation == 2
            assert runner.is_current(2)
            assert not runner.is_current(1)

    def test_failure_delivered(self, denied_store, clock):
        """Test failures reach the callback like successes."""
        received = []
        with BackgroundQueryRunner(LogQueryService(denied_store, clock=clock)) as runner:
            runner.submit(SecurityCategory.XProtect, TimeWindow.OneHour, received.append).result(timeout=5)

        assert len(received) == 1
        assert not received[0].ok
