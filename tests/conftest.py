# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Pytest fixtures for macOS Security Logs tests."""

import json
import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from macos_securitylogs import (
    LogQueryService,
    LogStore,
    Predicate,
    RawEntry,
    StoreHandle,
    StoreUnavailableError,
)

NOW = datetime(2025, 8, 14, 15, 0, 0, tzinfo=timezone.utc)


class FakeLogStore(LogStore):
    """In-memory store returning a fixed list of records.

    Like a coarse backend, it applies neither the time bound nor the
    predicate; it records the arguments of every fetch.
    """

    def __init__(self, records: Optional[List[RawEntry]] = None,
                 open_error: Optional[Exception] = None,
                 fetch_error: Optional[Exception] = None):
        self.records = list(records or [])
        self.open_error = open_error
        self.fetch_error = fetch_error
        self.fetch_calls = []
        self.closed = 0

    def open(self) -> StoreHandle:
        if self.open_error is not None:
            raise self.open_error
        return StoreHandle(source="memory")

    def fetch(self, handle: StoreHandle, since: datetime, predicate: Predicate) -> List[RawEntry]:
        self.fetch_calls.append((since, predicate))
        if self.fetch_error is not None:
            raise self.fetch_error
        return list(self.records)

    def close(self, handle: StoreHandle) -> None:
        self.closed += 1


def minutes_ago(minutes: float) -> datetime:
    return NOW - timedelta(minutes=minutes)


def raw(minutes: float, message: Optional[str], subsystem: str = "", event_type: str = "logEvent") -> RawEntry:
    """Build a store record ``minutes`` before NOW."""
    return RawEntry(
        timestamp=minutes_ago(minutes),
        message=message,
        subsystem=subsystem,
        event_type=event_type,
    )


def ndjson_line(timestamp: str, message: Optional[str] = "", subsystem: str = "",
                event_type: str = "logEvent", **extra) -> str:
    """Build one line in the layout of `log show --style ndjson`."""
    record = {
        "timestamp": timestamp,
        "eventType": event_type,
        "subsystem": subsystem,
        "category": extra.pop("category", ""),
        "processImagePath": extra.pop("process", "/usr/libexec/syspolicyd"),
        "messageType": extra.pop("message_type", "Default"),
    }
    if message is not None:
        record["eventMessage"] = message
    record.update(extra)
    return json.dumps(record)


@pytest.fixture
def clock():
    """Fixture providing a clock frozen at NOW."""
    return lambda: NOW


@pytest.fixture
def fake_store() -> FakeLogStore:
    return FakeLogStore()


@pytest.fixture
def service(fake_store: FakeLogStore, clock) -> LogQueryService:
    """Fixture providing a query service over the fake store."""
    return LogQueryService(fake_store, clock=clock)


@pytest.fixture
def denied_store() -> FakeLogStore:
    """Fixture providing a store whose open() fails like a privilege error."""
    return FakeLogStore(open_error=StoreUnavailableError("Operation not permitted"))


@pytest.fixture
def local_timezone(monkeypatch):
    """Fixture setting the process timezone; returns a setter taking a POSIX TZ string."""
    def set_timezone(tz: str) -> None:
        monkeypatch.setenv("TZ", tz)
        time.tzset()

    yield set_timezone
    monkeypatch.undo()
    time.tzset()
