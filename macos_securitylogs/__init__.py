# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""
macOS Security Logs

A Python library for querying Gatekeeper, XProtect and TCC entries from the
macOS unified log and exporting them as plain text.

Example usage:

    from macos_securitylogs import (
        ExportWriter, LiveLogStore, LogQueryService, SecurityCategory, TimeWindow,
    )

    service = LogQueryService(LiveLogStore())
    result = service.query(SecurityCategory.XProtect, TimeWindow.OneHour)
    if result.ok:
        for entry in result.entries:
            print(f"{entry.timestamp} [{entry.subsystem}] {entry.message}")
        ExportWriter().write(result.entries, "XProtect-logs.txt")
    else:
        print(f"{result.kind.value}: {result.message}")
"""

__version__ = "0.1.0"

# Core data structures
from .categories import (
    Predicate,
    SecurityCategory,
    TimeWindow,
)
from .entry import (
    LogEntry,
    RawEntry,
)
from .result import (
    Failure,
    QueryResult,
    Success,
)

# Log stores
from .traits import (
    LogStore,
    StoreHandle,
)
from .store import (
    DumpFileStore,
    LiveLogStore,
)

# High-level API
from .query import LogQueryService
from .export import (
    ExportWriter,
    default_filename,
    format_entry,
)
from .runner import BackgroundQueryRunner

# Configuration
from .config import (
    Settings,
    load_settings,
)

# Exceptions
from .error import (
    ErrorKind,
    QueryFailedError,
    SecurityLogError,
    StoreUnavailableError,
    WriteFailedError,
)

__all__ = [
    # Version
    '__version__',

    # Core data structures
    'Predicate',
    'SecurityCategory',
    'TimeWindow',
    'LogEntry',
    'RawEntry',
    'Failure',
    'QueryResult',
    'Success',

    # Log stores
    'LogStore',
    'StoreHandle',
    'DumpFileStore',
    'LiveLogStore',

    # High-level API
    'LogQueryService',
    'ExportWriter',
    'default_filename',
    'format_entry',
    'BackgroundQueryRunner',

    # Configuration
    'Settings',
    'load_settings',

    # Exceptions
    'ErrorKind',
    'QueryFailedError',
    'SecurityLogError',
    'StoreUnavailableError',
    'WriteFailedError',
]
