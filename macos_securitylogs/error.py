# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Custom exceptions for the macos-securitylogs library."""

from enum import Enum


class ErrorKind(Enum):
    """Failure categories reported to callers."""
    StoreUnavailable = "StoreUnavailable"
    QueryFailed = "QueryFailed"
    WriteFailed = "WriteFailed"


class SecurityLogError(Exception):
    """Base exception for log store and export errors."""
    kind: ErrorKind = ErrorKind.QueryFailed


class StoreUnavailableError(SecurityLogError):
    """The log store could not be opened."""
    kind = ErrorKind.StoreUnavailable

    def __init__(self, message: str = "Failed to open the log store"):
        super().__init__(message)


class QueryFailedError(SecurityLogError):
    """The log store query did not complete."""
    kind = ErrorKind.QueryFailed

    def __init__(self, message: str = "Failed to query the log store"):
        super().__init__(message)


class WriteFailedError(SecurityLogError):
    """The export destination could not be written."""
    kind = ErrorKind.WriteFailed

    def __init__(self, message: str = "Failed to write export file", path: str = ""):
        self.path = path
        super().__init__(message)
