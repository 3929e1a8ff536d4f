# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Log stores backed by the `log` command and by saved NDJSON dumps."""

import logging
import os
import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import lz4.frame

from .categories import Predicate
from .config import Settings, load_settings
from .entry import RawEntry
from .error import QueryFailedError, StoreUnavailableError
from .traits import LogStore, StoreHandle
from .util import ensure_aware, format_log_start, iter_ndjson_records

logger = logging.getLogger(__name__)

_PERMISSION_MARKERS = ("permission", "not permitted", "must be admin", "access denied")


class LiveLogStore(LogStore):
    """Store for the unified log of the running macOS system.

    Queries run `log show --style ndjson` with the predicate rendered in the
    command's own predicate syntax, so filtering happens inside logd.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the live store.

        Args:
            settings: Runtime settings (defaults to ``load_settings()``)
        """
        self._settings = settings if settings is not None else load_settings()

    def open(self) -> StoreHandle:
        binary = self._settings.log_binary
        if not os.path.isfile(binary):
            raise StoreUnavailableError(f"Log command not found: {binary}")
        if not os.access(binary, os.X_OK):
            raise StoreUnavailableError(f"Log command is not executable: {binary}")
        return StoreHandle(source=binary)

    def build_command(self, handle: StoreHandle, since: datetime, predicate: Predicate) -> List[str]:
        """Build the `log show` argument list for a query."""
        command = [
            handle.source, "show",
            "--style", "ndjson",
            "--start", format_log_start(since),
            "--predicate", predicate.to_log_predicate(),
        ]
        if self._settings.include_info:
            command.append("--info")
        return command

    def fetch(self, handle: StoreHandle, since: datetime, predicate: Predicate) -> List[RawEntry]:
        command = self.build_command(handle, since, predicate)
        logger.debug(f"Running {' '.join(command)}")

        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self._settings.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise QueryFailedError(f"log show timed out after {e.timeout} seconds") from e
        except PermissionError as e:
            raise StoreUnavailableError(f"Not permitted to run {handle.source}: {e}") from e
        except OSError as e:
            raise QueryFailedError(f"Failed to run {handle.source}: {e}") from e

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            if any(marker in stderr.lower() for marker in _PERMISSION_MARKERS):
                raise StoreUnavailableError(f"Log store not readable: {stderr}")
            raise QueryFailedError(f"log show exited with status {completed.returncode}: {stderr}")

        try:
            return list(iter_ndjson_records(completed.stdout.splitlines()))
        except ValueError as e:
            raise QueryFailedError(str(e)) from e


class DumpFileStore(LogStore):
    """Store for output saved earlier with `log show --style ndjson`.

    Dumps ending in ``.lz4`` are read through the lz4 frame format, so
    collections from other machines can be kept compressed. Filtering by time
    and predicate happens locally.
    """

    def __init__(self, path: str):
        """Initialize with a dump path.

        Args:
            path: Path to the NDJSON dump (optionally ``.lz4`` compressed)
        """
        self._path = Path(path)

    @property
    def compressed(self) -> bool:
        return self._path.suffix.lower() == ".lz4"

    def open(self) -> StoreHandle:
        if not self._path.is_file():
            raise StoreUnavailableError(f"Log dump not found: {self._path}")

        try:
            if self.compressed:
                with lz4.frame.open(str(self._path), mode="rt", encoding="utf-8") as reader:
                    lines = reader.read().splitlines()
            else:
                with open(self._path, "r", encoding="utf-8") as reader:
                    lines = reader.read().splitlines()
        except (OSError, EOFError, RuntimeError, UnicodeDecodeError) as e:
            raise StoreUnavailableError(f"Failed to read log dump {self._path}: {e}") from e

        logger.debug(f"Loaded {len(lines)} lines from {self._path}")
        return StoreHandle(source=str(self._path), payload=lines)

    def fetch(self, handle: StoreHandle, since: datetime, predicate: Predicate) -> List[RawEntry]:
        since = ensure_aware(since)
        entries: List[RawEntry] = []

        try:
            for entry in iter_ndjson_records(handle.payload or []):
                if ensure_aware(entry.timestamp) < since:
                    continue
                if not predicate.matches(entry.subsystem, entry.message):
                    continue
                entries.append(entry)
        except ValueError as e:
            raise QueryFailedError(f"{handle.source}: {e}") from e

        return entries

    def close(self, handle: StoreHandle) -> None:
        handle.payload = None
