# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Plain-text export of queried entries."""

import logging
import os
import stat
import tempfile
import threading
from pathlib import Path
from typing import Iterable, Union

from .categories import SecurityCategory
from .entry import LogEntry
from .error import WriteFailedError
from .util import format_export_timestamp

logger = logging.getLogger(__name__)

_umask_lock = threading.Lock()


def _current_umask() -> int:
    # os.umask can only be read by setting it
    with _umask_lock:
        mask = os.umask(0o022)
        os.umask(mask)
    return mask


def _target_mode(path: Path) -> int:
    """Mode for the exported file: keep an existing file's mode, else honor the umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        return 0o666 & ~_current_umask()


def format_entry(entry: LogEntry) -> str:
    """Format one entry as ``[<date> <time>] <message>``."""
    return f"[{format_export_timestamp(entry.timestamp)}] {entry.message}"


def default_filename(category: SecurityCategory) -> str:
    """Suggested export file name for a category, e.g. ``XProtect-logs.txt``."""
    return f"{category.value}-logs.txt"


class ExportWriter:
    """Writes entries to a UTF-8 text file, one line per entry.

    Lines are joined with a single newline and the file has no trailing
    newline. Writes are atomic: the destination either receives the complete
    new text or is left as it was.
    """

    encoding = "utf-8"

    def render(self, entries: Iterable[LogEntry]) -> str:
        """Return the exact text ``write`` stores for ``entries``."""
        return "\n".join(format_entry(entry) for entry in entries)

    def write(self, entries: Iterable[LogEntry], destination: Union[str, os.PathLike]) -> None:
        """Write ``entries`` to ``destination``, creating or replacing it.

        An empty sequence produces an empty file.

        Args:
            entries: Entries in the order they should appear
            destination: Target file path

        Raises:
            WriteFailedError: If the file cannot be written; the destination
                is untouched in that case
        """
        path = Path(destination)
        entries = list(entries)
        data = self.render(entries).encode(self.encoding)

        tmp_name = None
        try:
            # Temp file in the same directory so os.replace stays on one filesystem
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "wb") as writer:
                writer.write(data)
                writer.flush()
                os.fsync(writer.fileno())
            os.chmod(tmp_name, _target_mode(path))
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            logger.error(f"[macos-securitylogs] Failed to export logs to {path}: {e}")
            raise WriteFailedError(f"Failed to save logs: {e}", path=str(path)) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

        logger.info(f"Exported {len(entries)} entries to {path}")
