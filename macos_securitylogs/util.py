# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Utility functions for decoding `log show` output and formatting timestamps."""

import json
import logging
from datetime import datetime, timezone
from typing import Iterable, Iterator, Optional

from .entry import RawEntry

logger = logging.getLogger(__name__)

# `log show` event types whose records carry a composed message
TEXTUAL_EVENT_TYPES = frozenset({"logEvent"})

LOG_TIMESTAMP_FORMATS = (
    '%Y-%m-%d %H:%M:%S.%f%z',
    '%Y-%m-%d %H:%M:%S%z',
)


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware ones are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_log_timestamp(text: str) -> datetime:
    """Parse a timestamp as printed by `log show`.

    Example: ``2025-08-14 15:04:05.123456-0400``

    Args:
        text: Timestamp string

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the string matches no known layout
    """
    for layout in LOG_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, layout)
        except ValueError:
            continue
    # ISO 8601 as written by other tools
    return ensure_aware(datetime.fromisoformat(text))


def format_log_start(since: datetime) -> str:
    """Format a lower time bound for `log show --start`, in local time."""
    return ensure_aware(since).astimezone().strftime('%Y-%m-%d %H:%M:%S')


def format_export_timestamp(timestamp: datetime) -> str:
    """Format a timestamp as abbreviated date plus standard time.

    Uses fixed English month abbreviations so output does not depend on the
    process locale.
    """
    month = _MONTHS[timestamp.month - 1]
    return f"{month} {timestamp.day:02d}, {timestamp.year:04d} {timestamp:%H:%M:%S}"


_MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
           'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def parse_ndjson_record(line: str) -> Optional[RawEntry]:
    """Decode one line of `log show --style ndjson` output.

    Args:
        line: A single output line

    Returns:
        RawEntry, or None for blank lines and objects that are not log
        records (such as the trailing summary object)

    Raises:
        ValueError: If the line is not valid JSON or has a bad timestamp
    """
    line = line.strip()
    if not line:
        return None

    record = json.loads(line)
    if not isinstance(record, dict) or 'eventType' not in record:
        return None

    timestamp = record.get('timestamp')
    if not timestamp:
        raise ValueError(f"Record without timestamp: {line[:80]}")

    event_type = record.get('eventType') or ''
    message = None
    if event_type in TEXTUAL_EVENT_TYPES:
        message = record.get('eventMessage')
        if message is not None and not isinstance(message, str):
            message = str(message)

    return RawEntry(
        timestamp=parse_log_timestamp(timestamp),
        message=message,
        subsystem=record.get('subsystem') or '',
        category=record.get('category') or '',
        process=record.get('processImagePath') or '',
        message_type=record.get('messageType') or '',
        event_type=event_type,
    )


def iter_ndjson_records(lines: Iterable[str]) -> Iterator[RawEntry]:
    """Decode `log show --style ndjson` output line by line.

    Raises:
        ValueError: On the first malformed line, naming its line number
    """
    for number, line in enumerate(lines, start=1):
        try:
            entry = parse_ndjson_record(line)
        except ValueError as err:
            raise ValueError(f"Malformed log record on line {number}: {err}") from err
        if entry is not None:
            yield entry
