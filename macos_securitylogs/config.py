# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Runtime settings with environment variable overrides.

Every setting has a default and may be overridden through an environment
variable prefixed with ``MACOS_SECURITYLOGS_``:

- ``MACOS_SECURITYLOGS_LOG_BINARY``: path of the `log` command
- ``MACOS_SECURITYLOGS_TIMEOUT``: seconds before a `log show` run is abandoned
- ``MACOS_SECURITYLOGS_INCLUDE_INFO``: include info-level records (1/0)
- ``MACOS_SECURITYLOGS_LOG_LEVEL``: level for the command line front end
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "MACOS_SECURITYLOGS_"

DEFAULT_LOG_BINARY = "/usr/bin/log"
DEFAULT_TIMEOUT = 120.0
DEFAULT_LOG_LEVEL = "WARNING"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Settings:
    """Settings shared by the stores and the command line front end."""
    log_binary: str = DEFAULT_LOG_BINARY
    timeout: float = DEFAULT_TIMEOUT
    include_info: bool = True
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from defaults and environment overrides.

    Invalid override values are ignored with a warning.

    Args:
        environ: Mapping to read overrides from (defaults to ``os.environ``)

    Returns:
        Settings instance
    """
    if environ is None:
        environ = os.environ

    settings = Settings()

    binary = environ.get(ENV_PREFIX + "LOG_BINARY")
    if binary:
        settings.log_binary = binary

    timeout = environ.get(ENV_PREFIX + "TIMEOUT")
    if timeout:
        try:
            value = float(timeout)
            if value <= 0:
                raise ValueError("must be positive")
            settings.timeout = value
        except ValueError as e:
            logger.warning(f"[macos-securitylogs] Ignoring invalid {ENV_PREFIX}TIMEOUT={timeout!r}: {e}")

    include_info = environ.get(ENV_PREFIX + "INCLUDE_INFO")
    if include_info:
        flag = include_info.strip().lower()
        if flag in _TRUE:
            settings.include_info = True
        elif flag in _FALSE:
            settings.include_info = False
        else:
            logger.warning(f"[macos-securitylogs] Ignoring invalid {ENV_PREFIX}INCLUDE_INFO={include_info!r}")

    level = environ.get(ENV_PREFIX + "LOG_LEVEL")
    if level:
        if level.strip().upper() in _LEVELS:
            settings.log_level = level.strip().upper()
        else:
            logger.warning(f"[macos-securitylogs] Ignoring invalid {ENV_PREFIX}LOG_LEVEL={level!r}")

    return settings
