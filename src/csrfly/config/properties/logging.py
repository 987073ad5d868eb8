# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Logging configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from csrfly.core.config import config_properties


@config_properties(prefix="csrfly.logging")
@dataclass
class LoggingProperties:
    """Configuration for csrfly.logging.*.

    ``level`` maps logger names to level names, with ``root`` for the root
    logger.  A plain string (e.g. from ``CSRFLY_LOGGING_LEVEL=DEBUG``) sets
    the root level only.
    """

    format: str = "console"
    level: Any = field(default_factory=lambda: {"root": "INFO"})

    def levels(self) -> dict[str, str]:
        """Return ``level`` normalised to upper-cased names per logger."""
        if isinstance(self.level, dict):
            return {str(name): str(value).upper() for name, value in self.level.items()}
        return {"root": str(self.level).upper()}
