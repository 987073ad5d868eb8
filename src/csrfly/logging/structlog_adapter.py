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
"""StructlogAdapter: the default LoggingPort, rendering through structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from csrfly.config.properties.logging import LoggingProperties
from csrfly.core.config import Config

_RENDERERS = ("console", "json")


class StructlogAdapter:
    """Routes structlog events through the stdlib ``logging`` tree.

    ``csrfly.logging.format`` picks the renderer (``console`` or ``json``);
    ``csrfly.logging.level`` sets the root level and per-logger levels such
    as ``csrfly.security.csrf``.  Records are written to *stream*.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._properties = LoggingProperties()

    @property
    def properties(self) -> LoggingProperties:
        """Logging properties applied by the last :meth:`configure` call."""
        return self._properties

    def configure(self, config: Config) -> None:
        props = config.bind(LoggingProperties)
        props.format = props.format.lower()
        if props.format not in _RENDERERS:
            props.format = "console"
        self._properties = props

        levels = props.levels()
        root_level = levels.pop("root", "INFO")

        structlog.configure(
            processors=self._processors(props.format),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=self._stream,
            level=_level_of(root_level),
            force=True,
        )
        for name, level in levels.items():
            logging.getLogger(name).setLevel(_level_of(level))

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    @staticmethod
    def _processors(fmt: str) -> list[structlog.types.Processor]:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ]
        if fmt == "json":
            processors.append(structlog.processors.format_exc_info)
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        return processors


def _level_of(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO
