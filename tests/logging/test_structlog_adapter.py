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
"""Tests for StructlogAdapter, LoggingProperties and the LoggingPort they serve."""

import io
import json
import logging
from typing import Any

import pytest
import structlog

from csrfly.config.properties.logging import LoggingProperties
from csrfly.core.config import Config
from csrfly.logging.port import LoggingPort
from csrfly.logging.structlog_adapter import StructlogAdapter


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    logging.getLogger().setLevel(logging.WARNING)
    for name in ("csrfly.security.csrf", "csrfly.session"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestLoggingPortProtocol:
    def test_adapter_implements_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_non_conforming_class_is_not_instance(self):
        class Incomplete:
            def get_logger(self, name: str) -> Any:
                pass

        assert not isinstance(Incomplete(), LoggingPort)


class TestLoggingProperties:
    def test_dict_levels_are_upper_cased(self):
        props = LoggingProperties(level={"root": "debug", "csrfly.session": "warning"})
        assert props.levels() == {"root": "DEBUG", "csrfly.session": "WARNING"}

    def test_plain_string_sets_root_only(self):
        assert LoggingProperties(level="error").levels() == {"root": "ERROR"}


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter(stream=io.StringIO())
        adapter.configure(Config({}))
        assert adapter.properties.format == "console"
        assert logging.getLogger().level == logging.INFO

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter(stream=io.StringIO())
        adapter.configure(Config({"csrfly": {"logging": {"level": {"root": "debug"}}}}))
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_format_falls_back_to_console(self):
        adapter = StructlogAdapter(stream=io.StringIO())
        adapter.configure(Config({"csrfly": {"logging": {"format": "xml"}}}))
        assert adapter.properties.format == "console"

    def test_configure_applies_per_module_levels(self):
        adapter = StructlogAdapter(stream=io.StringIO())
        config = Config({"csrfly": {"logging": {"level": {"root": "INFO", "csrfly.security.csrf": "WARNING"}}}})
        adapter.configure(config)
        assert logging.getLogger("csrfly.security.csrf").level == logging.WARNING

    def test_env_level_override(self, monkeypatch):
        monkeypatch.setenv("CSRFLY_LOGGING_LEVEL", "error")
        StructlogAdapter(stream=io.StringIO()).configure(Config({}))
        assert logging.getLogger().level == logging.ERROR


class TestStructlogAdapterOutput:
    def test_json_format_writes_json_lines(self):
        stream = io.StringIO()
        adapter = StructlogAdapter(stream=stream)
        adapter.configure(Config({"csrfly": {"logging": {"format": "json"}}}))

        adapter.get_logger("csrfly.session").warning("session_payload_unreadable", session_id="s1")

        event = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert event["event"] == "session_payload_unreadable"
        assert event["session_id"] == "s1"
        assert event["logger"] == "csrfly.session"
        assert event["level"] == "warning"

    def test_module_level_filters_events(self):
        stream = io.StringIO()
        adapter = StructlogAdapter(stream=stream)
        adapter.configure(
            Config({"csrfly": {"logging": {"format": "json", "level": {"root": "INFO", "csrfly.session": "ERROR"}}}})
        )

        adapter.get_logger("csrfly.session").warning("dropped")

        assert "dropped" not in stream.getvalue()
