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
"""Tests for Config: layered loading, env overrides and dataclass binding."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from csrfly.core.config import Config, config_properties
from csrfly.kernel.exceptions import ConfigurationException


class TestConfig:
    def test_get_simple_value(self):
        config = Config({"app": {"port": 8080}})
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        config = Config({})
        assert config.get("missing.key", "default") == "default"

    def test_get_false_value_is_not_default(self):
        config = Config({"feature": {"enabled": False}})
        assert config.get("feature.enabled", True) is False

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "csrfly.yaml"
        config_file.write_text("app:\n  name: my-service\n")
        config = Config.from_file(config_file)
        assert config.get("app.name") == "my-service"

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "csrfly.toml"
        config_file.write_text('[csrfly.security.csrf]\nlookup = "form:_csrf"\n')
        config = Config.from_file(config_file)
        assert config.get("csrfly.security.csrf.lookup") == "form:_csrf"

    def test_packaged_defaults_are_loaded(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("csrfly.security.csrf.lookup") == "header:X-CSRF-TOKEN"
        assert config.loaded_sources == ["csrfly-defaults.yaml (defaults)"]

    def test_file_overrides_defaults(self, tmp_path: Path):
        config_file = tmp_path / "csrfly.yaml"
        config_file.write_text("csrfly:\n  security:\n    csrf:\n      secret: from-file\n")
        config = Config.from_file(config_file)
        assert config.get("csrfly.security.csrf.secret") == "from-file"
        assert config.get("csrfly.security.csrf.lookup") == "header:X-CSRF-TOKEN"

    def test_profile_overlay(self, tmp_path: Path):
        (tmp_path / "csrfly.yaml").write_text("server:\n  port: 8080\n  host: localhost\n")
        (tmp_path / "csrfly-dev.yaml").write_text("server:\n  port: 9090\n")
        config = Config.from_file(tmp_path / "csrfly.yaml", active_profiles=["dev"], load_defaults=False)
        assert config.get("server.port") == 9090
        assert config.get("server.host") == "localhost"
        assert len(config.loaded_sources) == 2

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CSRFLY_SECURITY_CSRF_SECRET", "env-secret")
        config = Config({"csrfly": {"security": {"csrf": {"secret": "file-secret"}}}})
        assert config.get("csrfly.security.csrf.secret") == "env-secret"

    def test_get_section(self):
        config = Config({"csrfly": {"logging": {"level": {"root": "DEBUG"}}}})
        assert config.get_section("csrfly.logging.level") == {"root": "DEBUG"}
        assert config.get_section("csrfly.missing") == {}


class TestPlaceholders:
    def test_env_placeholder(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("APP_SECRET", "s3cr3t")
        config = Config({"csrf": {"secret": "${APP_SECRET}"}})
        assert config.get("csrf.secret") == "s3cr3t"

    def test_config_reference_placeholder(self):
        config = Config({"base": {"name": "svc"}, "csrf": {"secret": "${base.name}-key"}})
        assert config.get("csrf.secret") == "svc-key"

    def test_placeholder_default(self):
        config = Config({"csrf": {"secret": "${CSRFLY_TEST_UNSET_VAR:fallback}"}})
        assert config.get("csrf.secret") == "fallback"

    def test_unresolvable_placeholder_raises(self):
        config = Config({"csrf": {"secret": "${CSRFLY_TEST_UNSET_VAR}"}})
        with pytest.raises(ConfigurationException):
            config.get("csrf.secret")

    def test_circular_placeholder_raises(self):
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ConfigurationException):
            config.get("a")


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///test.db"
            pool_size: int = 5

        config = Config({"database": {"url": "postgresql://localhost/mydb", "pool_size": 20}})
        db_config = config.bind(DatabaseConfig)
        assert db_config.url == "postgresql://localhost/mydb"
        assert db_config.pool_size == 20

    def test_bind_uses_defaults(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///default.db"
            pool_size: int = 5

        db_config = Config({}).bind(DatabaseConfig)
        assert db_config.url == "sqlite:///default.db"
        assert db_config.pool_size == 5

    def test_bind_coerces_env_strings(self, monkeypatch: pytest.MonkeyPatch):
        @config_properties(prefix="csrfly.web")
        @dataclass
        class WebConfig:
            port: int = 8000
            debug: bool = False
            methods: list[str] | None = None
            patterns: list[str] = field(default_factory=list)

        monkeypatch.setenv("CSRFLY_WEB_PORT", "9000")
        monkeypatch.setenv("CSRFLY_WEB_DEBUG", "true")
        monkeypatch.setenv("CSRFLY_WEB_METHODS", "GET, HEAD")
        monkeypatch.setenv("CSRFLY_WEB_PATTERNS", "/health,/ready")
        web = Config({}).bind(WebConfig)
        assert web.port == 9000
        assert web.debug is True
        assert web.methods == ["GET", "HEAD"]
        assert web.patterns == ["/health", "/ready"]

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            value: int = 1

        with pytest.raises(ConfigurationException):
            Config({}).bind(Plain)
