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
"""Tests for the csrfly exception hierarchy."""

from csrfly.kernel.exceptions import (
    ConfigurationException,
    CsrfConfigurationException,
    CsrfException,
    CsrflyException,
    ForbiddenException,
    MissingSaltException,
    MissingTokenException,
    SecurityException,
    TokenMismatchException,
)


class TestCsrflyException:
    def test_basic_creation(self):
        exc = CsrflyException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_code_and_context(self):
        exc = CsrflyException("bad", code="X_001", context={"key": "value"})
        assert exc.code == "X_001"
        assert exc.context["key"] == "value"

    def test_context_defaults_to_empty_dict(self):
        exc = CsrflyException("test")
        exc.context["key"] = "value"
        exc2 = CsrflyException("test2")
        assert exc2.context == {}


class TestCsrfExceptions:
    def test_missing_salt(self):
        exc = MissingSaltException()
        assert exc.code == "CSRF_MISSING_SALT"
        assert "missing salt" in str(exc)

    def test_missing_token_carries_source(self):
        exc = MissingTokenException("form")
        assert exc.code == "CSRF_MISSING_TOKEN"
        assert exc.source == "form"
        assert exc.context == {"source": "form"}
        assert str(exc) == "[CSRF] missing csrf token in form"

    def test_token_mismatch(self):
        exc = TokenMismatchException()
        assert exc.code == "CSRF_TOKEN_MISMATCH"

    def test_configuration_error(self):
        exc = CsrfConfigurationException("bad lookup", context={"lookup": "header"})
        assert exc.code == "CSRF_CONFIG"
        assert exc.context["lookup"] == "header"


class TestExceptionHierarchy:
    def test_request_time_errors_are_csrf_exceptions(self):
        for exc_cls in (MissingSaltException, TokenMismatchException):
            assert issubclass(exc_cls, CsrfException)
        assert issubclass(MissingTokenException, CsrfException)

    def test_csrf_is_forbidden_security_error(self):
        assert issubclass(CsrfException, ForbiddenException)
        assert issubclass(ForbiddenException, SecurityException)

    def test_setup_time_error_is_not_csrf_exception(self):
        assert issubclass(CsrfConfigurationException, ConfigurationException)
        assert not issubclass(CsrfConfigurationException, CsrfException)

    def test_catch_all_csrfly_exceptions(self):
        exceptions = [
            MissingSaltException(),
            MissingTokenException("header"),
            TokenMismatchException(),
            CsrfConfigurationException("bad"),
        ]
        for exc in exceptions:
            try:
                raise exc
            except CsrflyException as caught:
                assert caught is exc
