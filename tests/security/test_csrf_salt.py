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
"""Tests for salt generation and the salt provider."""

from __future__ import annotations

import random
import string
from concurrent.futures import ThreadPoolExecutor

import pytest

from csrfly.kernel.exceptions import MissingSaltException
from csrfly.security.csrf.salt import SALT_SESSION_KEY, SaltGenerator, SaltProvider

_ALPHANUMERIC = set(string.ascii_letters + string.digits)


class TestSaltGenerator:
    def test_default_length_and_alphabet(self) -> None:
        salt = SaltGenerator().generate()
        assert len(salt) == 16
        assert set(salt) <= _ALPHANUMERIC

    def test_custom_length(self) -> None:
        assert len(SaltGenerator(length=8).generate()) == 8

    def test_injected_rng_is_used(self) -> None:
        a = SaltGenerator(rng=random.Random(42)).generate()
        b = SaltGenerator(rng=random.Random(42)).generate()
        assert a == b

    def test_concurrent_generation(self) -> None:
        generator = SaltGenerator()
        with ThreadPoolExecutor(max_workers=8) as pool:
            salts = list(pool.map(lambda _: generator.generate(), range(200)))
        assert all(len(s) == 16 for s in salts)
        assert len(set(salts)) == len(salts)


class TestSaltProvider:
    def test_get_or_create_creates_and_saves(self, session) -> None:
        salt = SaltProvider().get_or_create(session)
        assert len(salt) == 16
        assert session.data[SALT_SESSION_KEY] == salt
        assert session.save_calls == 1

    def test_get_or_create_never_regenerates(self, session) -> None:
        provider = SaltProvider()
        first = provider.get_or_create(session)
        second = provider.get_or_create(session)
        assert first == second
        assert session.save_calls == 1

    def test_get_or_create_replaces_empty_salt(self, session) -> None:
        session.data[SALT_SESSION_KEY] = ""
        salt = SaltProvider().get_or_create(session)
        assert salt
        assert session.data[SALT_SESSION_KEY] == salt

    def test_save_failure_is_not_raised(self, make_session) -> None:
        session = make_session(save_ok=False)
        salt = SaltProvider().get_or_create(session)
        assert session.data[SALT_SESSION_KEY] == salt

    def test_require_returns_existing_salt(self, session) -> None:
        session.data[SALT_SESSION_KEY] = "existing-salt"
        assert SaltProvider().require(session) == "existing-salt"

    @pytest.mark.parametrize("stored", [None, "", 12345])
    def test_require_never_creates(self, make_session, stored) -> None:
        session = make_session({} if stored is None else {SALT_SESSION_KEY: stored})
        with pytest.raises(MissingSaltException):
            SaltProvider().require(session)
        assert session.save_calls == 0
        assert session.data.get(SALT_SESSION_KEY) == stored

    def test_custom_session_key(self, session) -> None:
        provider = SaltProvider(session_key="mySalt")
        salt = provider.get_or_create(session)
        assert session.data == {"mySalt": salt}
