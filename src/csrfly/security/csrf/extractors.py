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
"""Token extractors: locate the submitted token in one part of the request.

The built-in strategies form a closed set tagged by :class:`TokenSource`.
Each reads exactly one named field and never falls back to another source.
:class:`CustomExtractor` is the single escape hatch for anything else.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar

from csrfly.kernel.exceptions import MissingTokenException
from csrfly.web.ports.request import RequestAccessor


class TokenSource(str, enum.Enum):
    """Where in the request a token is read from."""

    HEADER = "header"
    QUERY = "query"
    PARAM = "param"
    FORM = "form"
    CUSTOM = "custom"


class TokenExtractor:
    """Base class for extraction strategies."""

    source: ClassVar[TokenSource]

    def extract(self, request: RequestAccessor) -> str:
        """Return the presented token.

        Raises:
            MissingTokenException: If the field is absent or empty.
        """
        raise NotImplementedError

    def _require(self, value: str | None) -> str:
        if not value:
            raise MissingTokenException(self.source.value)
        return value


@dataclass(frozen=True)
class HeaderExtractor(TokenExtractor):
    """Reads the token from a request header."""

    source: ClassVar[TokenSource] = TokenSource.HEADER
    key: str

    def extract(self, request: RequestAccessor) -> str:
        return self._require(request.header(self.key))


@dataclass(frozen=True)
class QueryExtractor(TokenExtractor):
    """Reads the token from a query-string parameter."""

    source: ClassVar[TokenSource] = TokenSource.QUERY
    key: str

    def extract(self, request: RequestAccessor) -> str:
        return self._require(request.query(self.key))


@dataclass(frozen=True)
class ParamExtractor(TokenExtractor):
    """Reads the token from a matched path parameter."""

    source: ClassVar[TokenSource] = TokenSource.PARAM
    key: str

    def extract(self, request: RequestAccessor) -> str:
        return self._require(request.path_param(self.key))


@dataclass(frozen=True)
class FormExtractor(TokenExtractor):
    """Reads the token from a url-encoded or multipart form field."""

    source: ClassVar[TokenSource] = TokenSource.FORM
    key: str

    def extract(self, request: RequestAccessor) -> str:
        return self._require(request.form_value(self.key))


@dataclass(frozen=True)
class CustomExtractor(TokenExtractor):
    """Wraps an application-supplied ``(request) -> str | None`` callable.

    Set *reads_form* when the callable needs the parsed form body, so web
    adapters know to load it before validation.
    """

    source: ClassVar[TokenSource] = TokenSource.CUSTOM
    func: Callable[[RequestAccessor], str | None]
    reads_form: bool = False

    def extract(self, request: RequestAccessor) -> str:
        return self._require(self.func(request))


_REGISTRY: dict[TokenSource, type[TokenExtractor]] = {
    TokenSource.HEADER: HeaderExtractor,
    TokenSource.QUERY: QueryExtractor,
    TokenSource.PARAM: ParamExtractor,
    TokenSource.FORM: FormExtractor,
}


def extractor_for(source: TokenSource, key: str) -> TokenExtractor:
    """Return the built-in extractor for *source* reading field *key*."""
    try:
        extractor_cls = _REGISTRY[source]
    except KeyError:
        raise ValueError(f"No built-in extractor for source '{source.value}'") from None
    return extractor_cls(key)  # type: ignore[call-arg]


def needs_form(extractor: TokenExtractor) -> bool:
    """Return ``True`` if *extractor* reads the request form body."""
    if isinstance(extractor, CustomExtractor):
        return extractor.reads_form
    return extractor.source is TokenSource.FORM
