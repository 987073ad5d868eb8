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
"""Configuration resolver: layers overrides onto defaults, once, at startup."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import structlog

from csrfly.config.properties.security import CsrfProperties
from csrfly.kernel.exceptions import CsrfConfigurationException, CsrfException
from csrfly.security.csrf.extractors import (
    CustomExtractor,
    HeaderExtractor,
    TokenExtractor,
    TokenSource,
    extractor_for,
)
from csrfly.web.ports.request import RequestAccessor

logger = structlog.get_logger("csrfly.security.csrf.config")

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
HEADER_NAME: str = "X-CSRF-TOKEN"
"""Default request header carrying the token."""

DEFAULT_SECRET: str = "csrfSecret"

DEFAULT_IGNORED_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})
"""Methods treated as safe by RFC 7231; everything else needs a token."""

DEFAULT_LOOKUP: str = f"header:{HEADER_NAME}"

BypassPredicate = Callable[[RequestAccessor], bool]
FailureHandler = Callable[[CsrfException, RequestAccessor], Any]
ExtractorLike = TokenExtractor | Callable[[RequestAccessor], str | None]


def abort_with_error(error: CsrfException, request: RequestAccessor) -> Any:
    """Default failure handler: re-raise the triggering error.

    The web adapter maps the raised :class:`CsrfException` to a 403 response,
    so the request never reaches downstream handlers.
    """
    raise error


@dataclass(frozen=True)
class CsrfConfig:
    """Resolved, immutable CSRF configuration shared by all requests."""

    secret: str
    ignored_methods: frozenset[str]
    lookup: str
    extractor: TokenExtractor
    failure_handler: FailureHandler
    bypass: BypassPredicate | None = None


def parse_lookup(lookup: str) -> tuple[str, str]:
    """Split a ``<source>:<key>`` lookup into its two parts.

    Raises:
        CsrfConfigurationException: Unless the lookup has exactly two
            non-empty parts.
    """
    parts = lookup.split(":")
    if len(parts) != 2 or not all(parts):
        raise CsrfConfigurationException(
            "[CSRF] KeyLookup must be in the form of <source>:<key>",
            context={"lookup": lookup},
        )
    return parts[0], parts[1]


def extractor_from_lookup(lookup: str) -> TokenExtractor:
    """Build the extractor named by *lookup*.

    An unrecognized source falls back to reading a header named by the key.
    """
    source_name, key = parse_lookup(lookup)
    try:
        source = TokenSource(source_name)
    except ValueError:
        source = None

    if source is None or source is TokenSource.CUSTOM:
        logger.warning(
            "csrf_lookup_unknown_source",
            lookup=lookup,
            source=source_name,
            fallback=TokenSource.HEADER.value,
        )
        return HeaderExtractor(key)
    return extractor_for(source, key)


def resolve_config(
    *,
    secret: str | None = None,
    ignored_methods: Iterable[str] | None = None,
    lookup: str | None = None,
    extractor: ExtractorLike | None = None,
    failure_handler: FailureHandler | None = None,
    bypass: BypassPredicate | None = None,
) -> CsrfConfig:
    """Merge overrides with the defaults and validate the result.

    Empty strings and ``None`` fall back to defaults; an explicitly empty
    *ignored_methods* collection is honoured and protects every method.

    Raises:
        CsrfConfigurationException: If the lookup is malformed.
    """
    resolved_secret = secret or DEFAULT_SECRET
    if resolved_secret == DEFAULT_SECRET:
        logger.warning("csrf_default_secret_in_use")

    resolved_lookup = lookup or DEFAULT_LOOKUP
    derived = extractor_from_lookup(resolved_lookup)

    if extractor is None:
        resolved_extractor = derived
    elif isinstance(extractor, TokenExtractor):
        resolved_extractor = extractor
    else:
        resolved_extractor = CustomExtractor(extractor)

    methods = DEFAULT_IGNORED_METHODS if ignored_methods is None else frozenset(ignored_methods)

    config = CsrfConfig(
        secret=resolved_secret,
        ignored_methods=methods,
        lookup=resolved_lookup,
        extractor=resolved_extractor,
        failure_handler=failure_handler or abort_with_error,
        bypass=bypass,
    )
    logger.debug(
        "csrf_config_resolved",
        lookup=config.lookup,
        source=config.extractor.source.value,
        ignored_methods=sorted(config.ignored_methods),
    )
    return config


def resolve_from_properties(properties: CsrfProperties, **overrides: Any) -> CsrfConfig:
    """Resolve configuration from bound ``csrfly.security.csrf.*`` properties.

    Keyword *overrides* (e.g. ``failure_handler`` or ``bypass``, which cannot
    be expressed in a config file) take precedence over property values.
    """
    values: dict[str, Any] = {
        "secret": properties.secret,
        "ignored_methods": properties.ignored_methods,
        "lookup": properties.lookup,
    }
    values.update(overrides)
    return resolve_config(**values)
