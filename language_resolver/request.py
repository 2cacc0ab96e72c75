"""
Request snapshot

``LanguageRequest`` is an immutable view of the parts of an HTTP request the
resolver consumes: query parameters, parsed body, headers, host and path.
Annotations (``site``, ``language``, ``routing``) are added with
:meth:`LanguageRequest.with_attribute`, which returns a new instance.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from starlette.requests import Request

logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
_JSON_CONTENT_TYPES = ("application/json",)


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class LanguageRequest:
    query_params: Mapping[str, Any] = field(default_factory=dict)
    parsed_body: Mapping[str, Any] | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    host: str = ""
    path: str = "/"
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "query_params", _frozen(self.query_params))
        object.__setattr__(self, "headers", _frozen({k.lower(): v for k, v in (self.headers or {}).items()}))
        object.__setattr__(self, "attributes", _frozen(self.attributes))
        if self.parsed_body is not None:
            object.__setattr__(self, "parsed_body", _frozen(self.parsed_body))

    def header_line(self, name: str) -> str:
        """Return the header value, or an empty string when absent."""
        return self.headers.get(name.lower(), "") or ""

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def with_attribute(self, name: str, value: Any) -> LanguageRequest:
        attributes = dict(self.attributes)
        attributes[name] = value
        return replace(self, attributes=attributes)

    @classmethod
    async def from_starlette(cls, request: Request) -> LanguageRequest:
        """Snapshot a Starlette request, parsing form and JSON bodies."""
        return cls(
            query_params=dict(request.query_params),
            parsed_body=await _parse_body(request),
            headers={key: ", ".join(request.headers.getlist(key)) for key in request.headers.keys()},
            host=request.url.hostname or request.headers.get("host", ""),
            path=request.url.path,
        )


async def _parse_body(request: Request) -> dict[str, Any] | None:
    if request.method in ("GET", "HEAD", "OPTIONS"):
        return None

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in _FORM_CONTENT_TYPES:
        form = await request.form()
        # Uploaded files are not language parameters
        return {key: value for key, value in form.items() if isinstance(value, str)}

    if content_type in _JSON_CONTENT_TYPES:
        if not await request.body():
            return None
        try:
            payload = await request.json()
        except ValueError:
            logger.debug("Ignoring malformed JSON body on %s", request.url.path)
            return None
        return payload if isinstance(payload, dict) else None

    return None
