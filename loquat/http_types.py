"""HTTP methods, status codes, requests, responses and web service settings."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Any


class HttpMethod(Enum):
    """HTTP request methods."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, method: str) -> HttpMethod | None:
        """Parse a method name in any letter case; ``None`` if it is not known."""
        try:
            return cls(method.upper())
        except ValueError:
            return None


class HttpStatus(IntEnum):
    """HTTP status codes."""

    CONTINUE = 100
    SWITCHING_PROTOCOLS = 101
    PROCESSING = 102
    EARLY_HINTS = 103

    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NON_AUTHORITATIVE_INFORMATION = 203
    NO_CONTENT = 204
    RESET_CONTENT = 205
    PARTIAL_CONTENT = 206

    MULTIPLE_CHOICES = 300
    MOVED_PERMANENTLY = 301
    FOUND = 302
    SEE_OTHER = 303
    NOT_MODIFIED = 304
    USE_PROXY = 305
    TEMPORARY_REDIRECT = 307
    PERMANENT_REDIRECT = 308

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    PAYMENT_REQUIRED = 402
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    NOT_ACCEPTABLE = 406
    PROXY_AUTHENTICATION_REQUIRED = 407
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    GONE = 410
    LENGTH_REQUIRED = 411
    PRECONDITION_FAILED = 412
    PAYLOAD_TOO_LARGE = 413
    URI_TOO_LONG = 414
    UNSUPPORTED_MEDIA_TYPE = 415
    RANGE_NOT_SATISFIABLE = 416
    EXPECTATION_FAILED = 417
    IM_A_TEAPOT = 418
    MISDIRECTED_REQUEST = 421
    UNPROCESSABLE_ENTITY = 422
    LOCKED = 423
    FAILED_DEPENDENCY = 424
    TOO_EARLY = 425
    UPGRADE_REQUIRED = 426
    PRECONDITION_REQUIRED = 428
    TOO_MANY_REQUESTS = 429
    REQUEST_HEADER_FIELDS_TOO_LARGE = 431
    UNAVAILABLE_FOR_LEGAL_REASONS = 451

    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504
    HTTP_VERSION_NOT_SUPPORTED = 505
    VARIANT_ALSO_NEGOTIATES = 506
    INSUFFICIENT_STORAGE = 507
    LOOP_DETECTED = 508
    NOT_EXTENDED = 510
    NETWORK_AUTHENTICATION_REQUIRED = 511

    def reason_phrase(self) -> str:
        """The standard reason phrase for this status."""
        return _REASON_PHRASES[self]

    def is_success(self) -> bool:
        return 200 <= self < 300

    def is_redirect(self) -> bool:
        return 300 <= self < 400

    def is_client_error(self) -> bool:
        return 400 <= self < 500

    def is_server_error(self) -> bool:
        return 500 <= self < 600

    def is_error(self) -> bool:
        return self.is_client_error() or self.is_server_error()


_SPECIAL_PHRASES = {
    HttpStatus.OK: "OK",
    HttpStatus.NON_AUTHORITATIVE_INFORMATION: "Non-Authoritative Information",
    HttpStatus.URI_TOO_LONG: "URI Too Long",
    HttpStatus.IM_A_TEAPOT: "I'm a teapot",
    HttpStatus.HTTP_VERSION_NOT_SUPPORTED: "HTTP Version Not Supported",
}


def _phrase_from_name(name: str) -> str:
    small = {"for", "not"}
    words = name.lower().split("_")
    return " ".join(
        w if (i > 0 and w == "for") else ("Not" if w == "not" else w.capitalize())
        for i, w in enumerate(words)
    ) if small else ""


_REASON_PHRASES = {
    status: _SPECIAL_PHRASES.get(status, _phrase_from_name(status.name))
    for status in HttpStatus
}
_REASON_PHRASES[HttpStatus.UNAVAILABLE_FOR_LEGAL_REASONS] = "Unavailable For Legal Reasons"


@dataclass(frozen=True)
class Request:
    """An HTTP request."""

    method: HttpMethod
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    query: dict[str, str] = field(default_factory=dict)

    def with_header(self, key: str, value: str) -> Request:
        return replace(self, headers={**self.headers, key: value})

    def with_body(self, body: bytes) -> Request:
        return replace(self, body=bytes(body))

    def with_query(self, key: str, value: str) -> Request:
        return replace(self, query={**self.query, key: value})


@dataclass(frozen=True)
class Response:
    """An HTTP response."""

    status: HttpStatus
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def with_header(self, key: str, value: str) -> Response:
        return replace(self, headers={**self.headers, key: value})

    def with_body(self, body: bytes) -> Response:
        return replace(self, body=bytes(body))

    @classmethod
    def json(cls, status: HttpStatus, data: Any) -> Response:
        """A JSON response; raises ValueError if ``data`` cannot be serialised."""
        try:
            encoded = json.dumps(data, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Failed to serialize JSON: {exc}") from exc
        return cls(status).with_header("Content-Type", "application/json").with_body(encoded)

    @classmethod
    def text(cls, status: HttpStatus, text: str) -> Response:
        return (
            cls(status)
            .with_header("Content-Type", "text/plain; charset=utf-8")
            .with_body(text.encode("utf-8"))
        )

    @classmethod
    def html(cls, status: HttpStatus, html: str) -> Response:
        return (
            cls(status)
            .with_header("Content-Type", "text/html; charset=utf-8")
            .with_body(html.encode("utf-8"))
        )


@dataclass(frozen=True)
class WebServiceConfig:
    """Settings of the web service."""

    host: str = "127.0.0.1"
    port: int = 8080
    https: bool = False
    request_timeout: int = 30
    max_request_size: int = 10 * 1024 * 1024
    enable_cors: bool = True
    cors_origins: tuple[str, ...] = ("*",)

    def address(self) -> str:
        """The ``host:port`` the service listens on."""
        return f"{self.host}:{self.port}"