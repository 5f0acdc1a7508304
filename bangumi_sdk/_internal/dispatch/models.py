"""Pydantic models for the transport dispatcher."""

from enum import StrEnum
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, field_validator

from bangumi_sdk._internal.http import DEFAULT_USER_AGENT

# =============================================================================
# Constants
# =============================================================================

CONTENT_TYPE = "application/json"
BODY_STATUSES = frozenset({200})
SUCCESS_STATUSES = frozenset({200, 204})


class HttpMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


# =============================================================================
# Credentials
# =============================================================================


class Credentials(BaseModel):
    """Authentication and identification sent with every request.

    Frozen: a client holds one snapshot for its lifetime. To change the
    token, derive a new client instead of mutating this one.

    Fields:
        token: Bangumi access token, sent as a Bearer token (may be empty)
        user_agent: Value of the User-Agent header
    """

    model_config = ConfigDict(frozen=True)

    token: str = ""
    user_agent: str = DEFAULT_USER_AGENT

    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": CONTENT_TYPE,
            "Authorization": f"Bearer {self.token}",
            "User-Agent": self.user_agent,
        }


# =============================================================================
# Request Descriptor
# =============================================================================


class RequestDescriptor(BaseModel):
    """A single request as shaped by the endpoint layer.

    Required fields:
        method: HTTP method
        url: Absolute, percent-encoded URL

    Optional fields:
        body: Pre-encoded payload forwarded verbatim (None means no entity body)
    """

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    url: str
    body: bytes | None = None

    @field_validator("method", mode="before")
    @classmethod
    def method_upper(cls, v: object) -> object:
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("url")
    @classmethod
    def url_absolute(cls, v: str) -> str:
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError("url must be an absolute http(s) URL")
        return v

    @field_validator("body", mode="before")
    @classmethod
    def body_bytes(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.encode("utf-8")
        if not v:
            return None
        return v
