"""
Proxy Models
Per-request data carried through the gateway handlers
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

from pydantic import BaseModel, Field

# Methods whose inbound body is forwarded to the backend
BODY_METHODS = ("POST", "PUT", "DELETE", "PATCH")

# RFC 3986 pchar delimiters that may stay unescaped inside a path segment
PATH_SAFE_CHARS = "!$&'()*+,;=:@"

# Headers for plain-text bodies relayed from external resources
TEXT_PLAIN_HEADERS = {
    "Content-Type": "text/plain; charset=utf-8",
    "Cache-Control": "no-store",
}


class ContentKind(str, Enum):
    """Body handling strategy derived from a content-type"""
    JSON = "json"
    BINARY = "binary"
    TEXT = "text"


class Outcome(str, Enum):
    """Terminal outcome of a handler invocation"""
    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    UPSTREAM_ERROR = "upstream_error"
    TIMEOUT_ERROR = "timeout_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class ProxyRequest:
    """Inbound request as seen by the forwarder"""
    method: str
    path_segments: Tuple[str, ...] = ()
    query: str = ""
    content_type: Optional[str] = None
    body: Optional[bytes] = None

    @property
    def api_path(self) -> str:
        """Path below /api, with leading slash, or empty for the bare prefix"""
        if not self.path_segments:
            return ""
        return "/" + "/".join(quote(segment, safe=PATH_SAFE_CHARS) for segment in self.path_segments)


@dataclass(frozen=True)
class ProxyResponse:
    """Response to emit back to the browser"""
    status: int
    kind: ContentKind
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    """Error shape returned for locally detected failures"""
    message: str = Field(..., description="Human readable error message")
    details: Optional[str] = Field(None, description="Exception rendering, if any")
    status: int = Field(500, ge=400, le=599, description="HTTP status code")

    def to_body(self) -> Dict[str, str]:
        """Render the JSON body sent on the wire"""
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


@dataclass(frozen=True)
class GatewayResult:
    """
    Explicit result of a forward/fetch operation.

    Exactly one of ``response`` (success or relayed upstream failure) and
    ``error`` (locally produced envelope) is set.
    """
    outcome: Outcome
    response: Optional[ProxyResponse] = None
    error: Optional[ErrorEnvelope] = None

    @property
    def status(self) -> int:
        if self.error is not None:
            return self.error.status
        return self.response.status

    @classmethod
    def success(cls, response: ProxyResponse) -> "GatewayResult":
        return cls(outcome=Outcome.SUCCESS, response=response)

    @classmethod
    def relayed(cls, response: ProxyResponse) -> "GatewayResult":
        """Upstream signalled failure; its own status and body go back unchanged"""
        return cls(outcome=Outcome.UPSTREAM_ERROR, response=response)

    @classmethod
    def failure(
        cls,
        outcome: Outcome,
        status: int,
        message: str,
        details: Optional[str] = None,
    ) -> "GatewayResult":
        return cls(
            outcome=outcome,
            error=ErrorEnvelope(message=message, details=details, status=status),
        )
