from .proxy import (
    BODY_METHODS,
    ContentKind,
    ErrorEnvelope,
    GatewayResult,
    Outcome,
    ProxyRequest,
    ProxyResponse,
)

__all__ = [
    "BODY_METHODS",
    "ContentKind",
    "ErrorEnvelope",
    "GatewayResult",
    "Outcome",
    "ProxyRequest",
    "ProxyResponse",
]
