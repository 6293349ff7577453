"""
Content-type classification
Maps a Content-Type header value to the body handling strategy
"""

from typing import Optional, Sequence, Tuple

from gateway_service.models.proxy import ContentKind

ContentRule = Tuple[str, ContentKind]

# Inbound bodies only distinguish binary uploads (config imports) from text
REQUEST_BODY_RULES: Sequence[ContentRule] = (
    ("gzip", ContentKind.BINARY),
    ("octet-stream", ContentKind.BINARY),
)

# Evaluated in order; first match wins
RESPONSE_BODY_RULES: Sequence[ContentRule] = (
    ("application/json", ContentKind.JSON),
    ("application/gzip", ContentKind.BINARY),
    ("application/octet-stream", ContentKind.BINARY),
)


def classify_content_type(
    content_type: Optional[str],
    rules: Sequence[ContentRule] = RESPONSE_BODY_RULES,
    default: ContentKind = ContentKind.TEXT,
) -> ContentKind:
    """
    Classify a content-type string against an ordered rule table

    Args:
        content_type: Raw header value, may be None or empty
        rules: Ordered (needle, kind) pairs matched as case-insensitive substrings
        default: Kind returned when nothing matches

    Returns:
        The ContentKind of the first matching rule
    """
    if not content_type:
        return default

    value = content_type.lower()
    for needle, kind in rules:
        if needle in value:
            return kind
    return default


def classify_request_body(content_type: Optional[str]) -> ContentKind:
    """Classify an inbound request body"""
    return classify_content_type(content_type, REQUEST_BODY_RULES)


def classify_response_body(content_type: Optional[str]) -> ContentKind:
    """Classify an upstream response body"""
    return classify_content_type(content_type, RESPONSE_BODY_RULES)
