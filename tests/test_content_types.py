"""
Unit tests for content-type classification
"""

import pytest

from gateway_service.models.proxy import ContentKind
from gateway_service.utils.content_types import (
    classify_content_type,
    classify_request_body,
    classify_response_body,
)


class TestResponseClassification:
    """Upstream response bodies"""

    @pytest.mark.parametrize("content_type", [
        "application/json",
        "application/json; charset=utf-8",
        "Application/JSON",
    ])
    def test_json(self, content_type):
        assert classify_response_body(content_type) == ContentKind.JSON

    @pytest.mark.parametrize("content_type", [
        "application/gzip",
        "application/octet-stream",
        "application/octet-stream; name=config.tar",
    ])
    def test_binary(self, content_type):
        assert classify_response_body(content_type) == ContentKind.BINARY

    @pytest.mark.parametrize("content_type", [
        None,
        "",
        "text/plain",
        "text/html; charset=utf-8",
        "application/x-yaml",
        "application/x-gzip",
    ])
    def test_text_fallback(self, content_type):
        assert classify_response_body(content_type) == ContentKind.TEXT

    def test_json_rule_wins_over_later_rules(self):
        """First matching rule decides"""
        assert classify_response_body("application/json, application/octet-stream") == ContentKind.JSON


class TestRequestClassification:
    """Inbound request bodies"""

    @pytest.mark.parametrize("content_type", [
        "application/gzip",
        "application/x-gzip",
        "application/octet-stream",
        "binary/octet-stream",
    ])
    def test_binary_uploads(self, content_type):
        assert classify_request_body(content_type) == ContentKind.BINARY

    @pytest.mark.parametrize("content_type", [
        None,
        "application/json",
        "text/plain",
        "application/x-www-form-urlencoded",
    ])
    def test_everything_else_is_text(self, content_type):
        assert classify_request_body(content_type) == ContentKind.TEXT


def test_custom_rule_table():
    """Classification works with any ordered rule table"""
    rules = (("csv", ContentKind.BINARY),)
    assert classify_content_type("text/csv", rules) == ContentKind.BINARY
    assert classify_content_type("text/plain", rules, default=ContentKind.JSON) == ContentKind.JSON
