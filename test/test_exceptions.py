"""
Tests for custom exception classes and the JSON error envelope
"""

import json

from fastapi import status

from language_resolver.exception_handlers import create_error_response, get_error_type, get_http_error_code
from language_resolver.exceptions import (
    ErrorCode,
    InvalidLanguageError,
    LanguageResolutionError,
    SiteNotFoundError,
)


class TestLanguageResolutionError:
    def test_defaults(self):
        exc = LanguageResolutionError("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.error_code == ErrorCode.LANGUAGE_RESOLUTION_FAILED
        assert exc.details == {}

    def test_with_details(self):
        exc = LanguageResolutionError("Test error", details={"key": "value"})
        assert exc.details["key"] == "value"


class TestInvalidLanguageError:
    def test_carries_locale(self):
        exc = InvalidLanguageError("xx")
        assert exc.locale == "xx"
        assert exc.message == 'Requested locale "xx" could not be found'
        assert exc.details == {"locale": "xx"}

    def test_is_client_error(self):
        exc = InvalidLanguageError("xx")
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.error_code == ErrorCode.LANGUAGE_INVALID_LOCALE
        assert isinstance(exc, LanguageResolutionError)


class TestSiteNotFoundError:
    def test_not_found(self):
        exc = SiteNotFoundError("other.org", "/de/")
        assert exc.status_code == status.HTTP_404_NOT_FOUND
        assert exc.error_code == ErrorCode.SITE_NOT_FOUND
        assert exc.details == {"host": "other.org", "path": "/de/"}
        assert "other.org/de/" in exc.message


class TestErrorResponse:
    def test_envelope(self):
        response = create_error_response(
            status_code=400,
            message="bad",
            error_code=ErrorCode.LANGUAGE_INVALID_LOCALE,
            details={"locale": "xx"},
            path="/api/v1/language",
        )
        body = json.loads(response.body)
        assert response.status_code == 400
        assert body == {
            "error": {
                "status_code": 400,
                "message": "bad",
                "type": "Bad Request",
                "error_code": "LANGUAGE_INVALID_LOCALE",
                "details": {"locale": "xx"},
                "path": "/api/v1/language",
            }
        }

    def test_optional_fields_omitted(self):
        body = json.loads(create_error_response(status_code=500, message="boom").body)
        assert set(body["error"]) == {"status_code", "message", "type"}

    def test_error_types(self):
        assert get_error_type(404) == "Not Found"
        assert get_error_type(418) == "Error"

    def test_http_error_codes(self):
        assert get_http_error_code(404) == ErrorCode.RESOURCE_NOT_FOUND.value
        assert get_http_error_code(418) == ErrorCode.UNKNOWN_ERROR.value
