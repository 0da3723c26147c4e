# tests/test_exception_translator.py

from oauth_gateway.application.use_cases.exception_translator import ExceptionTranslator
from oauth_gateway.domain.models.results import ProtocolFailure
from oauth_gateway.domain.oauth_errors import EXCEPTION_HTTP_STATUS_CODES, OAuthError


def test_known_error_is_mapped():
    translation = ExceptionTranslator().translate("invalid_grant", "The grant is invalid")

    assert translation.status_code == 400
    assert translation.body == {"message": "invalid_grant", "description": "The grant is invalid"}
    assert translation.headers == {}


def test_unknown_error_is_undefined():
    translation = ExceptionTranslator().translate("something_else", "boom")

    assert translation.status_code == 500
    assert translation.body == {"message": "undefined_error", "description": "boom"}


def test_engine_headers_are_attached():
    def headers(error):
        return {"WWW-Authenticate": 'Basic realm="OAuth"'} if error == "invalid_client" else {}

    translation = ExceptionTranslator(headers).translate_failure(
        ProtocolFailure(error="invalid_client", description="Client authentication failed")
    )

    assert translation.status_code == 401
    assert translation.headers == {"WWW-Authenticate": 'Basic realm="OAuth"'}


def test_status_codes():
    assert EXCEPTION_HTTP_STATUS_CODES[OAuthError.UNSUPPORTED_GRANT_TYPE] == 501
    assert EXCEPTION_HTTP_STATUS_CODES[OAuthError.ACCESS_DENIED] == 401
    assert EXCEPTION_HTTP_STATUS_CODES[OAuthError.SERVER_ERROR] == 500
    # 'temporarily_unavailable' is answered with 400, not 503
    assert EXCEPTION_HTTP_STATUS_CODES[OAuthError.TEMPORARILY_UNAVAILABLE] == 400
    assert set(EXCEPTION_HTTP_STATUS_CODES) == set(OAuthError)
