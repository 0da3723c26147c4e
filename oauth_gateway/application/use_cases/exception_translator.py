# oauth_gateway/application/use_cases/exception_translator.py

"""
Translation of OAuth2 failures into HTTP status codes and JSON bodies.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from oauth_gateway.domain.models.results import ProtocolFailure
from oauth_gateway.domain.oauth_errors import (
    EXCEPTION_HTTP_STATUS_CODES,
    UNDEFINED_ERROR,
    OAuthError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Translation:
    status_code: int
    body: Dict[str, str]
    headers: Dict[str, str] = field(default_factory=dict)


class ExceptionTranslator:
    """
    Maps a closed set of OAuth2 error codes to HTTP responses.

    ``header_source`` supplies the issuance engine's own headers for an
    error code (WWW-Authenticate and the like).
    """

    def __init__(self, header_source: Optional[Callable[[str], Dict[str, str]]] = None):
        self.header_source = header_source

    def translate(self, error: str, description: str) -> Translation:
        try:
            code = OAuthError(error)
        except ValueError:
            logger.warning(f"Unrecognized OAuth2 error code '{error}': {description}")
            return self.undefined(description)

        headers = dict(self.header_source(code.value)) if self.header_source else {}
        return Translation(
            status_code=EXCEPTION_HTTP_STATUS_CODES[code],
            body={"message": code.value, "description": description},
            headers=headers,
        )

    def translate_failure(self, failure: ProtocolFailure) -> Translation:
        return self.translate(failure.error, failure.description)

    @staticmethod
    def undefined(description: str) -> Translation:
        """Anything that is not a recognized protocol error."""
        return Translation(
            status_code=500,
            body={"message": UNDEFINED_ERROR, "description": description},
        )
