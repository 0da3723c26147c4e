# oauth_gateway/domain/models/results.py

"""
Result values exchanged between the gateway and its OAuth2 collaborators.

Protocol errors travel as ordinary return values: an issuance engine answers
with either ``Issued`` or ``ProtocolFailure``, the token guard with either
``None`` or ``Forbidden``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Union


@dataclass(frozen=True)
class Issued:
    """Successful grant; ``payload`` is serialized as the response body."""
    payload: Dict[str, Any]


@dataclass(frozen=True)
class ProtocolFailure:
    """An OAuth2 error code plus the human readable description."""
    error: str
    description: str


IssueResult = Union[Issued, ProtocolFailure]


@dataclass(frozen=True)
class Forbidden:
    """Access token missing, invalid, expired or lacking a scope."""
    description: str
    message: str = "forbidden"


@dataclass(frozen=True)
class TokenCheck:
    """Answer of a resource server about the token on the current request."""
    valid: bool
    message: Optional[str] = None
    client_id: Optional[str] = None
    scopes: FrozenSet[str] = field(default_factory=frozenset)
