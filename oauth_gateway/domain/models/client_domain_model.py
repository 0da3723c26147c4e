# oauth_gateway/domain/models/client_domain_model.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Client:
    """Domain model for a registered API client and its quota state."""
    id: str  # Public identifier
    secret: Optional[str] = None  # Stored (hashed) secret, absent for public clients
    name: Optional[str] = None
    request_limit: int = 0
    current_total_request: int = 0
    request_limit_until: Optional[datetime] = None
    last_request_at: Optional[datetime] = None


@dataclass(frozen=True)
class QuotaUpdate:
    """Outcome of evaluating one request against a client's rate window."""
    is_limit_reached: bool
    current_total_request: int
    request_limit_until: datetime
    last_request_at: datetime
    opens_window: bool = False  # True when the request starts a new window
