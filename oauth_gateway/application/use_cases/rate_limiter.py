# oauth_gateway/application/use_cases/rate_limiter.py

"""
Per-client hourly request quota.

Each client owns a window that ends at ``request_limit_until``. Requests
made up to and including that instant count against ``request_limit``;
the first request after it opens a fresh window of one hour.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from oauth_gateway.application.ports.outbound import IClientStore
from oauth_gateway.domain.models.client_domain_model import Client, QuotaUpdate
from oauth_gateway.shared.utils.clock import ensure_utc, to_epoch, utcnow

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 3600


def evaluate_quota(client: Client, now: datetime, window_seconds: int = DEFAULT_WINDOW_SECONDS) -> QuotaUpdate:
    """
    Decide whether one more request fits in the client's window.

    Pure function: the returned QuotaUpdate describes what must be
    persisted when the request is admitted.
    """
    limit_until = ensure_utc(client.request_limit_until)
    if limit_until is not None and to_epoch(limit_until) < 0:
        limit_until = now

    current_total_request = 1
    is_limit_reached = False
    opens_window = False

    # A client without a window yet starts a new one
    if limit_until is not None and now <= limit_until:
        current_total_request = client.current_total_request + 1
        if current_total_request > client.request_limit:
            is_limit_reached = True
    else:
        limit_until = now + timedelta(seconds=window_seconds)
        opens_window = True

    return QuotaUpdate(
        is_limit_reached=is_limit_reached,
        current_total_request=current_total_request,
        request_limit_until=limit_until,
        last_request_at=now,
        opens_window=opens_window,
    )


def rate_limit_headers(client: Optional[Client], now: Optional[datetime] = None) -> Dict[str, str]:
    """
    X-Rate-Limit-* headers describing the client's window.

    Remaining and Reset are reported as computed, negative values included.
    """
    if client is None:
        return {}

    now = now or utcnow()
    limit_until = client.request_limit_until or now

    return {
        "X-Rate-Limit-Limit": str(client.request_limit),
        "X-Rate-Limit-Remaining": str(client.request_limit - client.current_total_request),
        "X-Rate-Limit-Reset": str(to_epoch(limit_until) - to_epoch(now)),
    }


class RateLimiter:
    """
    Admits or rejects requests against the client's quota and persists the
    new window state through the client store.
    """

    def __init__(
            self,
            client_store: IClientStore,
            window_seconds: int = DEFAULT_WINDOW_SECONDS,
            max_retries: int = 3,
            clock: Callable[[], datetime] = utcnow,
    ):
        self.client_store = client_store
        self.window_seconds = window_seconds
        self.max_retries = max_retries
        self.clock = clock

    async def check_and_consume(self, client: Optional[Client]) -> bool:
        """
        Count the current request for ``client``.

        Returns True when the limit is reached; nothing is persisted then.
        An unidentified client (None) is never limited. The store applies
        each update atomically, so contention only costs a retry and never
        turns into a rejection.
        """
        if client is None:
            return False

        for attempt in range(self.max_retries + 1):
            update = evaluate_quota(client, self.clock(), self.window_seconds)
            if update.is_limit_reached:
                logger.info(
                    f"Request limit reached for client {client.id}: "
                    f"{client.current_total_request}/{client.request_limit}"
                )
                return True

            stored = await self.client_store.save_quota(client, update)
            if stored is not None:
                _copy_quota(stored, client)
                return False

            # The stored window moved since the client was read: decide again on stored values
            logger.debug(f"Quota update conflict for client {client.id} (attempt {attempt + 1})")
            fresh = await self.client_store.reload_quota(client)
            if fresh is None:
                logger.warning(f"Client {client.id} disappeared while updating its quota")
                return False
            _copy_quota(fresh, client)

        logger.error(
            f"Quota update for client {client.id} still conflicting after "
            f"{self.max_retries + 1} attempts, admitting the request"
        )
        return False

    def headers_for(self, client: Optional[Client]) -> Dict[str, str]:
        return rate_limit_headers(client, self.clock())


def _copy_quota(source: Client, target: Client) -> None:
    target.request_limit = source.request_limit
    target.current_total_request = source.current_total_request
    target.request_limit_until = source.request_limit_until
    target.last_request_at = source.last_request_at
