# oauth_gateway/adapters/outbound/security/auth_client_manager.py (async version)

import uuid
from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple

from jose import jwt, JWTError
from passlib.context import CryptContext

from oauth_gateway.adapters.configuration.config import settings
from oauth_gateway.shared.utils.clock import utcnow

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
DEFAULT_EXPIRES_SECONDS = settings.ACCESS_TOKEN_EXPIRE_SECONDS


class ClientAuthManager:
    """
    Secret hashing and access-token signing for OAuth2 clients.
    """

    crypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    @classmethod
    async def create_access_token(
            cls,
            client_id: str,
            scopes: Iterable[str] = (),
            expires_delta: Optional[timedelta] = None,
            issued_at: Optional[datetime] = None,
    ) -> Tuple[str, datetime]:
        """
        Create a signed access token for the client.

        Returns the token and its expiry time.
        """
        if expires_delta is None:
            expires_delta = timedelta(seconds=DEFAULT_EXPIRES_SECONDS)

        issued_at = issued_at or utcnow()
        expire = issued_at + expires_delta
        payload = {
            "sub": str(client_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
            "jti": str(uuid.uuid4()),
            "scope": " ".join(scopes),
            "type": "access_token",
        }

        return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM), expire

    @classmethod
    async def verify_access_token(cls, token: str) -> Optional[dict]:
        """
        Decode and validate an access token.

        Returns the payload, or None when the signature, expiry or type is wrong.
        """
        try:
            payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        except JWTError:
            return None
        if payload.get("type") != "access_token":
            return None
        return payload

    @classmethod
    async def hash_password(cls, password: str) -> str:
        """
        Generate secure secret hash for storage in the database.
        """
        return cls.crypt_context.hash(password)

    @classmethod
    async def verify_password(cls, plain_password: str, hashed_password: str) -> bool:
        """
        Compare plain text secret with stored hash.
        """
        try:
            return cls.crypt_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # Unrecognizable stored hash, or a secret that is not text
            return False
