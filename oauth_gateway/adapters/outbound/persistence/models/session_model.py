# oauth_gateway/adapters/outbound/persistence/models/session_model.py

"""
Models for OAuth2 sessions, the access tokens issued inside them and the
scopes granted to each token.
"""

from sqlalchemy import Column, BigInteger, Integer, String, DateTime, ForeignKey, Table, Text
from sqlalchemy.orm import relationship

from oauth_gateway.adapters.outbound.persistence.models.base_model import Base

_id_type = BigInteger().with_variant(Integer, "sqlite")

access_token_scopes = Table(
    "oauth_session_token_scopes",
    Base.metadata,
    Column("access_token_id", _id_type, ForeignKey("oauth_session_access_tokens.id", ondelete="CASCADE"),
           primary_key=True),
    Column("scope_id", _id_type, ForeignKey("oauth_scopes.id", ondelete="CASCADE"), primary_key=True),
)


class Scope(Base):
    """A named permission that access tokens may carry."""
    __tablename__ = "oauth_scopes"

    id = Column(_id_type, primary_key=True, autoincrement=True)
    scope = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Scope(scope={self.scope})>"


class Session(Base):
    """
    An authorization session between an owner and a client.

    For the client credentials grant the owner is the client itself.
    """
    __tablename__ = "oauth_sessions"

    id = Column(_id_type, primary_key=True, autoincrement=True)
    client_id = Column(String(64), ForeignKey("oauth_clients.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_type = Column(String(32), nullable=False, default="client")
    owner_id = Column(String(255), nullable=False)

    access_tokens = relationship("AccessToken", back_populates="session", cascade="all, delete-orphan")


class AccessToken(Base):
    """Access token issued within a session."""
    __tablename__ = "oauth_session_access_tokens"

    id = Column(_id_type, primary_key=True, autoincrement=True)
    session_id = Column(_id_type, ForeignKey("oauth_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    access_token = Column(String(1024), unique=True, nullable=False, index=True)
    access_token_expires = Column(DateTime(timezone=True), nullable=False)

    session = relationship("Session", back_populates="access_tokens")
    scopes = relationship("Scope", secondary=access_token_scopes)
