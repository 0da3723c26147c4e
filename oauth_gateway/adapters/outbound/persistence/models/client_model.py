# oauth_gateway/adapters/outbound/persistence/models/client_model.py

"""
Client model for API access.

This module defines the models for applications or external systems
authorized to call the API, together with their registered redirect URIs.
"""

from sqlalchemy import Column, BigInteger, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from oauth_gateway.adapters.outbound.persistence.models.base_model import Base


class Client(Base):
    """
    A registered OAuth2 client and its hourly request quota.

    Attributes:
        id: Public client identifier
        secret: Hash of the client secret
        name: Display name
        request_limit: Requests allowed per window
        current_total_request: Requests counted in the current window
        request_limit_until: End of the current window
        last_request_at: Time of the last admitted request
        created_at: Creation date and time
        updated_at: Last update date and time
    """
    __tablename__ = "oauth_clients"

    id = Column(String(64), primary_key=True)
    secret = Column(String, nullable=False)
    name = Column(String(255), nullable=False)
    request_limit = Column(Integer, nullable=False, default=5000)
    current_total_request = Column(Integer, nullable=False, default=0)
    request_limit_until = Column(DateTime(timezone=True), nullable=True)
    last_request_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    endpoints = relationship("ClientEndpoint", back_populates="client", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, limit={self.request_limit})>"


class ClientEndpoint(Base):
    """Redirect URI registered for a client."""
    __tablename__ = "oauth_client_endpoints"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    client_id = Column(String(64), ForeignKey("oauth_clients.id", ondelete="CASCADE"), nullable=False, index=True)
    redirect_uri = Column(String(255), nullable=False)

    client = relationship("Client", back_populates="endpoints")
