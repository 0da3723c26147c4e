# oauth_gateway/application/dtos/client_dto.py

"""
Schemas for client data.

Pydantic schemas used to serialize the public view of an API client,
without credentials.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ClientBase(BaseModel):
    """
    Base schema for client data.
    """
    id: str = Field(..., description="Unique client identifier")
    name: Optional[str] = Field(None, description="Display name of the client")


class ClientOutput(ClientBase):
    """
    Schema for returning client data, quota state included.
    """
    request_limit: int = Field(..., description="Requests allowed per window")
    current_total_request: int = Field(..., description="Requests counted in the current window")
    request_limit_until: Optional[datetime] = Field(None, description="End of the current window (UTC)")
    last_request_at: Optional[datetime] = Field(None, description="Time of the last admitted request (UTC)")

    model_config = ConfigDict(from_attributes=True)
