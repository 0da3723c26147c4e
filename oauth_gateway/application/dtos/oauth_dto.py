# oauth_gateway/application/dtos/oauth_dto.py

from pydantic import BaseModel, Field


class AccessTokenResponse(BaseModel):
    access_token: str = Field(..., description="Signed access token")
    token_type: str = Field("Bearer", description="Token type")
    expires: int = Field(..., description="Expiry as seconds since the epoch")
    expires_in: int = Field(..., description="Lifetime in seconds")
    scope: str = Field("", description="Granted scopes, space separated")


class ErrorResponse(BaseModel):
    """Body of every error answer: an error identifier and its description."""
    message: str = Field(..., description="Error identifier, e.g. invalid_client or rate_limit_exceeded")
    description: str = Field(..., description="Human readable explanation")
