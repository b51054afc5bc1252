"""Wire-format DTOs of the credential endpoint.

Hey future me - the endpoint speaks camelCase JSON, we speak snake_case Python.
Pydantic aliases do the mapping; populate_by_name lets tests build them with
either spelling.

Success body:  {"accessToken", "refreshToken", "tokenType", "expiresIn"}
Error body:    {"message", "code", "details"?, "timestamp"?}  (best-effort!)
"""

from pydantic import BaseModel, ConfigDict, Field


class SessionTokens(BaseModel):
    """Successful login response body."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    access_token: str = Field(alias="accessToken", repr=False)
    # Servers may omit these or send null; TokenStore treats None as "not issued"
    refresh_token: str | None = Field(default=None, alias="refreshToken", repr=False)
    token_type: str | None = Field(default=None, alias="tokenType")
    expires_in: int = Field(default=0, alias="expiresIn")  # seconds

    @property
    def is_valid(self) -> bool:
        """True if the response actually carries an access token."""
        return bool(self.access_token and self.access_token.strip())


class ApiErrorBody(BaseModel):
    """Error response body - every field is optional, servers are sloppy."""

    model_config = ConfigDict(extra="ignore")

    message: str | None = None
    code: str | int | None = None
    details: str | None = None
    timestamp: str | None = None


__all__ = ["ApiErrorBody", "SessionTokens"]
