"""Pydantic schemas for request/response validation"""
import re
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, EmailStr, Field, field_validator

from panel_api.db.models.user import User
from panel_api.utils.exceptions import ViewValidationError

T = TypeVar("T")

PRINTABLE_ASCII = re.compile(r"^[\x20-\x7e]+$")


class UserViewModel(BaseModel):
    """
    Request body for creating or updating a user.

    Every field is optional at the schema level; which ones are required
    depends on the operation and is decided by `valid()`.
    """
    username: Optional[str] = Field(None, description="Login name", examples=["jdoe"])
    email: Optional[EmailStr] = Field(None, description="Contact email", examples=["jdoe@example.com"])
    password: Optional[str] = Field(None, description="Plain-text password, hashed before storage")

    @field_validator("username", "password", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        if isinstance(v, str) and v == "":
            return None
        return v

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def valid(self, allow_empty: bool) -> None:
        """
        Check the view model for a create (allow_empty=False) or an
        update (allow_empty=True).

        Raises:
            ViewValidationError: when a required field is missing or a
                present field is malformed
        """
        if not allow_empty and not self.username:
            raise ViewValidationError("username is required")

        if self.username and not PRINTABLE_ASCII.match(self.username):
            raise ViewValidationError("username must be printable ascii characters")

        if not allow_empty and not self.email:
            raise ViewValidationError("email is required")

    def copy_to_model(self, user: User) -> None:
        """Copy the fields that are set onto `user`, leaving the rest untouched"""
        if self.username:
            user.username = self.username
        if self.email:
            user.email = str(self.email)
        if self.password:
            user.set_password(self.password)


class UserView(BaseModel):
    """Public representation of a user. Never carries password material."""
    id: int = Field(..., description="User id")
    username: str = Field(..., description="Login name")
    email: str = Field(..., description="Contact email")

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(id=user.id, username=user.username, email=user.email)

    @classmethod
    def from_users(cls, users: List[User]) -> List["UserView"]:
        return [cls.from_user(user) for user in users]


class Paging(BaseModel):
    """Pagination metadata for list responses"""
    page: int = Field(..., ge=1, description="Current page number")
    page_size: int = Field(..., ge=1, description="Effective page size")
    max_size: int = Field(..., description="Largest page size the server accepts")
    total: int = Field(..., ge=0, description="Total number of matching records")


class Metadata(BaseModel):
    paging: Optional[Paging] = None


class ErrorBody(BaseModel):
    """Error details carried by a failed response"""
    code: str = Field(..., description="Machine-readable error code")
    msg: str = Field(..., description="Human-readable error message")
    detail: Optional[Any] = Field(None, description="Additional context")


class Envelope(BaseModel, Generic[T]):
    """Shared response format for every endpoint"""
    success: bool = Field(True, description="Whether the request succeeded")
    data: Optional[T] = None
    metadata: Optional[Metadata] = None
    error: Optional[ErrorBody] = None


class HealthCheck(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    timestamp: str = Field(..., description="Current timestamp (ISO 8601)")
    database: bool = Field(..., description="Whether the database is reachable")
    version: str = Field(..., description="API version")


class TokenRequest(BaseModel):
    """Access token request"""
    username: str = Field(..., min_length=1, examples=["admin"])
    password: str = Field(..., min_length=1, examples=["changeme"])


class TokenResponse(BaseModel):
    """Access token response"""
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")
    scopes: List[str] = Field(default_factory=list, description="Scopes granted to the token")
