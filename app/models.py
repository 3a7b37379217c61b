"""
Pydantic data models for API request/response and error schema.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Single error detail (e.g. field-level)."""

    code: str = Field(..., description="Error code or field name")
    message: str = Field(..., description="Human-readable message")


class ErrorResponse(BaseModel):
    """Structured error response for 4xx/5xx."""

    code: str = Field(..., description="Application error code")
    message: str = Field(..., description="Human-readable summary")
    details: Optional[List[ErrorDetail]] = Field(None, description="Optional per-field or extra details")


# ----- Auth -----

USERNAME_MAX_LENGTH = 255


class CredentialsRequest(BaseModel):
    """Body for login. Unconstrained so every mismatch ends up as invalid credentials."""

    username: str = ""
    password: str = ""


class RegisterRequest(BaseModel):
    """Body for register. Blank fields and password length are checked by AuthService."""

    username: str = Field("", max_length=USERNAME_MAX_LENGTH)
    password: str = ""


class UserInfo(BaseModel):
    """Public user info (no secrets)."""

    id: int
    username: str


class AuthResponse(BaseModel):
    message: str
    user: UserInfo


class MessageResponse(BaseModel):
    message: str


# ----- Chat -----

# Max lengths for validation and docs (do not log full message body)
MESSAGE_MAX_LENGTH = 32_000


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    created_at: Optional[str] = None


class SubmitRequest(BaseModel):
    """Submit a message. thread_id absent or 0 creates a new thread."""

    thread_id: Optional[int] = Field(None, ge=0, description="Existing thread id; omit or 0 to start a new thread")
    content: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH, description="User message")


class ThreadMessagesResponse(BaseModel):
    thread_id: int
    messages: List[ChatMessage]


class ThreadSummary(BaseModel):
    id: int
    title: str = ""
    message_count: int
    updated_at: Optional[str] = None


class ThreadListResponse(BaseModel):
    """Paginated list of threads."""

    items: List[ThreadSummary] = Field(..., description="Threads for this page")
    total: int = Field(..., ge=0, description="Total number of threads")
