"""
Pydantic models for the ISH Bot relay API and chat client
"""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ChatRequest(BaseModel):
    """Incoming chat request from the client"""
    message: str
    lang: str
    session_id: Optional[str] = None

    @field_validator('message', 'lang')
    @classmethod
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator('session_id')
    @classmethod
    def blank_session_is_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class ChatResponse(BaseModel):
    """Successful chat response"""
    reply: str
    session_id: str
    status: str = "success"


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request"""
    error: str
    status: str = "error"


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str = "ISH Bot API"


class ExchangeMetadata(BaseModel):
    """Caller details stored alongside an exchange"""
    caller_address: Optional[str] = None
    caller_agent: str = "Unknown"


class ExchangeRecord(BaseModel):
    """One user message paired with the bot reply, as persisted"""
    session_id: str
    user_message: str
    bot_reply: str
    language: str
    created_at: datetime = Field(default_factory=utc_now)
    metadata: ExchangeMetadata = Field(default_factory=ExchangeMetadata)


class Origin(str, Enum):
    USER = "user"
    BOT = "bot"


class Message(BaseModel):
    """A single chat bubble. Frozen once created."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    content: str
    origin: Origin
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_user(cls, content: str) -> "Message":
        return cls(content=content, origin=Origin.USER)

    @classmethod
    def from_bot(cls, content: str) -> "Message":
        return cls(content=content, origin=Origin.BOT)
