from pydantic import BaseModel, Field, StrictStr
from typing import Any, List, Literal, Optional

from git_commit_ai._data.claude import (
    ANTHROPIC_VERSION,
    CONNECT_TIMEOUT,
    DEFAULT_MODEL,
    MAX_RESPONSE_BYTES,
    MAX_TOKENS,
    MESSAGES_ENDPOINT,
    REQUEST_TIMEOUT,
    TEMPERATURE,
)


class ClientSettings(BaseModel):
    endpoint: str = MESSAGES_ENDPOINT
    model: str = DEFAULT_MODEL
    max_tokens: int = MAX_TOKENS
    temperature: float = TEMPERATURE
    anthropic_version: str = ANTHROPIC_VERSION
    connect_timeout: float = Field(CONNECT_TIMEOUT, gt=0)
    total_timeout: float = Field(REQUEST_TIMEOUT, gt=0)
    max_response_bytes: int = Field(MAX_RESPONSE_BYTES, gt=0)


class Message(BaseModel):
    role: Literal["user"] = "user"
    content: str


class RequestPayload(BaseModel):
    model: str
    max_tokens: int
    temperature: float
    messages: List[Message]


class RawResponse(BaseModel):
    status: int
    body: bytes
    elapsed: float = 0.0


class ContentBlock(BaseModel):
    text: StrictStr


class ApiResponse(BaseModel):
    """Subset of the Messages API reply the client relies on."""

    id: Optional[Any] = None
    model: Optional[Any] = None
    stop_reason: Optional[Any] = None
    usage: Optional[Any] = None
    content: List[Any] = Field(..., min_length=1)


class CommitMessage(BaseModel):
    title: str
    description: str

    def to_markdown(self) -> str:
        return f"# {self.title}\n\n{self.description}"
