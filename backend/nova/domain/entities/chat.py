from pydantic import BaseModel, Field, field_validator
from typing import Literal, Optional
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=utcnow)

    class Config:
        frozen = True

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps from clients are treated as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ChatSession(BaseModel):
    session_id: str = Field(alias="sessionId")
    messages: list[ChatMessage] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    @property
    def updated_at(self) -> Optional[datetime]:
        return self.messages[-1].timestamp if self.messages else None

    def append(self, message: ChatMessage) -> None:
        """Add a turn to the end of the session, keeping creation order."""
        last = self.updated_at
        if last is not None and message.timestamp < last:
            raise ValueError(
                f"Message at {message.timestamp.isoformat()} is older than "
                f"the last turn of session {self.session_id}"
            )
        self.messages.append(message)


class ChatRequest(BaseModel):
    message: str = ""
    chat_history: list[ChatMessage] = Field(default_factory=list, alias="chatHistory")
    stream: bool = False
    session_id: Optional[str] = Field(default=None, alias="sessionId")

    class Config:
        populate_by_name = True

    @field_validator("chat_history", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return [] if value is None else value


class ChatReply(BaseModel):
    response: str
    timestamp: datetime = Field(default_factory=utcnow)


class ChatErrorReply(BaseModel):
    error: str
    response: str


class SessionSummary(BaseModel):
    session_id: str = Field(alias="sessionId")
    title: str
    message_count: int = Field(alias="messageCount")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    class Config:
        populate_by_name = True

    @classmethod
    def from_session(cls, session: ChatSession, title_length: int = 40) -> "SessionSummary":
        if session.messages:
            first = session.messages[0].content
            title = first if len(first) <= title_length else first[:title_length] + "..."
        else:
            title = "New chat"
        return cls(
            session_id=session.session_id,
            title=title,
            message_count=len(session.messages),
            updated_at=session.updated_at,
        )
