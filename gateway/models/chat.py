# Role: Caller-facing schemas for the /chat and health endpoints. Pydantic validates the inbound body
# (non-empty "msg") before any gateway logic runs, and the same models feed the OpenAPI document.

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {"msg": "Hello, how are you?"}},
    )

    msg: str = Field(..., min_length=1, description="The message to send to the chat API")


class ChatQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    chatId: Optional[str] = Field(
        default=None,
        description=(
            "Optional chat session identifier. When provided, it is used as the session_id for the "
            "Langflow API and the response returns only the latest message text instead of the full response"
        ),
        examples=["user_123"],
    )


class SimplifiedChatResponse(BaseModel):
    message: str = Field(..., description="The latest message text from the AI assistant")
    session_id: Optional[str] = Field(default=None, description="Session ID reported by the upstream flow")


class ChatError(BaseModel):
    error: str = Field(..., examples=['Missing or invalid "msg" field in request body'])
    message: Optional[str] = Field(default=None, description="Detailed error message")
    status: Optional[int] = Field(default=None, description="HTTP status code from external API")


class HealthResponse(BaseModel):
    message: str = Field(..., examples=["Hello Hono!"])
