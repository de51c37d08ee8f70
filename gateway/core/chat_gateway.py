# Role: Orchestrator for one /chat call. It glues together:
# request building, the upstream call, optional normalization, and the mapping of every failure to one
# ChatError shape + status code. The HTTP layer only turns the ChatTurnResult into a Response.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from gateway.config import LangflowSettings
from gateway.core.normalizer import extract_message, extract_session_id
from gateway.core.request_builder import build_run_request
from gateway.models.chat import ChatError, SimplifiedChatResponse
from gateway.tools.langflow_client import (
    BufferedReply,
    LangflowClient,
    StreamingReply,
    TransportFailed,
    UpstreamRejected,
)

logger = logging.getLogger(__name__)

EXTERNAL_API_ERROR = "External API error"
INTERNAL_SERVER_ERROR = "Internal server error"


@dataclass(frozen=True)
class ChatTurnResult:
    status_code: int
    payload: Any = None
    stream: Optional[StreamingReply] = None


class ChatGateway:
    def __init__(self, settings: LangflowSettings, client: Optional[LangflowClient] = None) -> None:
        # Key line: the client is injectable for testing/mocking.
        self.settings = settings
        self.client = client or LangflowClient(settings)

    def handle(self, message: str, chat_id: Optional[str] = None) -> ChatTurnResult:
        # 1) Build the upstream request (chat_id or the default session)
        # 2) Dispatch and branch on the tagged transport result
        # 3) Buffered + chat_id -> normalize; buffered without chat_id -> verbatim
        # 4) Any unexpected exception -> 500
        normalize = bool(chat_id)
        try:
            run_request = build_run_request(
                message,
                chat_id,
                default_session_id=self.settings.default_session_id,
            )
            result = self.client.send(run_request)

            if isinstance(result, StreamingReply):
                if normalize:
                    # Normalization is only defined for buffered replies; streams are relayed untouched.
                    logger.warning(
                        "Streaming reply for chatId=%s: relaying stream without normalization", chat_id
                    )
                return ChatTurnResult(status_code=200, stream=result)

            if isinstance(result, UpstreamRejected):
                return _error(
                    502,
                    ChatError(error=EXTERNAL_API_ERROR, message=result.reason or None, status=result.status_code),
                )

            if isinstance(result, TransportFailed):
                return _error(500, ChatError(error=INTERNAL_SERVER_ERROR, message=result.message))

            if isinstance(result, BufferedReply):
                if not normalize:
                    return ChatTurnResult(status_code=200, payload=result.payload)
                simplified = SimplifiedChatResponse(
                    message=extract_message(result.payload),
                    session_id=extract_session_id(result.payload),
                )
                return ChatTurnResult(status_code=200, payload=simplified.model_dump(exclude_none=True))

            raise TypeError(f"Unexpected transport result: {type(result).__name__}")

        except Exception as e:
            logger.exception("Chat endpoint error")
            return _error(500, ChatError(error=INTERNAL_SERVER_ERROR, message=str(e) or type(e).__name__))


def _error(status_code: int, error: ChatError) -> ChatTurnResult:
    return ChatTurnResult(status_code=status_code, payload=error.model_dump(exclude_none=True))
