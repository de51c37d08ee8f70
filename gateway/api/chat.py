# Role: Thin HTTP adapter for the chat endpoint. Validates the request shape and delegates the whole call
# to ChatGateway (business logic lives in core, not in the API layer); only turns the result into a Response.

from typing import Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from gateway.api.deps import get_chat_gateway
from gateway.core.chat_gateway import ChatGateway, ChatTurnResult
from gateway.models.chat import ChatError, ChatQuery, ChatRequest, SimplifiedChatResponse
from gateway.models.langflow import LangflowResponse

router = APIRouter(tags=["Chat"])

_CHAT_RESPONSES = {
    200: {
        "model": Union[LangflowResponse, SimplifiedChatResponse],
        "description": (
            "Full Langflow response (no chatId), simplified message (chatId given), "
            "or the upstream stream relayed as-is"
        ),
        "content": {"text/event-stream": {}},
    },
    400: {"model": ChatError, "description": "Bad request - invalid or missing message"},
    500: {"model": ChatError, "description": "Internal server error"},
    502: {"model": ChatError, "description": "Bad gateway - external API error"},
}


def to_response(result: ChatTurnResult) -> Response:
    if result.stream is not None:
        stream = result.stream
        # Key line: the upstream is closed once the relay finishes or the client goes away.
        return StreamingResponse(
            stream.chunks,
            headers={
                "Content-Type": stream.content_type,
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
            },
            background=BackgroundTask(stream.close),
        )
    return JSONResponse(content=result.payload, status_code=result.status_code)


@router.post(
    "/chat",
    response_class=JSONResponse,
    responses=_CHAT_RESPONSES,
)
def chat(
    req: ChatRequest,
    query: ChatQuery = Depends(),
    gateway: ChatGateway = Depends(get_chat_gateway),
) -> Response:
    # 1) Forward (msg, chatId) to the orchestrator
    # 2) Return its JSON payload or stream with the status it chose
    return to_response(gateway.handle(req.msg, query.chatId))
