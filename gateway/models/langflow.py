# Role: Langflow run API contract. LangflowRunRequest is what we send; the LangflowResponse tree mirrors what
# the flow returns. Every response field is optional because the upstream does not reliably populate them.
# The gateway never parses replies into these models (payloads are relayed verbatim); they document the shape.

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class LangflowRunRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    input_value: str
    output_type: Literal["chat"] = "chat"
    input_type: Literal["chat"] = "chat"
    session_id: str


class _LooseModel(BaseModel):
    # Key line: unknown upstream fields are kept, not rejected.
    model_config = ConfigDict(extra="allow")


class Inputs(_LooseModel):
    input_value: Optional[str] = None


class Source(_LooseModel):
    id: Optional[str] = None
    display_name: Optional[str] = None
    source: Optional[str] = None


class Properties(_LooseModel):
    text_color: Optional[str] = None
    background_color: Optional[str] = None
    edited: Optional[bool] = None
    source: Optional[Source] = None
    icon: Optional[str] = None
    allow_markdown: Optional[bool] = None
    positive_feedback: Optional[Any] = None
    state: Optional[str] = None
    targets: Optional[List[Any]] = None


class ContentBlockHeader(_LooseModel):
    title: Optional[str] = None
    icon: Optional[str] = None


class ToolInput(_LooseModel):
    search_phrase: Optional[str] = None
    limit: Optional[int] = None


class ContentOutputItem(_LooseModel):
    type: Optional[str] = None
    text: Optional[str] = None


class ContentOutput(_LooseModel):
    meta: Optional[Any] = None
    content: Optional[List[ContentOutputItem]] = None
    isError: Optional[bool] = None


class ContentBlockContent(_LooseModel):
    type: Optional[str] = None
    duration: Optional[float] = None
    header: Optional[ContentBlockHeader] = None
    text: Optional[str] = None
    name: Optional[str] = None
    tool_input: Optional[ToolInput] = None
    output: Optional[ContentOutput] = None
    error: Optional[Any] = None


class ContentBlock(_LooseModel):
    title: Optional[str] = None
    contents: Optional[List[ContentBlockContent]] = None
    allow_markdown: Optional[bool] = None
    media_url: Optional[str] = None


class ResultMessage(_LooseModel):
    text_key: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    default_value: Optional[str] = None
    text: Optional[str] = None
    sender: Optional[str] = None
    sender_name: Optional[str] = None
    files: Optional[List[Any]] = None
    session_id: Optional[str] = None
    timestamp: Optional[str] = None
    flow_id: Optional[str] = None
    error: Optional[bool] = None
    edit: Optional[bool] = None
    properties: Optional[Properties] = None
    category: Optional[str] = None
    content_blocks: Optional[List[ContentBlock]] = None
    id: Optional[str] = None


class Results(_LooseModel):
    message: Optional[ResultMessage] = None


class Artifacts(_LooseModel):
    message: Optional[str] = None
    sender: Optional[str] = None
    sender_name: Optional[str] = None
    files: Optional[List[Any]] = None
    type: Optional[str] = None


class OutputsMessage(_LooseModel):
    message: Optional[str] = None
    type: Optional[str] = None


class ComponentOutputs(_LooseModel):
    message: Optional[OutputsMessage] = None


class Logs(_LooseModel):
    message: Optional[List[Any]] = None


class MessageElement(_LooseModel):
    message: Optional[str] = None
    sender: Optional[str] = None
    sender_name: Optional[str] = None
    session_id: Optional[str] = None
    stream_url: Optional[str] = None
    component_id: Optional[str] = None
    files: Optional[List[Any]] = None
    type: Optional[str] = None


class ComponentOutput(_LooseModel):
    results: Optional[Results] = None
    artifacts: Optional[Artifacts] = None
    outputs: Optional[ComponentOutputs] = None
    logs: Optional[Logs] = None
    messages: Optional[List[MessageElement]] = None
    timedelta: Optional[Any] = None
    duration: Optional[Any] = None
    component_display_name: Optional[str] = None
    component_id: Optional[str] = None
    used_frozen_result: Optional[bool] = None


class RunOutput(_LooseModel):
    inputs: Optional[Inputs] = None
    outputs: Optional[List[ComponentOutput]] = None


class LangflowResponse(_LooseModel):
    session_id: Optional[str] = Field(default=None, description="Session ID for the chat conversation")
    outputs: Optional[List[RunOutput]] = Field(
        default=None,
        description="Outputs from the Langflow API containing the full response structure",
    )
