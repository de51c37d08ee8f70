# Role: Maps an inbound chat message (+ optional caller session id) into the Langflow run request.
# Pure function: same inputs always give the same request.

from __future__ import annotations

from typing import Optional

from gateway.config import DEFAULT_SESSION_ID
from gateway.models.langflow import LangflowRunRequest


def build_run_request(
    message: str,
    session_id: Optional[str] = None,
    *,
    default_session_id: str = DEFAULT_SESSION_ID,
) -> LangflowRunRequest:
    # Key line: an absent or empty caller session id falls back to the fixed default.
    return LangflowRunRequest(
        input_value=message,
        session_id=session_id or default_session_id,
    )
