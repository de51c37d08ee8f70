# Role: Reduces the nested Langflow response to one display message. The flow nests its answer in one of
# three places depending on component configuration, so candidates are tried in order and the first
# non-empty string wins. Never raises: any navigation problem just means "try the next candidate".

from __future__ import annotations

from typing import Any, Optional, Tuple

from gateway.utils.navigation import MISSING, PathStep, dig_text

NO_MESSAGE_FALLBACK = "No message found in response"

_FIRST_COMPONENT: Tuple[PathStep, ...] = ("outputs", 0, "outputs", 0)

# Ordered: full structured result, then sender artifact, then the plain message log.
MESSAGE_PATHS: Tuple[Tuple[PathStep, ...], ...] = (
    _FIRST_COMPONENT + ("results", "message", "text"),
    _FIRST_COMPONENT + ("artifacts", "message"),
    _FIRST_COMPONENT + ("messages", 0, "message"),
)


def extract_message(response: Any) -> str:
    for path in MESSAGE_PATHS:
        text = dig_text(response, *path)
        if text is not MISSING:
            return text
    return NO_MESSAGE_FALLBACK


def extract_session_id(response: Any) -> Optional[str]:
    session_id = dig_text(response, "session_id")
    return None if session_id is MISSING else session_id
