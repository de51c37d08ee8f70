# Role: Langflow gateway settings. Reads .env into the environment, derives the DEBUG log flag,
# and builds the immutable LangflowSettings that the transport and gateway receive explicitly.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

DEBUG: bool = False

DEFAULT_BASE_URL = "https://api.langflow.astra.datastax.com"
DEFAULT_SESSION_ID = "user_1"
DEFAULT_TIMEOUT_SECONDS = 60.0


class ConfigError(RuntimeError):
    pass


def load_env() -> None:
    """
    Pull .env into os.environ and refresh the DEBUG flag from it.
    Safe to call more than once; later calls pick up changed DEBUG values.
    """
    global DEBUG
    load_dotenv()
    # DEBUG=1|true|yes turns on debug-level gateway logs.
    DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class LangflowSettings:
    api_token: str
    base_url: str = DEFAULT_BASE_URL
    flow_id: str = ""
    endpoint_id: str = ""
    default_session_id: str = DEFAULT_SESSION_ID
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    cors_allow_origins: Tuple[str, ...] = ("*",)

    @property
    def run_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/lf/{self.endpoint_id}/api/v1/run/{self.flow_id}"


def _parse_timeout(raw: Optional[str]) -> float:
    if not raw or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"LANGFLOW_TIMEOUT_SECONDS must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigError("LANGFLOW_TIMEOUT_SECONDS must be > 0")
    return value


def _parse_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ("*",)
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


def load_settings() -> LangflowSettings:
    # 1) Token is mandatory: the process must not start without it
    # 2) Everything else has a default (empty ids are reported by the caller, not rejected)
    token = (os.getenv("LANGFLOW_API_TOKEN") or "").strip()
    if not token:
        raise ConfigError("LANGFLOW_API_TOKEN environment variable is required")

    return LangflowSettings(
        api_token=token,
        base_url=(os.getenv("LANGFLOW_BASE_URL") or DEFAULT_BASE_URL).strip(),
        flow_id=(os.getenv("LANGFLOW_FLOW_ID") or "").strip(),
        endpoint_id=(os.getenv("LANGFLOW_ENDPOINT_ID") or "").strip(),
        default_session_id=(os.getenv("LANGFLOW_DEFAULT_SESSION_ID") or DEFAULT_SESSION_ID).strip(),
        timeout_seconds=_parse_timeout(os.getenv("LANGFLOW_TIMEOUT_SECONDS")),
        cors_allow_origins=_parse_origins(os.getenv("CORS_ALLOW_ORIGINS")),
    )
