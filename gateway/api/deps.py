# Role: Process-wide singletons for the HTTP layer. Settings are read once; the gateway (and its pooled
# requests.Session) is shared by all calls. Tests swap these out through app.dependency_overrides.

from __future__ import annotations

from functools import lru_cache

from gateway.config import LangflowSettings, load_settings
from gateway.core.chat_gateway import ChatGateway


@lru_cache
def get_settings() -> LangflowSettings:
    return load_settings()


@lru_cache
def get_chat_gateway() -> ChatGateway:
    return ChatGateway(get_settings())
