# Role: Upstream adapter for the Langflow run API. Performs the outbound POST and classifies the reply into
# exactly one tagged result (streaming / buffered / rejected / failed) from the status and content type alone,
# before any body is read. Streaming bodies are handed over unread; buffered bodies are fully parsed here.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Union

import requests

from gateway.config import LangflowSettings
from gateway.models.langflow import LangflowRunRequest

logger = logging.getLogger(__name__)

STREAMING_MEDIA_TYPES = ("text/event-stream", "application/stream")


@dataclass(frozen=True)
class StreamingReply:
    chunks: Iterator[bytes]
    content_type: str
    close: Callable[[], None]


@dataclass(frozen=True)
class BufferedReply:
    payload: Any


@dataclass(frozen=True)
class UpstreamRejected:
    status_code: int
    reason: str


@dataclass(frozen=True)
class TransportFailed:
    message: str


TransportResult = Union[StreamingReply, BufferedReply, UpstreamRejected, TransportFailed]


def is_streaming_content_type(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    lowered = content_type.lower()
    return any(media_type in lowered for media_type in STREAMING_MEDIA_TYPES)


class LangflowClient:
    def __init__(self, settings: LangflowSettings, http: Optional[requests.Session] = None) -> None:
        # Key line: the HTTP session is injectable so tests can hand in a fake upstream.
        self.settings = settings
        self.http = http or requests.Session()

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.api_token}",
        }

    def send(self, run_request: LangflowRunRequest) -> TransportResult:
        # 1) POST with stream=True so nothing past the headers is read yet
        # 2) Non-2xx -> UpstreamRejected
        # 3) Streaming content type -> StreamingReply (body left open for the relay)
        # 4) Otherwise read + parse JSON -> BufferedReply
        url = self.settings.run_url
        payload = run_request.model_dump()
        logger.debug("POST %s payload=%s", url, payload)

        try:
            r = self.http.post(
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.settings.timeout_seconds,
                stream=True,
            )
        except requests.RequestException as e:
            logger.error("Langflow request failed: %s", e)
            return TransportFailed(message=f"Langflow request failed: {e}")

        # Only 2xx counts as success; unfollowed 3xx replies are rejections too.
        if not 200 <= r.status_code < 300:
            logger.error("Langflow API error: %s %s", r.status_code, r.reason)
            r.close()
            return UpstreamRejected(status_code=r.status_code, reason=r.reason or "")

        content_type = r.headers.get("content-type") or ""
        if is_streaming_content_type(content_type):
            logger.debug("Langflow replied with a stream (content-type=%s)", content_type)
            return StreamingReply(
                chunks=_relay_chunks(r),
                content_type=content_type,
                close=r.close,
            )

        logger.debug("Langflow replied with a buffered body (content-type=%s)", content_type)
        try:
            return BufferedReply(payload=r.json())
        except ValueError as e:
            # requests' JSONDecodeError is a ValueError too, so malformed JSON lands here
            logger.error("Bad Langflow payload: %s", e)
            return TransportFailed(message=f"Bad Langflow payload: {e}")
        except requests.RequestException as e:
            logger.error("Langflow response body could not be read: %s", e)
            return TransportFailed(message=f"Langflow response body could not be read: {e}")
        finally:
            r.close()


def _relay_chunks(r: requests.Response) -> Iterator[bytes]:
    # Role: pull upstream bytes one chunk at a time (chunk_size=None yields data as it arrives).
    # A mid-stream upstream failure ends the relay; the upstream response is always closed.
    try:
        for chunk in r.iter_content(chunk_size=None):
            if chunk:
                yield chunk
    except requests.RequestException as e:
        logger.warning("Langflow stream interrupted: %s", e)
    finally:
        r.close()
