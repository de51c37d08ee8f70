# Role: FastAPI app bootstrap. Loads environment config early (refusing to start without a Langflow token),
# registers routers, maps validation failures to 400, and exposes CORS, OpenAPI and Swagger UI.

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

import gateway.config
gateway.config.load_env()

from gateway.api.chat import router as chat_router
from gateway.api.deps import get_settings
from gateway.api.health import router as health_router
from gateway.api.middleware import RequestLoggingMiddleware
from gateway.logging_config import setup_logging
from gateway.models.chat import ChatError

setup_logging()
logger = logging.getLogger(__name__)

# Key line: fail fast at import so the server never starts without credentials.
settings = get_settings()
if not settings.flow_id or not settings.endpoint_id:
    logger.warning("LANGFLOW_FLOW_ID / LANGFLOW_ENDPOINT_ID not set; upstream URL is %s", settings.run_url)

app = FastAPI(
    title="ZapGap Chat API",
    version="1.0.0",
    description="An API server that integrates with Langflow for chat functionality",
    servers=[{"url": "http://localhost:8000", "description": "Development server"}],
    openapi_url="/openapi.json",
    docs_url="/swagger",
    redoc_url=None,
)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allow_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(health_router)
app.include_router(chat_router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # 1) Body problems get the "msg" wording clients already know
    # 2) Anything else (query params) gets a generic wording
    errors = exc.errors()
    in_body = any((err.get("loc") or ("",))[0] == "body" for err in errors)
    error = 'Missing or invalid "msg" field in request body' if in_body else "Invalid request parameters"
    detail = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}" for err in errors
    )
    logger.info("Rejected request to %s: %s", request.url.path, detail)
    body = ChatError(error=error, message=detail or None)
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


@app.get("/docs", include_in_schema=False)
def docs_redirect() -> RedirectResponse:
    return RedirectResponse(url="/swagger")
