# Role: Liveness endpoints. No upstream calls.

from fastapi import APIRouter

from gateway.models.chat import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/", response_model=HealthResponse)
def root() -> HealthResponse:
    return HealthResponse(message="Hello Hono!")


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}
