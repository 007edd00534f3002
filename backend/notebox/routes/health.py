"""
Notebox Backend - Health Check Route
======================================

What:  Unauthenticated liveness probe for Docker and load balancers.
How:   Always answers {"status": "healthy"}. The process only starts serving
       after the database bootstrap succeeded, so reaching this handler at
       all means startup completed.
"""

from fastapi import APIRouter

from notebox.schemas.note import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy")
