from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from usermanagement.api import deps
from usermanagement.services.health import ping, online_since, uptime_seconds

router = APIRouter(prefix="/health", tags=["health"])

@router.get("/liveness")
async def liveness():
    """Verify whether the API is ready to receive traffic."""
    return {"status": "ok"}

@router.get("/readiness")
async def readiness(session: AsyncSession = Depends(deps.get_db)):
    """Verify whether the API is ready to process traffic."""
    if await ping(session):
        return {"status": "ready"}
    return {"status": "degraded"}

@router.get("/status")
async def api_status(session: AsyncSession = Depends(deps.get_db)):
    """Database reachability plus process uptime."""
    db_ok = await ping(session)
    return {
        "dbStatus": "OK" if db_ok else "FAIL",
        "onlineSince": online_since().isoformat(),
        "uptimeSeconds": uptime_seconds(),
    }
