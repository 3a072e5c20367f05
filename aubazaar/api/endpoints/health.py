"""
Health checks - liveness for load balancers, readiness against the store.
"""

from fastapi import APIRouter
from sqlalchemy import text

from aubazaar.db.session import DbSession

router = APIRouter()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "OK", "message": "AUBazaar API is running"}


@router.get("/ready")
async def ready(session: DbSession):
    """Readiness: can the store answer a query?"""
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}
