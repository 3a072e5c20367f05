from fastapi import APIRouter

from aubazaar.core.dependencies import CurrentIdentity
from aubazaar.db.repositories.listing_repository import ListingRepository
from aubazaar.db.repositories.message_repository import MessageRepository
from aubazaar.db.session import DbSession
from aubazaar.schemas.dashboard import DashboardStats
from aubazaar.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def stats(session: DbSession, identity: CurrentIdentity):
    svc = DashboardService(ListingRepository(session), MessageRepository(session))
    return await svc.stats(identity.id)
