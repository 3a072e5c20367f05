"""Dashboard service - seller statistics."""

from aubazaar.db.models.listing import ListingStatus
from aubazaar.db.repositories.listing_repository import ListingRepository
from aubazaar.db.repositories.message_repository import MessageRepository
from aubazaar.schemas.dashboard import DashboardStats


class DashboardService:
    def __init__(self, listing_repo: ListingRepository, message_repo: MessageRepository):
        self.listing_repo = listing_repo
        self.message_repo = message_repo

    async def stats(self, user_id: int) -> DashboardStats:
        return DashboardStats(
            activeListings=await self.listing_repo.count_for_owner(user_id, ListingStatus.ACTIVE),
            soldListings=await self.listing_repo.count_for_owner(user_id, ListingStatus.SOLD),
            totalViews=await self.listing_repo.total_views_for_owner(user_id),
            unreadMessages=await self.message_repo.count_unread(user_id),
        )
