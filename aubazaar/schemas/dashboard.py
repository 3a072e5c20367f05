"""Dashboard statistics for the signed-in seller."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    activeListings: int
    soldListings: int
    totalViews: int
    unreadMessages: int
