# Repository pattern: data access lives here, business rules in services

from aubazaar.db.repositories.category_repository import CategoryRepository
from aubazaar.db.repositories.listing_repository import ListingFilters, ListingRepository
from aubazaar.db.repositories.message_repository import MessageRepository
from aubazaar.db.repositories.user_repository import UserRepository

__all__ = [
    "UserRepository",
    "ListingRepository",
    "ListingFilters",
    "CategoryRepository",
    "MessageRepository",
]
