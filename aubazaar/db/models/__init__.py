from aubazaar.db.models.category import Category
from aubazaar.db.models.listing import Listing, ListingCondition, ListingStatus
from aubazaar.db.models.message import Message
from aubazaar.db.models.user import User

__all__ = ["User", "Listing", "ListingCondition", "ListingStatus", "Category", "Message"]
