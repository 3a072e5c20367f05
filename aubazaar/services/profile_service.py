"""
Profile service - a user's own profile, their listings and sparse profile updates.
"""

import logging

from fastapi import UploadFile

from aubazaar.core.exceptions import InvalidInput, NotFound
from aubazaar.db.repositories.listing_repository import ListingRepository
from aubazaar.db.repositories.user_repository import UserRepository
from aubazaar.schemas.listing import ListingResponse
from aubazaar.schemas.user import ProfileUpdate, ProfileUser
from aubazaar.services.media import MediaStore

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, user_repo: UserRepository, listing_repo: ListingRepository, media: MediaStore):
        self.user_repo = user_repo
        self.listing_repo = listing_repo
        self.media = media

    async def get_profile(self, user_id: int) -> tuple[ProfileUser, list[ListingResponse]]:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        listings = await self.listing_repo.list_for_owner(user_id)
        return (
            ProfileUser.model_validate(user),
            [ListingResponse.model_validate(l) for l in listings],
        )

    async def update_profile(
        self, user_id: int, data: ProfileUpdate, avatar: UploadFile | None = None
    ) -> ProfileUser:
        """Apply only the supplied fields. An avatar is stored through media intake first."""
        fields = data.supplied()
        if avatar is not None:
            fields["avatar_url"] = await self.media.save(avatar, field="avatar")
        if not fields:
            raise InvalidInput("No fields to update")

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        for name, value in fields.items():
            setattr(user, name, value)
        user = await self.user_repo.save(user)
        logger.info("Profile id=%s updated: %s", user_id, ", ".join(sorted(fields)))
        return ProfileUser.model_validate(user)
