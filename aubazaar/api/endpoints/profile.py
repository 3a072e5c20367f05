"""
Profile endpoints - the caller's own profile and sparse multipart updates.
"""

from fastapi import APIRouter, File, Form, UploadFile

from aubazaar.core.dependencies import Context, CurrentIdentity
from aubazaar.db.repositories.listing_repository import ListingRepository
from aubazaar.db.repositories.user_repository import UserRepository
from aubazaar.db.session import DbSession
from aubazaar.schemas.user import ProfileUpdate
from aubazaar.services.profile_service import ProfileService

router = APIRouter()


def _get_profile_service(session: DbSession, ctx: Context) -> ProfileService:
    return ProfileService(UserRepository(session), ListingRepository(session), ctx.media)


@router.get("")
async def get_profile(session: DbSession, ctx: Context, identity: CurrentIdentity):
    user, listings = await _get_profile_service(session, ctx).get_profile(identity.id)
    return {"user": user, "listings": listings}


@router.put("")
async def update_profile(
    session: DbSession,
    ctx: Context,
    identity: CurrentIdentity,
    full_name: str | None = Form(None, max_length=255),
    department: str | None = Form(None, max_length=255),
    phone: str | None = Form(None, max_length=50),
    graduation_year: int | None = Form(None, ge=1950, le=2100),
    avatar: UploadFile | None = File(None),
):
    """Update only the supplied fields; an avatar image replaces the current one."""
    if avatar is not None and not avatar.filename:
        avatar = None  # empty file input
    data = ProfileUpdate(
        full_name=full_name,
        department=department,
        phone=phone,
        graduation_year=graduation_year,
    )
    user = await _get_profile_service(session, ctx).update_profile(identity.id, data, avatar)
    return {"message": "Profile updated successfully!", "user": user}
