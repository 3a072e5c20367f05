"""
Auth endpoints - registration, email verification and login.
"""

from fastapi import APIRouter, Query, status

from aubazaar.core.dependencies import Context
from aubazaar.db.repositories.user_repository import UserRepository
from aubazaar.db.session import DbSession
from aubazaar.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from aubazaar.services.auth_service import AuthService

router = APIRouter()


def _get_auth_service(session: DbSession, ctx: Context) -> AuthService:
    return AuthService(UserRepository(session), ctx.settings)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(session: DbSession, ctx: Context, data: RegisterRequest):
    """Create an unverified account. The verification token goes out of band."""
    user = await _get_auth_service(session, ctx).register(data)
    return RegisterResponse(
        message="Registration successful! Please check your email to verify your account.",
        userId=user.id,
    )


@router.get("/verify-email")
async def verify_email(session: DbSession, ctx: Context, token: str = Query(..., min_length=1)):
    await _get_auth_service(session, ctx).verify_email(token)
    return {"message": "Email verified. You can now log in."}


@router.post("/login", response_model=LoginResponse)
async def login(session: DbSession, ctx: Context, data: LoginRequest):
    """Authenticate and return a bearer token plus the sanitized user."""
    return await _get_auth_service(session, ctx).login(data.email, data.password)
