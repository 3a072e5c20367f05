"""
Identity service - registration, email verification and login.
"""

import logging

from sqlalchemy.exc import IntegrityError

from aubazaar.config import Settings
from aubazaar.core.exceptions import Conflict, InvalidInput, Unauthorized
from aubazaar.core.security import (
    create_access_token,
    generate_verification_token,
    hash_password,
    verify_password,
)
from aubazaar.db.models.user import User
from aubazaar.db.repositories.user_repository import UserRepository
from aubazaar.schemas.auth import LoginResponse, RegisterRequest, TokenClaims
from aubazaar.schemas.user import UserPublic

logger = logging.getLogger(__name__)


def is_institutional_email(email: str, domains: list[str]) -> bool:
    """True if the address belongs to one of the institutional domains."""
    email = email.strip().lower()
    return any(email.endswith("@" + d.strip().lower()) for d in domains)


class AuthService:
    def __init__(self, user_repo: UserRepository, settings: Settings):
        self.user_repo = user_repo
        self.settings = settings

    async def register(self, data: RegisterRequest) -> User:
        """Create an unverified account and emit its verification token."""
        email = data.email.lower()
        if not is_institutional_email(email, self.settings.institutional_domains):
            raise InvalidInput("Please use your Africa University email address")
        if await self.user_repo.get_by_email(email):
            raise Conflict("Email already registered")

        token = generate_verification_token()
        user = User(
            email=email,
            hashed_password=hash_password(data.password),
            full_name=data.full_name,
            role=data.role,
            department=data.department,
            phone=data.phone,
            verification_token=token,
        )
        try:
            user = await self.user_repo.add(user)
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise Conflict("Email already registered")

        # Out-of-band channel: a mail sender would deliver this link
        logger.info("Verification token for %s: %s", email, token)
        return user

    async def verify_email(self, token: str) -> User:
        user = await self.user_repo.get_by_verification_token(token) if token else None
        if not user:
            raise InvalidInput("Invalid or already used verification token")
        user.email_verified = True
        user.verification_token = None
        user = await self.user_repo.save(user)
        logger.info("Email verified for user id=%s", user.id)
        return user

    async def login(self, email: str, password: str) -> LoginResponse:
        user = await self.user_repo.get_by_email(email.strip().lower())
        if not user or not verify_password(password, user.hashed_password):
            raise Unauthorized("Invalid credentials")
        if not user.email_verified:
            raise Unauthorized("Please verify your email before logging in")

        claims = TokenClaims(id=user.id, email=user.email, role=user.role)
        token = create_access_token(claims, self.settings)
        return LoginResponse(token=token, user=UserPublic.model_validate(user))
