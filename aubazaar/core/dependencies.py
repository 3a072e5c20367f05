"""
FastAPI dependencies - application context and the bearer-token auth gate.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from aubazaar.core.context import AppContext
from aubazaar.core.exceptions import Forbidden, Unauthorized
from aubazaar.core.security import decode_access_token
from aubazaar.schemas.auth import TokenClaims

security = HTTPBearer(auto_error=False)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


Context = Annotated[AppContext, Depends(get_context)]


async def get_current_identity(
    ctx: Context,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Resolve the bearer token to an identity claim. 401 if missing, 403 if invalid or expired."""
    if not credentials:
        raise Unauthorized("Access token required")
    claims = decode_access_token(credentials.credentials, ctx.settings)
    if claims is None:
        raise Forbidden("Invalid or expired token")
    return claims


CurrentIdentity = Annotated[TokenClaims, Depends(get_current_identity)]
