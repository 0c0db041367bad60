"""
Bearer credential dependency for route protection.
"""
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from authvault.dependencies.services import get_auth_service
from authvault.schemas.auth import IdentityResponse
from authvault.services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    auth_service: AuthService = Depends(get_auth_service),
) -> IdentityResponse:
    """
    Dependency to get the current authenticated user from the bearer token.

    Token is passed as header: Authorization: Bearer xxx

    Raises:
        HTTPException 401: If token is missing, invalid or expired
        HTTPException 401: If user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    try:
        payload = request.app.state.issuer.decode(credentials.credentials)
    except JWTError:
        raise credentials_exception

    identity_id = payload.get("sub")
    if identity_id is None:
        raise credentials_exception

    user = await auth_service.get_identity(identity_id)
    if user is None:
        raise credentials_exception

    return user


# Type alias for cleaner route signatures
CurrentUser = Annotated[IdentityResponse, Depends(get_current_user)]
